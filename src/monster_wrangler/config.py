"""
Configuration for the monster wrangler CLI.

Values come from the environment (a ``.env`` file is honored) and can be
overridden by command-line flags:

- MONSTER_WRANGLER_CATALOG: catalog files/directories, separated by os.pathsep
- MONSTER_WRANGLER_LOG_LEVEL: logging level name
- MONSTER_WRANGLER_GROUP_SIZE: neighbors added to a generated group
- MONSTER_WRANGLER_WALK_LENGTH: steps taken by a walk
- MONSTER_WRANGLER_WALK_MIN_DISTANCE: smallest walk rank offset
- MONSTER_WRANGLER_WALK_MAX_DISTANCE: exclusive upper bound of walk rank offsets
- MONSTER_WRANGLER_RANDOMNESS: default randomness (1-5)
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger("monster-wrangler")

ENV_PREFIX = "MONSTER_WRANGLER_"


class WranglerConfig(BaseModel):
    """Settings for loading the catalog and running selections."""

    catalog_paths: list[Path] = Field(
        default_factory=list,
        description="Catalog files or directories; empty uses the bundled catalog",
    )
    log_level: str = Field(default="WARNING", description="Logging level name")
    group_size: int = Field(default=5, ge=1, description="Neighbors added to a generated group")
    walk_length: int = Field(default=5, ge=1, description="Steps taken by a walk")
    walk_min_distance: int = Field(default=1, ge=1, description="Smallest walk rank offset")
    walk_max_distance: int = Field(default=10, ge=2, description="Exclusive upper bound of walk rank offsets")
    default_randomness: int = Field(default=1, ge=1, le=5, description="Randomness used when none is entered")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_walk_range(self) -> "WranglerConfig":
        if self.walk_max_distance <= self.walk_min_distance:
            raise ValueError(
                f"walk_max_distance ({self.walk_max_distance}) must be greater than "
                f"walk_min_distance ({self.walk_min_distance})"
            )
        return self


_ENV_FIELDS = {
    "CATALOG": "catalog_paths",
    "LOG_LEVEL": "log_level",
    "GROUP_SIZE": "group_size",
    "WALK_LENGTH": "walk_length",
    "WALK_MIN_DISTANCE": "walk_min_distance",
    "WALK_MAX_DISTANCE": "walk_max_distance",
    "RANDOMNESS": "default_randomness",
}


def load_config(overrides: dict[str, Any] | None = None, use_dotenv: bool = True) -> WranglerConfig:
    """Build the configuration from the environment plus explicit overrides.

    Args:
        overrides: Field values taking precedence over the environment;
            ``None`` values are ignored.
        use_dotenv: Whether to read a ``.env`` file first.

    Raises:
        pydantic.ValidationError: If a value is invalid.
    """
    if use_dotenv and load_dotenv():
        logger.debug("Loaded settings from .env")

    values: dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        raw = os.getenv(ENV_PREFIX + suffix)
        if not raw:
            continue
        if field_name == "catalog_paths":
            values[field_name] = [Path(part) for part in raw.split(os.pathsep) if part]
        else:
            values[field_name] = raw

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    return WranglerConfig.model_validate(values)
