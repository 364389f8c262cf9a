"""
Catalog loader: reads JSON/YAML monster files into validated ``Monster``s.

Expected file structure (JSON shown, YAML equivalent accepted)::

    [
      {
        "name": "Goblin",
        "tags": "humanoid, raider",
        "level": "1",
        "biome": "forest, cave",
        "alignment": "C",
        "move": "near",
        "attack": "1 club +0 (1d4)",
        "page": "227",
        "statblock": "AC 11, HP 5, ATK 1 club +0 (1d4), MV near, S +0, D +1, ...",
        "source": "core"
      }
    ]

A top-level object with a ``monsters`` list is accepted as well. A level of
``*`` maps to ``DEFAULT_LEVEL``. Records that fail validation are logged
and skipped; ids are assigned sequentially over the accepted records.
"""

import json
import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import CatalogError
from .models import Monster, RawMonster, StatBlock, WILDCARD

logger = logging.getLogger("monster-wrangler")

DEFAULT_LEVEL = 10
SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}
BUNDLED_CATALOG = "catalog.json"


def _split(value: str) -> tuple[str, ...]:
    return tuple(token.strip() for token in value.split(",") if token.strip())


def _as_text(value: Any) -> Any:
    # YAML turns levels and page numbers into ints and empty keys into None
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _parse_level(raw: str) -> int:
    level = raw.strip()
    if level == WILDCARD:
        return DEFAULT_LEVEL
    try:
        parsed = int(level)
    except ValueError:
        raise CatalogError(f"Level must be an integer or '{WILDCARD}', got {raw!r}") from None
    if parsed < 0:
        raise CatalogError(f"Level must not be negative, got {parsed}")
    return parsed


def convert_monster(raw: RawMonster, monster_id: int) -> Monster:
    """Convert one raw record into a ``Monster`` with the given id.

    Raises:
        CatalogError: If the level or stat block cannot be parsed.
    """
    stats = StatBlock.parse(raw.statblock) if raw.statblock.strip() else None
    return Monster(
        id=monster_id,
        name=raw.name.strip(),
        tags=_split(raw.tags),
        level=_parse_level(raw.level),
        biomes=_split(raw.biome),
        alignment=raw.alignment.strip(),
        source=raw.source.strip(),
        page=raw.page.strip(),
        move_amount=raw.move_amount.strip(),
        attack=raw.attack.strip(),
        statblock=raw.statblock.strip(),
        stats=stats,
    )


def convert_to_monsters(raw_monsters: Iterable[RawMonster]) -> list[Monster]:
    """Convert raw records, skipping malformed ones, with ids 0..n-1."""
    monsters: list[Monster] = []
    for raw in raw_monsters:
        try:
            monsters.append(convert_monster(raw, len(monsters)))
        except CatalogError as e:
            logger.warning(f"Skipping monster '{raw.name}': {e}")
    return monsters


def parse_raw_monsters(data: Any, origin: str = "<data>") -> list[RawMonster]:
    """Validate decoded file content into ``RawMonster`` records.

    Raises:
        CatalogError: If the content is not a list of records.
    """
    if isinstance(data, dict):
        data = data.get("monsters")
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {origin} must be a list of monsters or an object with a 'monsters' list")

    raw_monsters: list[RawMonster] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping record {index} in {origin}: not an object")
            continue
        item = {key: _as_text(value) for key, value in item.items()}
        try:
            raw_monsters.append(RawMonster.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Invalid monster record {index} in {origin}: {e}")
    return raw_monsters


def load_raw_monsters(path: Path | str) -> list[RawMonster]:
    """Read one catalog file.

    Raises:
        CatalogError: If the file is missing, has an unsupported extension,
            or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise CatalogError(
            f"Unsupported file format: {suffix}. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    try:
        raw_content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Failed to read file: {e}") from e

    try:
        if suffix == ".json":
            data = json.loads(raw_content)
        else:
            data = yaml.safe_load(raw_content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to parse {path}: {e}") from e

    raw_monsters = parse_raw_monsters(data, str(path))
    logger.debug(f"Read {len(raw_monsters)} monster records from {path}")
    return raw_monsters


def _expand(paths: Iterable[Path | str]) -> list[Path]:
    files: list[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            files.extend(
                sorted(p for p in path.iterdir() if p.suffix.lower() in SUPPORTED_EXTENSIONS)
            )
        else:
            files.append(path)
    return files


def load_catalog(paths: Iterable[Path | str]) -> list[Monster]:
    """Load and convert every catalog file, in order.

    Directories are expanded to their supported files, sorted by name.
    """
    raw_monsters: list[RawMonster] = []
    for path in _expand(paths):
        raw_monsters.extend(load_raw_monsters(path))
    monsters = convert_to_monsters(raw_monsters)
    logger.info(f"Loaded {len(monsters)} monsters ({len(raw_monsters) - len(monsters)} skipped)")
    return monsters


def load_default_catalog() -> list[Monster]:
    """Load the catalog bundled with the package."""
    resource = resources.files("monster_wrangler").joinpath("data").joinpath(BUNDLED_CATALOG)
    with resources.as_file(resource) as path:
        return load_catalog([path])
