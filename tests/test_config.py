"""
Tests for configuration loading.
"""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from monster_wrangler.config import WranglerConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("MONSTER_WRANGLER_"):
            monkeypatch.delenv(key)


class TestWranglerConfig:
    """Tests for the configuration model."""

    def test_defaults(self):
        config = WranglerConfig()
        assert config.catalog_paths == []
        assert config.log_level == "WARNING"
        assert config.group_size == 5
        assert config.walk_length == 5
        assert (config.walk_min_distance, config.walk_max_distance) == (1, 10)
        assert config.default_randomness == 1

    def test_log_level_normalized(self):
        assert WranglerConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            WranglerConfig(log_level="LOUD")

    def test_walk_range_must_be_nonempty(self):
        with pytest.raises(ValidationError):
            WranglerConfig(walk_min_distance=5, walk_max_distance=5)

    def test_randomness_bounds(self):
        with pytest.raises(ValidationError):
            WranglerConfig(default_randomness=6)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MONSTER_WRANGLER_GROUP_SIZE", "7")
        monkeypatch.setenv("MONSTER_WRANGLER_WALK_MAX_DISTANCE", "4")
        monkeypatch.setenv("MONSTER_WRANGLER_LOG_LEVEL", "info")
        monkeypatch.setenv("MONSTER_WRANGLER_CATALOG", os.pathsep.join(["a.json", "b"]))
        config = load_config(use_dotenv=False)
        assert config.group_size == 7
        assert config.walk_max_distance == 4
        assert config.log_level == "INFO"
        assert config.catalog_paths == [Path("a.json"), Path("b")]

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("MONSTER_WRANGLER_GROUP_SIZE", "7")
        config = load_config({"group_size": 3, "walk_length": None}, use_dotenv=False)
        assert config.group_size == 3
        assert config.walk_length == 5

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("MONSTER_WRANGLER_RANDOMNESS", "lots")
        with pytest.raises(ValidationError):
            load_config(use_dotenv=False)

    def test_walk_range_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONSTER_WRANGLER_WALK_MIN_DISTANCE", "2")
        monkeypatch.setenv("MONSTER_WRANGLER_WALK_MAX_DISTANCE", "5")
        config = load_config(use_dotenv=False)
        assert (config.walk_min_distance, config.walk_max_distance) == (2, 5)

    def test_walk_range_from_environment_validated(self, monkeypatch):
        monkeypatch.setenv("MONSTER_WRANGLER_WALK_MIN_DISTANCE", "4")
        monkeypatch.setenv("MONSTER_WRANGLER_WALK_MAX_DISTANCE", "4")
        with pytest.raises(ValidationError):
            load_config(use_dotenv=False)
