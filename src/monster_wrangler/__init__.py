"""
Monster Wrangler - themed monster groups for game masters, built on an
affinity graph between catalog entries.
"""

from .choices import Choices
from .exceptions import (
    CatalogError,
    DuplicateMonsterError,
    EmptyResultError,
    NoValidNeighborError,
    WranglerError,
)
from .graph import AffinityGraph, Edge, StrengthBreakdown, build_graph, calculate_strength
from .loader import load_catalog, load_default_catalog
from .models import Monster, RawMonster, StatBlock, WILDCARD
from .wrangler import MonsterWrangler

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("monster-wrangler")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    "AffinityGraph",
    "CatalogError",
    "Choices",
    "DuplicateMonsterError",
    "Edge",
    "EmptyResultError",
    "Monster",
    "MonsterWrangler",
    "NoValidNeighborError",
    "RawMonster",
    "StatBlock",
    "StrengthBreakdown",
    "WILDCARD",
    "WranglerError",
    "build_graph",
    "calculate_strength",
    "load_catalog",
    "load_default_catalog",
]
