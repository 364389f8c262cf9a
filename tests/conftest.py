"""
Pytest configuration and fixtures for monster-wrangler tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing monster_wrangler
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from monster_wrangler.graph import AffinityGraph  # noqa: E402
from monster_wrangler.models import Monster  # noqa: E402
from monster_wrangler.wrangler import MonsterWrangler  # noqa: E402


def make_monster(
    monster_id: int,
    name: str | None = None,
    level: int = 1,
    tags: tuple[str, ...] = (),
    biomes: tuple[str, ...] = (),
    alignment: str = "N",
    source: str = "core",
) -> Monster:
    return Monster(
        id=monster_id,
        name=name or f"Monster {monster_id}",
        level=level,
        tags=tags,
        biomes=biomes,
        alignment=alignment,
        source=source,
    )


@pytest.fixture
def monsters() -> list[Monster]:
    """Small catalog with known pairwise strengths.

    Sorted adjacency (neighbor id: strength):
        0 Goblin:      1:58, 3:33, 4:30, 2:18
        1 Goblin Boss: 0:58, 3:40, 2:25, 4:23
        2 Wolf:        1:25, 3:20, 0:18, 4:13
        3 Skeleton:    1:40, 0:33, 2:20, 4:13
        4 Merchant:    0:30, 1:23, 2:13, 3:13
        5 Sand Wyrm:   (none)
    """
    return [
        make_monster(0, "Goblin", 1, ("humanoid", "raider"), ("forest", "cave"), "C"),
        make_monster(1, "Goblin Boss", 2, ("humanoid", "raider", "leader"), ("forest", "cave"), "C"),
        make_monster(2, "Wolf", 2, ("beast", "pack"), ("forest", "mountain"), "N"),
        make_monster(3, "Skeleton", 2, ("undead",), ("ruins", "cave"), "C"),
        make_monster(4, "Wandering Merchant", 1, ("humanoid", "trader"), ("*",), "L", "custom"),
        make_monster(5, "Sand Wyrm", 7, ("beast",), ("desert",), "N", "custom"),
    ]


@pytest.fixture
def graph(monsters: list[Monster]) -> AffinityGraph:
    return AffinityGraph.build(monsters)


@pytest.fixture
def wrangler(graph: AffinityGraph) -> MonsterWrangler:
    return MonsterWrangler(graph)


@pytest.fixture
def monster_factory():
    return make_monster
