"""
Affinity graph between catalog monsters.

Every ordered pair of distinct monsters is scored once at construction time.
Pairs with a positive score become directed edges, and each monster's
outgoing edges are kept sorted by strength, strongest first. The graph is
read-only after construction.

Scoring terms (summed):
- level:     10 - 7 * |level difference|     (may be negative)
- tags:      10 * number of shared tags
- biomes:    5 * min(shared biomes, 3), wildcard-aware
- alignment: 15 if equal
- source:    10 if equal

The wildcard biome makes the relation asymmetric: when ``a`` lives
everywhere, the number of shared biomes is the size of ``b``'s biome set,
and vice versa.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .exceptions import DuplicateMonsterError, NoValidNeighborError
from .models import WILDCARD, Monster

logger = logging.getLogger("monster-wrangler")

LEVEL_BASE = 10
LEVEL_PENALTY = 7
TAG_BONUS = 10
BIOME_BONUS = 5
MAX_COMMON_BIOMES = 3
ALIGNMENT_BONUS = 15
SOURCE_BONUS = 10


@dataclass(frozen=True)
class StrengthBreakdown:
    """Individual scoring terms of one directed monster pair."""
    level: int
    tags: int
    biomes: int
    alignment: int
    source: int

    @property
    def total(self) -> int:
        return self.level + self.tags + self.biomes + self.alignment + self.source

    def describe(self) -> str:
        return (
            f"total={self.total} (level={self.level}, tags={self.tags}, "
            f"biomes={self.biomes}, alignment={self.alignment}, source={self.source})"
        )


@dataclass(frozen=True)
class Edge:
    """Outgoing edge to a neighbor, with its scoring breakdown."""
    neighbor_id: int
    strength: int
    breakdown: StrengthBreakdown


def common_biome_count(a: Monster, b: Monster) -> int:
    """Number of biomes ``a`` and ``b`` share, honoring the wildcard.

    The check is ordered: ``a``'s wildcard is looked at first.
    """
    if WILDCARD in a.biomes:
        return len(b.biome_set)
    if WILDCARD in b.biomes:
        return len(a.biome_set)
    return len(a.biome_set & b.biome_set)


def score_pair(a: Monster, b: Monster) -> StrengthBreakdown:
    """Score the directed pair ``a -> b``."""
    return StrengthBreakdown(
        level=LEVEL_BASE - LEVEL_PENALTY * abs(a.level - b.level),
        tags=TAG_BONUS * len(a.tag_set & b.tag_set),
        biomes=BIOME_BONUS * min(common_biome_count(a, b), MAX_COMMON_BIOMES),
        alignment=ALIGNMENT_BONUS if a.alignment == b.alignment else 0,
        source=SOURCE_BONUS if a.source == b.source else 0,
    )


def calculate_strength(a: Monster, b: Monster) -> int:
    """Affinity strength of the directed pair ``a -> b``."""
    return score_pair(a, b).total


class AffinityGraph:
    """Monsters plus their precomputed, strength-sorted adjacency.

    Build instances with :meth:`build` (or :func:`build_graph`); the graph
    is never mutated afterwards.

    Usage:
        graph = AffinityGraph.build(monsters)
        graph.get_adjacent(goblin, 5)          # five strongest neighbors
        graph.get_neighbor_excluding(goblin, visited, distance=3)
    """

    def __init__(
        self,
        vertices: dict[int, Monster],
        adjacency: dict[int, list[Edge]],
    ) -> None:
        self._vertices = vertices
        self._adjacency = adjacency

    @classmethod
    def build(cls, monsters: Iterable[Monster]) -> "AffinityGraph":
        """Score every ordered pair of monsters and build the graph.

        Args:
            monsters: Catalog entries with unique ids.

        Returns:
            A fully-built graph.

        Raises:
            DuplicateMonsterError: If two monsters share an id.
        """
        vertices: dict[int, Monster] = {}
        for monster in monsters:
            if monster.id in vertices:
                raise DuplicateMonsterError(monster.id)
            vertices[monster.id] = monster

        adjacency: dict[int, list[Edge]] = {}
        edge_count = 0
        for monster in vertices.values():
            edges = []
            for other in vertices.values():
                if other.id == monster.id:
                    continue
                breakdown = score_pair(monster, other)
                if breakdown.total > 0:
                    edges.append(Edge(other.id, breakdown.total, breakdown))
            # Stable sort: ties keep insertion (id) order
            edges.sort(key=lambda edge: edge.strength, reverse=True)
            adjacency[monster.id] = edges
            edge_count += len(edges)

        logger.info(f"Built affinity graph: {len(vertices)} monsters, {edge_count} edges")
        return cls(vertices, adjacency)

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, monster: object) -> bool:
        return isinstance(monster, Monster) and monster.id in self._vertices

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def all(self) -> list[Monster]:
        """Every monster in the graph, in id order."""
        return [self._vertices[key] for key in sorted(self._vertices)]

    def get_vertex(self, monster_id: int) -> Monster | None:
        return self._vertices.get(monster_id)

    def edges(self, seed: Monster) -> list[Edge]:
        """Outgoing edges of ``seed``, strongest first."""
        return list(self._adjacency.get(seed.id, []))

    def strength(self, a: Monster, b: Monster) -> StrengthBreakdown:
        """Recompute the scoring breakdown of ``a -> b`` for display."""
        return score_pair(a, b)

    def get_adjacent(self, seed: Monster, limit: int) -> list[Monster]:
        """Return up to ``limit`` neighbors of ``seed``, strongest first."""
        if limit <= 0:
            return []
        neighbors = []
        for edge in self._adjacency.get(seed.id, [])[:limit]:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"{seed.name} -> {self._vertices[edge.neighbor_id].name}: {edge.breakdown.describe()}")
            neighbors.append(self._vertices[edge.neighbor_id])
        return neighbors

    def get_neighbor_excluding(
        self,
        seed: Monster,
        excluded: Iterable[Monster],
        distance: int,
    ) -> Monster:
        """Pick a neighbor of ``seed`` by rank offset, skipping excluded ones.

        ``distance`` is a 1-based position in ``seed``'s sorted neighbor
        list: positions before it are skipped, and the first neighbor from
        that position onward whose id is not excluded is returned.

        Raises:
            NoValidNeighborError: If no neighbor at or past ``distance`` is
                eligible.
        """
        excluded_ids = {monster.id for monster in excluded}
        for position, edge in enumerate(self._adjacency.get(seed.id, []), start=1):
            if position < distance:
                continue
            if edge.neighbor_id not in excluded_ids:
                return self._vertices[edge.neighbor_id]
        raise NoValidNeighborError(seed.id, distance, len(excluded_ids))


def build_graph(monsters: Iterable[Monster]) -> AffinityGraph:
    """Build an :class:`AffinityGraph` from catalog monsters."""
    return AffinityGraph.build(monsters)
