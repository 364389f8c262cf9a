"""
Facade pairing one affinity graph with the selection engine.
"""

from __future__ import annotations

import random

from . import selection
from .choices import Choices
from .graph import AffinityGraph, build_graph
from .models import Monster


class MonsterWrangler:
    """Entry point for callers driving selections against one catalog.

    The wrangler owns its graph and holds no other state; every query takes
    the ``Choices`` to apply.

    Usage:
        wrangler = MonsterWrangler.from_monsters(load_default_catalog())
        choices = wrangler.choices().with_biome("forest").with_randomness(2)
        group = wrangler.cluster(choices, 5)
    """

    def __init__(self, graph: AffinityGraph) -> None:
        self._graph = graph

    @classmethod
    def from_monsters(cls, monsters: list[Monster]) -> "MonsterWrangler":
        return cls(build_graph(monsters))

    @property
    def graph(self) -> AffinityGraph:
        return self._graph

    def choices(self) -> Choices:
        """A fresh, empty selection state."""
        return Choices()

    def list(self, choices: Choices) -> list[Monster]:
        return selection.apply_filters(choices, self._graph)

    def rando(self, choices: Choices, rng: random.Random | None = None) -> Monster:
        return selection.rando(choices, self._graph, rng)

    def search(self, choices: Choices, term: str) -> list[Monster]:
        return selection.search(choices, self._graph, term)

    def biomes(self, choices: Choices) -> list[str]:
        return selection.available_biomes(choices, self._graph)

    def tags(self, choices: Choices) -> list[str]:
        return selection.available_tags(choices, self._graph)

    def levels(self, choices: Choices) -> list[int]:
        return selection.available_levels(choices, self._graph)

    def cluster(
        self,
        choices: Choices,
        number: int,
        randomness: int | None = None,
        rng: random.Random | None = None,
    ) -> list[Monster]:
        return selection.cluster(choices, self._graph, number, randomness, rng)

    def walk(
        self,
        choices: Choices,
        number: int,
        rng: random.Random | None = None,
        min_distance: int = selection.DEFAULT_WALK_MIN_DISTANCE,
        max_distance: int = selection.DEFAULT_WALK_MAX_DISTANCE,
    ) -> list[Monster]:
        return selection.walk(choices, self._graph, number, rng, min_distance, max_distance)
