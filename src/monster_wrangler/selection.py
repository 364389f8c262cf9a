"""
Selection engine: stateless queries combining a ``Choices`` with the graph.

Operations:
- apply_filters: monsters passing every active filter
- rando: one uniformly random filtered monster
- available_biomes / available_tags / available_levels: values a filter
  could take given the other active filters
- cluster: a seed plus its strongest neighbors, optionally shuffled
- walk: a chain of not-yet-visited neighbors picked by random rank offset
- search: filtered monsters whose name, tags or biomes contain a term

Random draws use the ``random`` module unless a ``random.Random`` instance
is passed in.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from typing import TypeVar

from .choices import MAX_RANDOMNESS, MIN_RANDOMNESS, Choices
from .exceptions import EmptyResultError
from .graph import AffinityGraph
from .models import WILDCARD, Monster

logger = logging.getLogger("monster-wrangler")

T = TypeVar("T")

# Per-step rank offsets for walk are drawn from [min, max)
DEFAULT_WALK_MIN_DISTANCE = 1
DEFAULT_WALK_MAX_DISTANCE = 10


def _matches(choices: Choices, monster: Monster) -> bool:
    if choices.biome is not None:
        if choices.biome not in monster.biomes and WILDCARD not in monster.biomes:
            return False
    if choices.level is not None and monster.level != choices.level:
        return False
    if choices.tag is not None and choices.tag not in monster.tags:
        return False
    return True


def apply_filters(choices: Choices, graph: AffinityGraph) -> list[Monster]:
    """Return copies of every monster passing the active filters, in id order."""
    return [monster.model_copy() for monster in graph.all() if _matches(choices, monster)]


def rando(
    choices: Choices,
    graph: AffinityGraph,
    rng: random.Random | None = None,
) -> Monster:
    """Pick one filtered monster uniformly at random.

    Raises:
        EmptyResultError: If no monster passes the filters.
    """
    filtered = apply_filters(choices, graph)
    if not filtered:
        raise EmptyResultError(choices.state(), {"catalog_size": len(graph)})
    return (rng or random).choice(filtered)


def _collect(
    choices: Choices,
    graph: AffinityGraph,
    projection: Callable[[Monster], Iterable[T]],
) -> list[T]:
    values: set[T] = set()
    for monster in apply_filters(choices, graph):
        values.update(projection(monster))
    return sorted(values)


def available_biomes(choices: Choices, graph: AffinityGraph) -> list[str]:
    """Distinct biomes among monsters matching every filter except biome.

    The wildcard token and empty strings are left out.
    """
    biomes = _collect(choices.with_biome(None), graph, lambda monster: monster.biomes)
    return [biome for biome in biomes if biome and biome != WILDCARD]


def available_tags(choices: Choices, graph: AffinityGraph) -> list[str]:
    """Distinct tags among monsters matching every filter except tag."""
    return _collect(choices.with_tag(None), graph, lambda monster: monster.tags)


def available_levels(choices: Choices, graph: AffinityGraph) -> list[int]:
    """Distinct levels among monsters matching every filter except level."""
    return _collect(choices.with_level(None), graph, lambda monster: (monster.level,))


def resolve_seed(
    choices: Choices,
    graph: AffinityGraph,
    rng: random.Random | None = None,
) -> Monster:
    """The explicit seed monster if set, otherwise a random filtered one."""
    if choices.seed_monster is not None:
        return choices.seed_monster
    return rando(choices, graph, rng)


def cluster(
    choices: Choices,
    graph: AffinityGraph,
    number: int,
    randomness: int | None = None,
    rng: random.Random | None = None,
) -> list[Monster]:
    """Build a group from a seed and its strongest neighbors.

    Up to ``randomness * number`` neighbors are fetched (strongest first)
    and the first ``number`` of them follow the seed. With randomness above
    1 the whole group, seed included, is shuffled.

    Args:
        choices: Active selection state.
        graph: Affinity graph to read neighbors from.
        number: Maximum number of neighbors to add to the seed.
        randomness: Overrides ``choices.randomness``; defaults to 1.
        rng: Optional random source.

    Returns:
        Seed followed by at most ``number`` neighbors.

    Raises:
        EmptyResultError: If no seed is set and no monster passes the filters.
        ValueError: If randomness is outside 1-5.
    """
    if randomness is None:
        randomness = choices.randomness if choices.randomness is not None else 1
    if not MIN_RANDOMNESS <= randomness <= MAX_RANDOMNESS:
        raise ValueError(
            f"randomness must be between {MIN_RANDOMNESS} and {MAX_RANDOMNESS}, got {randomness}"
        )

    seed = resolve_seed(choices, graph, rng)
    size = randomness * number
    adjacent = graph.get_adjacent(seed, size)

    result = [seed, *adjacent[:max(number, 0)]]
    if randomness > 1:
        (rng or random).shuffle(result)
    logger.debug(f"Cluster around {seed.name}: {len(result)} monsters (randomness={randomness})")
    return result


def walk(
    choices: Choices,
    graph: AffinityGraph,
    number: int,
    rng: random.Random | None = None,
    min_distance: int = DEFAULT_WALK_MIN_DISTANCE,
    max_distance: int = DEFAULT_WALK_MAX_DISTANCE,
) -> list[Monster]:
    """Walk the graph ``number`` steps from a seed, never revisiting a monster.

    Each step draws a fresh rank offset in ``[min_distance, max_distance)``
    and moves to the first unvisited neighbor at or past that offset in the
    current monster's sorted neighbor list.

    Raises:
        EmptyResultError: If no seed is set and no monster passes the filters.
        NoValidNeighborError: If a step finds no eligible neighbor.
        ValueError: If the distance range is empty or starts below 1.
    """
    if min_distance < 1 or max_distance <= min_distance:
        raise ValueError(
            f"Invalid walk distance range [{min_distance}, {max_distance})"
        )

    source = rng or random
    current = resolve_seed(choices, graph, rng)
    visited = [current]
    for step in range(number):
        distance = source.randrange(min_distance, max_distance)
        current = graph.get_neighbor_excluding(current, visited, distance)
        logger.debug(f"Walk step {step + 1}: {current.name} (distance={distance})")
        visited.append(current)
    return visited


def search(choices: Choices, graph: AffinityGraph, term: str) -> list[Monster]:
    """Filtered monsters whose name, a tag or a biome contains ``term``.

    Matching is case-insensitive.
    """
    needle = term.lower()
    return [
        monster
        for monster in apply_filters(choices, graph)
        if needle in monster.name.lower()
        or any(needle in tag.lower() for tag in monster.tags)
        or any(needle in biome.lower() for biome in monster.biomes)
    ]
