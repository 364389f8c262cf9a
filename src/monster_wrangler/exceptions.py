"""
Exception hierarchy for the monster wrangler.

The selection engine never substitutes a default when a query cannot be
satisfied; it raises one of these so the caller can re-prompt, relax a
filter, or abort.
"""

from __future__ import annotations

from typing import Any


class WranglerError(Exception):
    """Base exception for all monster wrangler errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmptyResultError(WranglerError):
    """No catalog entry matches the active filters.

    Attributes:
        state: Rendered filter state at the time of the failure
    """

    def __init__(self, state: str, details: dict[str, Any] | None = None):
        super().__init__(f"No monsters match the current filters: {state}", details)
        self.state = state


class NoValidNeighborError(WranglerError):
    """A neighbor lookup exhausted the seed's adjacency list.

    Raised when every neighbor at or beyond the requested rank offset is
    excluded, or the seed has no recorded edges at all.

    Attributes:
        seed_id: Id of the monster whose neighbors were searched
        distance: Rank offset the search started from
        excluded_count: Number of excluded monster ids
    """

    def __init__(
        self,
        seed_id: int,
        distance: int,
        excluded_count: int,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"No valid neighbor for monster {seed_id} "
            f"(distance={distance}, excluded={excluded_count})",
            details,
        )
        self.seed_id = seed_id
        self.distance = distance
        self.excluded_count = excluded_count


class CatalogError(WranglerError):
    """Error reading or parsing the monster catalog."""
    pass


class DuplicateMonsterError(CatalogError):
    """Two catalog entries share the same id."""

    def __init__(self, monster_id: int):
        super().__init__(f"Duplicate monster id: {monster_id}", {"id": monster_id})
        self.monster_id = monster_id
