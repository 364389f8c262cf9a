"""
Selection state: the user's current filters, seed and randomness.

``Choices`` is immutable. Every ``with_*`` call returns a new instance with
one field replaced, so a caller can keep earlier states around for undo.
"""

from pydantic import BaseModel, ConfigDict, Field

from .models import Monster

MIN_RANDOMNESS = 1
MAX_RANDOMNESS = 5


class Choices(BaseModel):
    """Active filters and seed driving selection queries."""
    model_config = ConfigDict(frozen=True)

    level: int | None = Field(default=None, description="Exact level filter")
    biome: str | None = Field(default=None, description="Biome filter (wildcard monsters always pass)")
    tag: str | None = Field(default=None, description="Tag membership filter")
    randomness: int | None = Field(default=None, ge=MIN_RANDOMNESS, le=MAX_RANDOMNESS, description="Shuffle/breadth dial (1-5)")
    seed_monster: Monster | None = Field(default=None, description="Explicit starting point for graph queries")

    def with_level(self, level: int | None) -> "Choices":
        return self.model_copy(update={"level": level})

    def with_biome(self, biome: str | None) -> "Choices":
        """Replace the biome filter; an empty string clears it."""
        return self.model_copy(update={"biome": biome or None})

    def with_tag(self, tag: str | None) -> "Choices":
        """Replace the tag filter; an empty string clears it."""
        return self.model_copy(update={"tag": tag or None})

    def with_randomness(self, randomness: int | None) -> "Choices":
        """Replace the randomness dial.

        Raises:
            ValueError: If randomness is outside 1-5.
        """
        if randomness is not None and not MIN_RANDOMNESS <= randomness <= MAX_RANDOMNESS:
            raise ValueError(
                f"randomness must be between {MIN_RANDOMNESS} and {MAX_RANDOMNESS}, got {randomness}"
            )
        return self.model_copy(update={"randomness": randomness})

    def with_seed_monster(self, seed_monster: Monster | None) -> "Choices":
        return self.model_copy(update={"seed_monster": seed_monster})

    def state(self) -> str:
        """Render seed and filters as ``Seed: X, level=L, biome=B, tag=T``.

        Absent fields are omitted; ``[]`` is returned when nothing is set.
        """
        parts = []
        if self.seed_monster is not None:
            parts.append(f"Seed: {self.seed_monster.name}")
        if self.level is not None:
            parts.append(f"level={self.level}")
        if self.biome is not None:
            parts.append(f"biome={self.biome}")
        if self.tag is not None:
            parts.append(f"tag={self.tag}")
        return ", ".join(parts) if parts else "[]"
