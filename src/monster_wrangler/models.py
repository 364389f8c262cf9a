"""
Data models for the monster catalog.

A ``Monster`` is the fully-parsed, immutable catalog entry the affinity graph
and the selection engine work with. ``RawMonster`` mirrors one record as it
appears on disk, before the loader splits and coerces its fields.
"""

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import CatalogError

# Biome token meaning "compatible with every biome"
WILDCARD = "*"

# Minimum number of comma-separated fields in a raw stat block
MIN_STATBLOCK_FIELDS = 10


class StatBlock(BaseModel):
    """Structured decomposition of a raw stat block string.

    Example raw value::

        AC 13, HP 9, ATK 1 bite +2 (1d6), MV near, S +1, D +2, C +1, I -3, W +1, Ch -2, AL N, LV 2
    """
    model_config = ConfigDict(frozen=True)

    armor_class: str = Field(description="Armor class, e.g. 'AC 13'")
    hit_points: str = Field(description="Hit points, e.g. 'HP 9'")
    attack: str = Field(description="Attack text, may span several comma-separated parts")
    movement: str = Field(description="Movement, e.g. 'MV near (climb)'")
    abilities: str = Field(description="Ability score block and trailing fields")

    @classmethod
    def parse(cls, raw: str) -> "StatBlock":
        """Split a raw comma-delimited stat block into its five parts.

        The movement field is the first field starting with ``MV``; when no
        such field exists it is assumed to sit at position 3.

        Raises:
            CatalogError: If the raw string has fewer than 10 fields.
        """
        fields = [part.strip() for part in raw.split(",")]
        if len(fields) < MIN_STATBLOCK_FIELDS:
            raise CatalogError(
                f"Stat block needs at least {MIN_STATBLOCK_FIELDS} comma-separated fields, "
                f"got {len(fields)}: {raw!r}"
            )

        mv_index = next(
            (i for i, part in enumerate(fields) if i >= 2 and part.upper().startswith("MV")),
            3,
        )
        return cls(
            armor_class=fields[0],
            hit_points=fields[1],
            attack=", ".join(fields[2:mv_index]),
            movement=fields[mv_index],
            abilities=", ".join(fields[mv_index + 1:]),
        )

    def __str__(self) -> str:
        return f"{self.armor_class}, {self.hit_points}, {self.attack}, {self.movement}, {self.abilities}"


class RawMonster(BaseModel):
    """One catalog record as stored in a JSON/YAML catalog file."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    tags: str = ""
    level: str
    biome: str = ""
    alignment: str = ""
    move_amount: str = Field(default="", alias="move")
    attack: str = ""
    page: str = ""
    statblock: str = ""
    source: str = ""


class Monster(BaseModel):
    """A creature in the catalog.

    Monsters are immutable. Identity is the ``id`` alone: two monsters with
    the same id compare equal and hash the same regardless of other fields.
    Tags and biomes keep their catalog order for display but are matched as
    sets.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, description="Sequential catalog id, unique per graph")
    name: str = Field(description="Display name")
    tags: tuple[str, ...] = Field(default=(), description="Descriptive tags")
    level: int = Field(ge=0, description="Difficulty rating")
    biomes: tuple[str, ...] = Field(default=(), description="Biomes, '*' means every biome")
    alignment: str = Field(default="", description="Alignment code (L, N, C)")
    source: str = Field(default="", description="Source book the monster comes from")
    page: str = Field(default="", description="Page reference in the source")
    move_amount: str = Field(default="", description="Movement text")
    attack: str = Field(default="", description="Attack text")
    statblock: str = Field(default="", description="Raw stat block string")
    stats: StatBlock | None = Field(default=None, description="Parsed stat block")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Monster):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)

    @property
    def biome_set(self) -> frozenset[str]:
        return frozenset(self.biomes)

    @property
    def is_wildcard(self) -> bool:
        """True if the monster lives in every biome."""
        return WILDCARD in self.biomes

    def summary(self) -> str:
        """One-line description for lists."""
        biomes = ", ".join(self.biomes) or "-"
        tags = ", ".join(self.tags) or "-"
        return f"{self.name} (LV {self.level}, {self.alignment or '?'}) biomes: [{biomes}] tags: [{tags}]"

    def detailed_summary(self) -> str:
        """Multi-line description including the stat block and page reference."""
        lines = [self.summary()]
        if self.stats is not None:
            lines.append(f"    {self.stats}")
        elif self.statblock:
            lines.append(f"    {self.statblock}")
        reference = " p.".join(part for part in (self.source, self.page) if part)
        if reference:
            lines.append(f"    ({reference})")
        return "\n".join(lines)
