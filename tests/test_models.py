"""
Tests for catalog data models.
"""

import pytest
from pydantic import ValidationError

from monster_wrangler.exceptions import CatalogError
from monster_wrangler.models import Monster, RawMonster, StatBlock


WIGHT_STATBLOCK = (
    "AC 14, HP 24, ATK 2 sword +4 (1d8), 1 drain +4 (1 CON), MV near, "
    "S +3, D +1, C +2, I +0, W +1, Ch +2, AL C, LV 5"
)


class TestStatBlock:
    """Tests for StatBlock.parse()."""

    def test_parse_single_attack(self):
        stats = StatBlock.parse(
            "AC 11, HP 5, ATK 1 club +0 (1d4), MV near, S +0, D +1, C +0, I -1, W -1, Ch -2, AL C, LV 1"
        )
        assert stats.armor_class == "AC 11"
        assert stats.hit_points == "HP 5"
        assert stats.attack == "ATK 1 club +0 (1d4)"
        assert stats.movement == "MV near"
        assert stats.abilities == "S +0, D +1, C +0, I -1, W -1, Ch -2, AL C, LV 1"

    def test_parse_multi_part_attack(self):
        """Attack text spanning several commas is re-joined."""
        stats = StatBlock.parse(WIGHT_STATBLOCK)
        assert stats.attack == "ATK 2 sword +4 (1d8), 1 drain +4 (1 CON)"
        assert stats.movement == "MV near"
        assert stats.abilities.startswith("S +3")

    def test_parse_without_mv_prefix_uses_position_three(self):
        stats = StatBlock.parse("AC 1, HP 2, ATK x, near, S, D, C, I, W, Ch")
        assert stats.attack == "ATK x"
        assert stats.movement == "near"
        assert stats.abilities == "S, D, C, I, W, Ch"

    def test_parse_too_few_fields(self):
        with pytest.raises(CatalogError, match="at least 10"):
            StatBlock.parse("AC 11, HP 5, ATK 1 club, MV near")

    def test_str_contains_all_parts(self):
        text = str(StatBlock.parse(WIGHT_STATBLOCK))
        assert "AC 14" in text
        assert "MV near" in text
        assert "LV 5" in text


class TestMonster:
    """Tests for Monster identity and display."""

    def test_equality_uses_id_only(self):
        a = Monster(id=1, name="Orc", level=1)
        b = Monster(id=1, name="Not an orc", level=9)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_ids_not_equal(self):
        assert Monster(id=1, name="Orc", level=1) != Monster(id=2, name="Orc", level=1)

    def test_frozen(self):
        monster = Monster(id=1, name="Orc", level=1)
        with pytest.raises(ValidationError):
            monster.name = "Troll"

    def test_negative_level_rejected(self):
        with pytest.raises(ValidationError):
            Monster(id=1, name="Orc", level=-1)

    def test_sets_and_wildcard(self, monster_factory):
        monster = monster_factory(0, tags=("a", "b", "a"), biomes=("*", "forest"))
        assert monster.tag_set == frozenset({"a", "b"})
        assert monster.biome_set == frozenset({"*", "forest"})
        assert monster.is_wildcard
        assert not monster_factory(1, biomes=("forest",)).is_wildcard

    def test_summary(self, monster_factory):
        monster = monster_factory(0, "Goblin", 1, ("humanoid",), ("forest", "cave"), "C")
        summary = monster.summary()
        assert "Goblin" in summary
        assert "LV 1" in summary
        assert "forest, cave" in summary
        assert "humanoid" in summary

    def test_detailed_summary_includes_stats_and_reference(self):
        monster = Monster(
            id=0,
            name="Wight",
            level=5,
            source="core",
            page="33",
            statblock=WIGHT_STATBLOCK,
            stats=StatBlock.parse(WIGHT_STATBLOCK),
        )
        lines = monster.detailed_summary().splitlines()
        assert lines[0].startswith("Wight")
        assert "AC 14" in lines[1]
        assert lines[2].strip() == "(core p.33)"

    def test_detailed_summary_without_stats(self, monster_factory):
        monster = monster_factory(0, "Blob", source="")
        assert monster.detailed_summary() == monster.summary()


class TestRawMonster:
    """Tests for the on-disk record model."""

    def test_move_alias(self):
        raw = RawMonster.model_validate({"name": "Orc", "level": "2", "move": "near"})
        assert raw.move_amount == "near"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            RawMonster.model_validate({"level": "2"})
