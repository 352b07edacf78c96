"""
Tests for the stat aggregator: growth law, rounding checkpoints, item sums,
penetration clamp and unique AP amplification.
"""

import logging
from dataclasses import fields

import pytest

from dmgcalc.data.champion_stats import get_champion_curve
from dmgcalc.data.item_stats import (ITEM_STATS, get_item_id, get_supplement,
                                     item_table_from_ddragon)
from dmgcalc.models import BaseAttributeCurve, ItemSupplement, SupplementaryStats
from dmgcalc.stat_aggregator import (SUPPLEMENTARY_FIELDS, base_attack_damage,
                                     compute_stats, level_stats, stat_at_level)


def make_curve(**overrides):
    values = dict(
        hp=590, hp_per_level=104, mp=418, mp_per_level=25,
        armor=21, armor_per_level=4.2, magic_resist=30, magic_resist_per_level=1.3,
        attack_damage=53, attack_damage_per_level=3,
        attack_speed=0.625, attack_speed_per_level=2.5, move_speed=330,
    )
    values.update(overrides)
    return BaseAttributeCurve(**values)


class TestStatAtLevel:
    def test_level_one_is_base(self):
        assert stat_at_level(590, 104, 1) == 590
        assert stat_at_level(53, 3, 1) == 53

    def test_level_eighteen(self):
        # (18-1) * (0.7025 + 0.0175 * 17) == 17
        assert stat_at_level(590, 104, 18) == pytest.approx(590 + 104 * 17)

    def test_non_decreasing_for_positive_growth(self):
        values = [stat_at_level(21, 4.2, lvl) for lvl in range(1, 19)]
        assert values == sorted(values)

    def test_zero_growth_is_flat(self):
        assert {stat_at_level(100, 0, lvl) for lvl in range(1, 19)} == {100}


class TestLevelStats:
    """First rounding checkpoint: champion stats before items."""

    def test_rounding_checkpoints(self):
        stats = level_stats(make_curve(), 2)
        # 590 + 104 * 0.72 = 664.88
        assert stats["hp"] == 665
        assert stats["mp"] == pytest.approx(436)
        # 21 + 4.2 * 0.72 = 24.024
        assert stats["armor"] == pytest.approx(24.0)
        # 30 + 1.3 * 0.72 = 30.936
        assert stats["magic_resist"] == pytest.approx(30.9)
        # 53 + 3 * 0.72 = 55.16
        assert stats["attack_damage"] == pytest.approx(55.2)

    def test_total_attack_damage_rounded_after_items(self):
        table = {"x": {"FlatPhysicalDamageMod": 0.06}}
        stats = compute_stats(make_curve(), 1, ["x"], table, supplements={})
        # 53 + 0.06 lands on the 0.1 grid
        assert stats.attack_damage == pytest.approx(53.1)

    def test_resists_not_rounded_again_after_items(self):
        table = {"x": {"FlatSpellBlockMod": 0.04}}
        stats = compute_stats(make_curve(), 7, ["x"], table, supplements={})
        # level 7 MR 36.2985 -> 36.3, then + 0.04
        assert stats.magic_resist == pytest.approx(36.34)

    def test_base_attack_damage_ignores_items(self):
        curve = make_curve()
        stats = compute_stats(curve, 2, ["3031"], ITEM_STATS)
        assert base_attack_damage(curve, 2) == pytest.approx(55.2)
        assert stats.base_attack_damage == pytest.approx(55.2)
        assert stats.attack_damage == pytest.approx(55.2 + 65)


class TestComputeStats:
    def test_no_items_is_level_stats(self):
        curve = make_curve()
        stats = compute_stats(curve, 1, [], ITEM_STATS)
        assert stats.hp == 590
        assert stats.armor == 21
        assert stats.ability_power == 0
        assert stats.attack_speed == pytest.approx(0.625)

    def test_flat_item_stats_are_summed(self):
        stats = compute_stats(make_curve(), 1, ["3075", "3075"], ITEM_STATS)
        assert stats.armor == pytest.approx(21 + 150)
        assert stats.hp == 590 + 300

    def test_bonus_attack_speed_is_fraction_of_base(self):
        table = {"x": {"PercentAttackSpeedMod": 0.5}}
        stats = compute_stats(make_curve(), 1, ["x"], table, supplements={})
        # 0.625 * (1 + 0 + 0.5)
        assert stats.attack_speed == pytest.approx(0.938)

    def test_attack_speed_level_growth(self):
        stats = compute_stats(make_curve(attack_speed_per_level=4.0), 11, [], {})
        # 0.625 * (1 + 4.0 * 10 / 100)
        assert stats.attack_speed == pytest.approx(0.875)

    def test_unknown_item_contributes_nothing(self):
        curve = make_curve()
        assert (compute_stats(curve, 7, ["999999"], ITEM_STATS)
                == compute_stats(curve, 7, [], ITEM_STATS))

    def test_item_with_no_stats_is_known(self, caplog):
        curve = make_curve()
        with caplog.at_level(logging.DEBUG, logger="dmgcalc.stat_aggregator"):
            compute_stats(curve, 1, ["2003"], {"2003": {}}, supplements={})
        assert "Unknown item" not in caplog.text

        with caplog.at_level(logging.DEBUG, logger="dmgcalc.stat_aggregator"):
            compute_stats(curve, 1, ["999999"], {"2003": {}}, supplements={})
        assert "Unknown item id '999999'" in caplog.text

    def test_empty_slots_are_skipped(self):
        curve = make_curve()
        assert (compute_stats(curve, 7, [None, "", "3031"], ITEM_STATS)
                == compute_stats(curve, 7, ["3031"], ITEM_STATS))

    def test_level_is_clamped(self):
        curve = make_curve()
        assert compute_stats(curve, 25, [], {}) == compute_stats(curve, 18, [], {})
        assert compute_stats(curve, 0, [], {}) == compute_stats(curve, 1, [], {})

    def test_supplementary_stats_are_summed(self):
        stats = compute_stats(make_curve(), 9, ["3142", "6694"], ITEM_STATS)
        assert stats.lethality == 30
        assert stats.ability_haste == 25

    def test_sample_champion_curve(self):
        stats = compute_stats(get_champion_curve("garen"), 1, [], ITEM_STATS)
        assert stats.hp == 690
        assert stats.armor == 38
        assert stats.mp == 0


class TestPenetrationClamp:
    def test_armor_pen_percent_clamped_to_one(self):
        supplements = {
            "a": ItemSupplement(SupplementaryStats(armor_pen_percent=0.6)),
            "b": ItemSupplement(SupplementaryStats(armor_pen_percent=0.6)),
        }
        stats = compute_stats(make_curve(), 10, ["a", "b"], {}, supplements)
        assert stats.armor_pen_percent == 1.0

    def test_magic_pen_percent_clamped_to_one(self):
        supplements = {"v": ItemSupplement(SupplementaryStats(magic_pen_percent=0.7))}
        stats = compute_stats(make_curve(), 10, ["v", "v"], {}, supplements)
        assert stats.magic_pen_percent == 1.0

    def test_single_item_below_cap(self):
        stats = compute_stats(make_curve(), 10, ["3036"], ITEM_STATS)
        assert stats.armor_pen_percent == pytest.approx(0.35)


class TestApAmplifier:
    """Rabadon's Deathcap multiplies total AP once, however many copies."""

    def test_amplified_total(self):
        table = {"x": {"FlatMagicDamageMod": 270}, "3089": {"FlatMagicDamageMod": 130}}
        stats = compute_stats(make_curve(), 1, ["x", "3089"], table)
        assert stats.ability_power == 540

    def test_without_amplifier(self):
        table = {"x": {"FlatMagicDamageMod": 400}}
        stats = compute_stats(make_curve(), 1, ["x"], table)
        assert stats.ability_power == 400

    def test_two_copies_apply_once(self):
        table = {"x": {"FlatMagicDamageMod": 140}, "3089": {"FlatMagicDamageMod": 130}}
        stats = compute_stats(make_curve(), 1, ["x", "3089", "3089"], table)
        assert stats.ability_power == 540

    def test_amplified_ap_is_whole_number(self):
        stats = compute_stats(make_curve(), 1, ["3089", "1056"], ITEM_STATS)
        # (130 + 18) * 1.35 = 199.8
        assert stats.ability_power == 200


class TestItemTables:
    def test_table_from_item_json(self):
        item_json = {"type": "item", "data": {
            "3089": {"name": "Rabadon's Deathcap", "stats": {"FlatMagicDamageMod": 130}},
            "2003": {"name": "Health Potion"},
        }}
        table = item_table_from_ddragon(item_json)
        assert table == {"3089": {"FlatMagicDamageMod": 130}, "2003": {}}
        stats = compute_stats(make_curve(), 1, ["3089", "2003"], table)
        assert stats.ability_power == 176

    def test_item_lookup_by_name(self):
        assert get_item_id("Rabadon's Deathcap") == "3089"
        assert get_item_id("3031") == "3031"
        assert get_item_id("no such item") is None

    def test_missing_supplement_is_empty(self):
        assert get_supplement("1055") == ItemSupplement()

    def test_every_supplementary_stat_is_used(self):
        # summed into ComputedStats, or read by the crit bonus
        names = {f.name for f in fields(SupplementaryStats)}
        assert names == set(SUPPLEMENTARY_FIELDS) | {"crit_damage_bonus"}
