"""
Tests for the damage resolver: penetration order, mitigation, auto attacks,
ability damage and item passives.
"""

import pytest

from dmgcalc.damage_resolver import (ability_damage, auto_attack, crit_damage_bonus,
                                     defense_mitigation, effective_armor,
                                     effective_magic_resist, item_passive_damage,
                                     mitigated_damage, passive_raw_damage,
                                     resolve_ability)
from dmgcalc.data.item_stats import ITEM_SUPPLEMENTS
from dmgcalc.models import (ComputedStats, DamageType, ItemPassive, ItemSupplement,
                            ParsedAbility, ScalingStat, ScalingTerm,
                            SupplementaryStats)


class TestMitigation:
    def test_zero_defense_takes_full_damage(self):
        assert defense_mitigation(0) == 1.0

    def test_hundred_defense_halves_damage(self):
        assert defense_mitigation(100) == 0.5

    def test_negative_defense_is_not_amplified(self):
        assert defense_mitigation(-30) == 1.0

    def test_true_damage_ignores_defenses(self):
        target = ComputedStats(armor=300, magic_resist=300)
        assert mitigated_damage(123.4, DamageType.TRUE, ComputedStats(), 1, target) == 123

    def test_magic_damage_ignores_lethality(self):
        attacker = ComputedStats(lethality=50)
        target = ComputedStats(magic_resist=100)
        assert mitigated_damage(200, DamageType.MAGIC, attacker, 18, target) == 100


class TestPenetration:
    def test_percent_then_lethality(self):
        # 50 * 0.5 = 25, lethality 18 at level 18 is 18 flat
        assert effective_armor(50, 18, 0.5, 18) == pytest.approx(7)

    def test_lethality_cannot_go_negative(self):
        assert effective_armor(50, 18, 0.0, 1000) == 0

    def test_percent_applies_before_flat(self):
        # (100 * 0.5) - 10, not (100 - 10) * 0.5
        assert effective_armor(100, 18, 0.5, 10) == pytest.approx(40)

    def test_lethality_scales_with_attacker_level(self):
        # level 1: 18 * (0.6 + 0.4 / 18) = 11.2
        assert effective_armor(100, 1, 0.0, 18) == pytest.approx(88.8)

    def test_magic_pen_order(self):
        assert effective_magic_resist(100, 0.4, 15) == pytest.approx(45)

    def test_magic_pen_floor(self):
        assert effective_magic_resist(10, 0.0, 15) == 0


class TestAutoAttack:
    def test_mitigated_auto(self):
        result = auto_attack(ComputedStats(attack_damage=100), 1,
                             ComputedStats(armor=100))
        assert result.mitigated_damage == 50
        assert result.damage_type is DamageType.PHYSICAL
        assert result.breakdown == "100 AD"

    def test_crit_shows_in_breakdown(self):
        attacker = ComputedStats(attack_damage=100, crit_chance=0.5)
        result = auto_attack(attacker, 1, ComputedStats(), crit_bonus=0.4)
        assert result.mitigated_damage == 100
        assert result.breakdown == "100 AD (crit: 215)"


class TestCritBonus:
    def test_bonus_needs_sixty_percent_crit(self):
        low = ComputedStats(crit_chance=0.5)
        high = ComputedStats(crit_chance=0.6)
        assert crit_damage_bonus(["3031"], low) == 0
        assert crit_damage_bonus(["3031"], high) == pytest.approx(0.40)

    def test_duplicate_item_counts_once(self):
        attacker = ComputedStats(crit_chance=1.0)
        assert crit_damage_bonus(["3031", "3031"], attacker) == pytest.approx(0.40)

    def test_bonuses_from_different_items_add(self):
        supplements = dict(ITEM_SUPPLEMENTS)
        supplements["x"] = ItemSupplement(SupplementaryStats(crit_damage_bonus=0.2))
        attacker = ComputedStats(crit_chance=1.0)
        assert crit_damage_bonus(["3031", "x"], attacker, supplements) == pytest.approx(0.6)


class TestAbilityDamage:
    def test_ratio_and_mitigation(self):
        attacker = ComputedStats(ability_power=200)
        target = ComputedStats(magic_resist=50)
        result = ability_damage("Q", 80, [ScalingTerm(ScalingStat.AP, (0.6,))],
                                DamageType.MAGIC, attacker, 1, target)
        assert result.raw_damage == 200
        assert result.mitigated_damage == 133
        assert result.breakdown == "80 + 120(60% AP)"

    def test_no_scalings_is_base_damage(self):
        result = ability_damage("R", 55, (), DamageType.PHYSICAL,
                                ComputedStats(attack_damage=300), 1, ComputedStats())
        assert result.raw_damage == 55
        assert result.mitigated_damage == 55
        assert result.breakdown == "55"

    def test_unknown_stat_tag_is_skipped(self):
        terms = [ScalingTerm("crit_chance", (2.0,)), ScalingTerm(ScalingStat.AD, (0.5,))]
        result = ability_damage("E", 10, terms, DamageType.TRUE,
                                ComputedStats(attack_damage=100, crit_chance=1.0),
                                1, ComputedStats())
        assert result.raw_damage == 60

    def test_bonus_ad_uses_level_only_ad(self):
        attacker = ComputedStats(attack_damage=150, base_attack_damage=100)
        result = ability_damage("Q", 0, [ScalingTerm(ScalingStat.BONUS_AD, (1.0,))],
                                DamageType.TRUE, attacker, 1, ComputedStats())
        assert result.raw_damage == 50

    def test_per_rank_ratio(self):
        term = ScalingTerm(ScalingStat.AD, (1.0, 1.1, 1.2))
        result = ability_damage("Q", 0, [term], DamageType.TRUE,
                                ComputedStats(attack_damage=100), 1, ComputedStats(),
                                rank=3)
        assert result.raw_damage == 120

    def test_resolve_unlearned_ability(self):
        ability = ParsedAbility(key="Q", name="Orb", base_damage=(40,), is_valid=True)
        result = resolve_ability(ability, 0, ComputedStats(), 1, ComputedStats())
        assert result.mitigated_damage == 0
        assert result.breakdown == "-"
        assert result.label == "Q (Orb)"

    def test_resolve_invalid_ability(self):
        ability = ParsedAbility.invalid(key="W")
        result = resolve_ability(ability, 3, ComputedStats(), 1, ComputedStats())
        assert result.mitigated_damage == 0
        assert result.breakdown == "Data N/A"

    def test_resolve_picks_rank_base(self):
        ability = ParsedAbility(key="Q", base_damage=(40, 65, 90), damage_type=DamageType.TRUE,
                                is_valid=True)
        result = resolve_ability(ability, 2, ComputedStats(), 1, ComputedStats())
        assert result.mitigated_damage == 65


class TestItemPassives:
    def test_spellblade_scales_with_base_ad(self):
        passive = ITEM_SUPPLEMENTS["3078"].passives[0]
        attacker = ComputedStats(attack_damage=200, base_attack_damage=60)
        result = item_passive_damage(passive, attacker, 1, ComputedStats())
        assert result.raw_damage == 120
        assert result.damage_type is DamageType.PHYSICAL

    def test_target_hp_on_hit(self):
        passive = ITEM_SUPPLEMENTS["3153"].passives[0]
        assert passive_raw_damage(passive, ComputedStats(),
                                  ComputedStats(hp=2000)) == pytest.approx(200)

    def test_amplifier_deals_no_damage(self):
        passive = ITEM_SUPPLEMENTS["3089"].passives[0]
        assert item_passive_damage(passive, ComputedStats(ability_power=500), 1,
                                   ComputedStats()) is None

    def test_unknown_formula_deals_no_damage(self):
        passive = ItemPassive("Mystery", "on_hit", formula="42 * moon",
                              damage_type=DamageType.MAGIC)
        assert item_passive_damage(passive, ComputedStats(), 1, ComputedStats()) is None
