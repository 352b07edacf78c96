"""
Combo Calculator — one attacker's full burst against one target.

Input:  attacker CombatantSetup (curve, level, items, parsed abilities, ranks,
        keystone) and the target's ComputedStats.
Output: DamageCalculationResult with the auto attack, each ability, item passives,
        keystone, total combo and % of target HP.
"""

from dataclasses import dataclass, replace
from typing import Mapping, Optional
import logging

from dmgcalc.damage_resolver import (DEFAULT_CRIT_MULTIPLIER, auto_attack,
                                     crit_damage_bonus, item_passive_damage,
                                     mitigated_damage, resolve_ability)
from dmgcalc.data.champion_spells import estimate_spell_ranks
from dmgcalc.data.item_stats import ITEM_SUPPLEMENTS, SPELLBLADE, get_supplement
from dmgcalc.data.keystones import (ADAPTIVE, CONQUEROR_MAX_STACKS, KEYSTONES,
                                    conqueror_bonus_per_stack,
                                    keystone_damage_at_level)
from dmgcalc.models import (BaseAttributeCurve, ComputedStats, DamageCalculationResult,
                            DamageType, SingleDamageResult, clamp_level,
                            round_half_up)
from dmgcalc.stat_aggregator import compute_stats

logger = logging.getLogger(__name__)


# ── Setup ──────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CombatantSetup:
    curve:             BaseAttributeCurve
    level:             int = 1
    item_ids:          tuple = ()
    abilities:         tuple = ()     # ParsedAbility for Q, W, E, R
    spell_ranks:       Optional[tuple] = None   # None → estimate from level
    keystone:          Optional[str] = None
    conqueror_stacks:  int = 0

    @property
    def ranks(self) -> tuple:
        if self.spell_ranks is not None:
            return tuple(self.spell_ranks)
        return estimate_spell_ranks(clamp_level(self.level))

    def stats(self, item_table: Optional[Mapping] = None,
              supplements: Optional[Mapping] = None) -> ComputedStats:
        return compute_stats(self.curve, self.level, self.item_ids,
                             item_table, supplements)


# ── Utility functions ──────────────────────────────────────────────────────────

def _adaptive_is_magic(stats: ComputedStats) -> bool:
    return stats.ability_power > stats.attack_damage


def _with_conqueror(stats: ComputedStats, level: int, stacks: int) -> ComputedStats:
    """Stacked Conqueror as adaptive AD or AP."""
    stacks = max(0, min(CONQUEROR_MAX_STACKS, stacks))
    if not stacks:
        return stats
    if _adaptive_is_magic(stats):
        bonus = conqueror_bonus_per_stack(level, is_ap=True) * stacks
        return replace(stats, ability_power=round_half_up(stats.ability_power + bonus, 1))
    bonus = conqueror_bonus_per_stack(level, is_ap=False) * stacks
    return replace(stats, attack_damage=round_half_up(stats.attack_damage + bonus, 1))


def _item_passive_results(item_ids, attacker: ComputedStats, level: int,
                          target: ComputedStats, supplements: Mapping) -> list:
    results = []
    spellblade_used = False
    for item_id in item_ids:
        if not item_id:
            continue
        for passive in get_supplement(item_id, supplements).passives:
            # Only one Spellblade can proc
            if passive.name == SPELLBLADE:
                if spellblade_used:
                    continue
                spellblade_used = True
            result = item_passive_damage(passive, attacker, level, target)
            if result is not None:
                results.append(result)
    return results


def keystone_damage(keystone_id: Optional[str], attacker: ComputedStats,
                    attacker_level: int,
                    target: ComputedStats) -> Optional[SingleDamageResult]:
    """Burst from the keystone; None when it has no damage (or is unknown)."""
    if not keystone_id:
        return None
    keystone = KEYSTONES.get(keystone_id)
    if keystone is None:
        logger.debug(f"Unknown keystone {keystone_id!r}")
        return None
    if not keystone.deals_damage:
        return None

    base = keystone_damage_at_level(keystone, attacker_level)
    if keystone.damage_type == ADAPTIVE:
        magic = _adaptive_is_magic(attacker)
        damage_type = DamageType.MAGIC if magic else DamageType.PHYSICAL
        ad_scaling = 0 if magic else keystone.ad_ratio * attacker.attack_damage
        ap_scaling = keystone.ap_ratio * attacker.ability_power if magic else 0
    else:
        damage_type = DamageType(keystone.damage_type)
        ad_scaling = keystone.ad_ratio * attacker.attack_damage
        ap_scaling = keystone.ap_ratio * attacker.ability_power

    raw = base + ad_scaling + ap_scaling
    return SingleDamageResult(
        label            = keystone.name,
        raw_damage       = round_half_up(raw),
        mitigated_damage = mitigated_damage(raw, damage_type, attacker,
                                            attacker_level, target),
        damage_type      = damage_type,
        breakdown        = f"{base} base + scaling",
    )


# ── Main calculator ────────────────────────────────────────────────────────────

def calculate_damage(
    attacker:         CombatantSetup,
    target_stats:     ComputedStats,
    attacker_stats:   Optional[ComputedStats] = None,
    item_table:       Optional[Mapping] = None,
    supplements:      Optional[Mapping] = None,
    crit_multiplier:  float = DEFAULT_CRIT_MULTIPLIER,
) -> DamageCalculationResult:
    """
    Main entry point.

    attacker:        who is dealing damage
    target_stats:    target snapshot (see CombatantSetup.stats / compute_stats)
    attacker_stats:  precomputed attacker snapshot; computed from `attacker`
                     with item_table/supplements when omitted
    crit_multiplier: base crit multiplier; item crit bonuses are added to it
    """
    supplements = ITEM_SUPPLEMENTS if supplements is None else supplements
    level = clamp_level(attacker.level)

    stats = attacker_stats or attacker.stats(item_table, supplements)
    if attacker.keystone == "conqueror":
        stats = _with_conqueror(stats, level, attacker.conqueror_stacks)

    # Auto attack
    bonus = crit_damage_bonus(attacker.item_ids, stats, supplements)
    auto = auto_attack(stats, level, target_stats, crit_multiplier, bonus)

    # Abilities
    ranks = attacker.ranks
    abilities = [
        resolve_ability(ability, ranks[idx] if idx < len(ranks) else 0,
                        stats, level, target_stats)
        for idx, ability in enumerate(attacker.abilities)
    ]

    # Item passives / keystone
    passives = _item_passive_results(attacker.item_ids, stats, level,
                                     target_stats, supplements)
    keystone = keystone_damage(attacker.keystone, stats, level, target_stats)

    total = (auto.mitigated_damage
             + sum(a.mitigated_damage for a in abilities)
             + sum(p.mitigated_damage for p in passives)
             + (keystone.mitigated_damage if keystone else 0))
    hp_percent = total / target_stats.hp * 100 if target_stats.hp > 0 else 0.0

    return DamageCalculationResult(
        auto_attack       = auto,
        abilities         = tuple(abilities),
        item_passives     = tuple(passives),
        keystone          = keystone,
        total_combo       = int(round_half_up(total)),
        target_hp_percent = hp_percent,
    )


# ── Formatting ─────────────────────────────────────────────────────────────────

def _line(result: SingleDamageResult) -> str:
    return (f"  {result.label:<28} {result.mitigated_damage:>5}  "
            f"[{result.damage_type.value:<8}] {result.breakdown}")


def format_result(r: DamageCalculationResult) -> str:
    """Plain-text breakdown for a presentation layer."""
    lines = []

    lines.append(f"Total combo: {r.total_combo} dmg  |  "
                 f"{r.target_hp_percent:.0f}% of target HP")
    lines.append("")

    lines.append(_line(r.auto_attack))
    for ability in r.abilities:
        lines.append(_line(ability))

    if r.item_passives:
        lines.append("── Item passives ──────────────")
        for passive in r.item_passives:
            lines.append(_line(passive))

    if r.keystone:
        lines.append("── Keystone ───────────────────")
        lines.append(_line(r.keystone))

    return "\n".join(lines)
