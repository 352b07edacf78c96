"""
Damage Resolver — raw damage + attacker/target stats → post-mitigation damage.

Penetration order: % penetration first, then flat (lethality / magic pen).
Mitigation: 100 / (100 + effective defense), 1.0 at or below zero defense.
"""

from typing import Iterable, Mapping, Optional
import logging

from dmgcalc.data.item_stats import get_supplement
from dmgcalc.models import (ComputedStats, DamageType, ItemPassive, ParsedAbility,
                            ScalingStat, ScalingTerm, SingleDamageResult,
                            clamp_level, round_half_up)
from dmgcalc.stat_aggregator import bonus_attack_damage

logger = logging.getLogger(__name__)

# ── Config ─────────────────────────────────────────────────────────────────────
DEFAULT_CRIT_MULTIPLIER = 1.75
CRIT_BONUS_MIN_CHANCE   = 0.60   # Infinity Edge bonus needs 60% crit chance

# Scaling tag → (label shown in breakdown, attacker stat getter)
SCALING_STATS = {
    ScalingStat.AP:        ("AP",   lambda s, base_ad: s.ability_power),
    ScalingStat.AD:        ("AD",   lambda s, base_ad: s.attack_damage),
    ScalingStat.BONUS_AD:  ("bAD",  lambda s, base_ad: bonus_attack_damage(s.attack_damage, base_ad)),
    ScalingStat.BASE_AD:   ("bsAD", lambda s, base_ad: base_ad),
    ScalingStat.MAX_HP:    ("HP",   lambda s, base_ad: s.hp),
    ScalingStat.ARMOR:     ("AR",   lambda s, base_ad: s.armor),
    ScalingStat.MR:        ("MR",   lambda s, base_ad: s.magic_resist),
    ScalingStat.LETHALITY: ("Leth", lambda s, base_ad: s.lethality),
}


# ── Penetration & mitigation ───────────────────────────────────────────────────

def effective_armor(target_armor: float, attacker_level: int,
                    armor_pen_percent: float, lethality: float) -> float:
    """Apply % armor pen, then lethality (scaled by attacker level)."""
    level = clamp_level(attacker_level)
    flat_pen = lethality * (0.6 + 0.4 * level / 18)

    armor_after_pct = target_armor * (1 - armor_pen_percent)
    return max(0.0, armor_after_pct - flat_pen)


def effective_magic_resist(target_mr: float, magic_pen_percent: float,
                           magic_pen_flat: float) -> float:
    mr_after_pct = target_mr * (1 - magic_pen_percent)
    return max(0.0, mr_after_pct - magic_pen_flat)


def defense_mitigation(effective_defense: float) -> float:
    """Defense → damage multiplier (1.0 = no reduction)."""
    if effective_defense <= 0:
        return 1.0
    return 100.0 / (100.0 + effective_defense)


def physical_damage(raw_damage: float, attacker: ComputedStats,
                    attacker_level: int, target: ComputedStats) -> int:
    armor = effective_armor(target.armor, attacker_level,
                            attacker.armor_pen_percent, attacker.lethality)
    return int(round_half_up(raw_damage * defense_mitigation(armor)))


def magic_damage(raw_damage: float, attacker: ComputedStats,
                 target: ComputedStats) -> int:
    mr = effective_magic_resist(target.magic_resist, attacker.magic_pen_percent,
                                attacker.magic_pen_flat)
    return int(round_half_up(raw_damage * defense_mitigation(mr)))


def mitigated_damage(raw_damage: float, damage_type: DamageType,
                     attacker: ComputedStats, attacker_level: int,
                     target: ComputedStats) -> int:
    damage_type = DamageType(damage_type)
    if damage_type is DamageType.PHYSICAL:
        return physical_damage(raw_damage, attacker, attacker_level, target)
    if damage_type is DamageType.MAGIC:
        return magic_damage(raw_damage, attacker, target)
    return int(round_half_up(raw_damage))


# ── Auto attacks ───────────────────────────────────────────────────────────────

def crit_damage_bonus(item_ids: Iterable[Optional[str]], attacker: ComputedStats,
                      supplements: Optional[Mapping] = None) -> float:
    """
    Extra crit multiplier from items, added to the base multiplier.

    Each distinct item counts once; bonuses from different items are summed.
    Nothing applies below CRIT_BONUS_MIN_CHANCE.
    """
    if attacker.crit_chance < CRIT_BONUS_MIN_CHANCE:
        return 0.0
    return sum(get_supplement(item_id, supplements).stats.crit_damage_bonus
               for item_id in {i for i in item_ids if i})


def auto_attack(
    attacker:        ComputedStats,
    attacker_level:  int,
    target:          ComputedStats,
    crit_multiplier: float = DEFAULT_CRIT_MULTIPLIER,
    crit_bonus:      float = 0.0,
) -> SingleDamageResult:
    """One basic attack. Mitigated value is the non-crit hit; crit goes in the breakdown."""
    raw = attacker.attack_damage
    mitigated = physical_damage(raw, attacker, attacker_level, target)

    crit_raw = raw * (crit_multiplier + crit_bonus)
    crit_mitigated = physical_damage(crit_raw, attacker, attacker_level, target)

    if attacker.crit_chance > 0:
        breakdown = f"{raw:.0f} AD (crit: {crit_mitigated})"
    else:
        breakdown = f"{raw:.0f} AD"

    return SingleDamageResult(
        label            = "Auto Attack",
        raw_damage       = raw,
        mitigated_damage = mitigated,
        damage_type      = DamageType.PHYSICAL,
        breakdown        = breakdown,
    )


# ── Abilities ──────────────────────────────────────────────────────────────────

def _fmt_number(value: float) -> str:
    return f"{value:g}" if float(value).is_integer() else f"{value:.1f}"


def scaling_value(term: ScalingTerm, attacker: ComputedStats, base_ad: float,
                  rank: int = 1) -> Optional[tuple]:
    """(label, damage) for one term, or None when the stat tag is not resolvable."""
    stat = ScalingStat.lookup(term.stat)
    if stat is None:
        logger.debug(f"Skipping scaling on unknown stat {term.stat!r}")
        return None
    label, getter = SCALING_STATS[stat]
    return label, getter(attacker, base_ad) * term.ratio_at(rank)


def ability_damage(
    label:          str,
    base_damage:    float,
    scalings:       Iterable[ScalingTerm],
    damage_type:    DamageType,
    attacker:       ComputedStats,
    attacker_level: int,
    target:         ComputedStats,
    base_ad:        Optional[float] = None,
    rank:           int = 1,
) -> SingleDamageResult:
    """
    Base damage plus every resolvable scaling term, then mitigation.

    base_ad defaults to attacker.base_attack_damage; rank picks per-rank ratios.
    """
    if base_ad is None:
        base_ad = attacker.base_attack_damage

    total_scaling = 0.0
    parts = []
    for term in scalings:
        resolved = scaling_value(term, attacker, base_ad, rank)
        if resolved is None:
            continue
        stat_label, damage = resolved
        total_scaling += damage
        parts.append(f"{damage:.0f}({term.ratio_at(rank) * 100:.0f}% {stat_label})")

    raw = base_damage + total_scaling
    mitigated = mitigated_damage(raw, damage_type, attacker, attacker_level, target)

    breakdown = _fmt_number(base_damage)
    if parts:
        breakdown += " + " + " + ".join(parts)

    return SingleDamageResult(
        label            = label,
        raw_damage       = round_half_up(raw),
        mitigated_damage = mitigated,
        damage_type      = DamageType(damage_type),
        breakdown        = breakdown,
    )


def resolve_ability(ability: ParsedAbility, rank: int, attacker: ComputedStats,
                    attacker_level: int, target: ComputedStats) -> SingleDamageResult:
    """Damage of a parsed ability at `rank`; unlearned or unparsed abilities deal 0."""
    label = f"{ability.key} ({ability.name})" if ability.name else ability.key
    if rank <= 0 or not ability.is_valid:
        return SingleDamageResult(
            label            = label,
            raw_damage       = 0,
            mitigated_damage = 0,
            damage_type      = ability.damage_type,
            breakdown        = "-" if rank <= 0 else "Data N/A",
        )
    return ability_damage(
        label, ability.base_damage_at(rank), ability.scalings, ability.damage_type,
        attacker, attacker_level, target, rank=rank,
    )


# ── Item passives ──────────────────────────────────────────────────────────────

# formula key → f(attacker, target) raw damage
PASSIVE_FORMULAS = {
    # Spellblade variants
    "2.0 * baseAD":             lambda a, t: 2.0 * a.base_attack_damage,
    "1.0 * baseAD":             lambda a, t: 1.0 * a.base_attack_damage,
    "0.75 * AP + 0.5 * baseAD": lambda a, t: 0.75 * a.ability_power + 0.5 * a.base_attack_damage,
    # On-hit (target assumed at full HP)
    "0.10 * targetCurrentHP":   lambda a, t: 0.10 * t.hp,
    "0.15 * AP":                lambda a, t: 0.15 * a.ability_power,
    "15 + 0.15 * AP":           lambda a, t: 15 + 0.15 * a.ability_power,
    "flatOnHit:42":             lambda a, t: 42,
    # Burst
    "100 + 0.10 * AP":          lambda a, t: 100 + 0.10 * a.ability_power,
}


def passive_raw_damage(passive: ItemPassive, attacker: ComputedStats,
                       target: ComputedStats) -> float:
    """Raw damage of an item passive; 0 for amplifiers and unknown formulas."""
    if not passive.formula:
        return 0.0
    formula = PASSIVE_FORMULAS.get(passive.formula)
    if formula is None:
        logger.debug(f"No formula for passive {passive.name!r}: {passive.formula!r}")
        return 0.0
    return formula(attacker, target)


def item_passive_damage(passive: ItemPassive, attacker: ComputedStats,
                        attacker_level: int,
                        target: ComputedStats) -> Optional[SingleDamageResult]:
    raw = passive_raw_damage(passive, attacker, target)
    if raw <= 0 or passive.damage_type is None:
        return None
    return SingleDamageResult(
        label            = passive.name,
        raw_damage       = round_half_up(raw),
        mitigated_damage = mitigated_damage(raw, passive.damage_type, attacker,
                                            attacker_level, target),
        damage_type      = passive.damage_type,
        breakdown        = passive.formula,
    )
