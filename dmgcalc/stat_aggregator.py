"""
Stat Aggregator — champion base curve + level + items → ComputedStats.

Rounding happens at fixed checkpoints (level stats, attack speed, amplified AP,
final hp/mp/AD), not once at the end; each checkpoint is a named intermediate
so it can be asserted on its own.
"""

from typing import Iterable, Mapping, Optional
import logging

from dmgcalc.data.item_stats import ITEM_SUPPLEMENTS
from dmgcalc.models import (BaseAttributeCurve, ComputedStats, clamp_level,
                            round_half_up)

logger = logging.getLogger(__name__)

# DDragon item stat key → ComputedStats field
# PercentAttackSpeedMod is handled separately (applied to base AS once)
DDRAGON_STAT_MAP = {
    "FlatHPPoolMod":          "hp",
    "FlatMPPoolMod":          "mp",
    "FlatPhysicalDamageMod":  "attack_damage",
    "FlatMagicDamageMod":     "ability_power",
    "FlatArmorMod":           "armor",
    "FlatSpellBlockMod":      "magic_resist",
    "FlatCritChanceMod":      "crit_chance",
    "FlatMovementSpeedMod":   "move_speed",
}

SUPPLEMENTARY_FIELDS = ("lethality", "armor_pen_percent", "magic_pen_flat",
                        "magic_pen_percent", "ability_haste")


def stat_at_level(base: float, growth: float, level: int) -> float:
    """Official growth law: base + growth * (lvl-1) * (0.7025 + 0.0175 * (lvl-1))."""
    return base + growth * (level - 1) * (0.7025 + 0.0175 * (level - 1))


def level_stats(curve: BaseAttributeCurve, level: int) -> dict:
    """First checkpoint: the champion's own stats at `level`, before items."""
    lvl = clamp_level(level)
    return {
        "hp":            round_half_up(stat_at_level(curve.hp, curve.hp_per_level, lvl)),
        "mp":            round_half_up(stat_at_level(curve.mp, curve.mp_per_level, lvl)),
        "armor":         round_half_up(stat_at_level(curve.armor, curve.armor_per_level, lvl), 1),
        "magic_resist":  round_half_up(stat_at_level(curve.magic_resist,
                                                     curve.magic_resist_per_level, lvl), 1),
        "attack_damage": round_half_up(stat_at_level(curve.attack_damage,
                                                     curve.attack_damage_per_level, lvl), 1),
        "move_speed":    stat_at_level(curve.move_speed, curve.move_speed_per_level, lvl),
    }


def base_attack_damage(curve: BaseAttributeCurve, level: int) -> float:
    """Level-only AD, rounded to 0.1 (what bonus-AD ratios are measured against)."""
    return level_stats(curve, level)["attack_damage"]


def bonus_attack_damage(total_ad: float, base_ad: float) -> float:
    return max(0.0, total_ad - base_ad)


def attack_speed_growth(curve: BaseAttributeCurve, level: int) -> float:
    """Level part of the attack speed ratio (fraction of base AS)."""
    return curve.attack_speed_per_level * (clamp_level(level) - 1) / 100


def compute_stats(
    curve:       BaseAttributeCurve,
    level:       int,
    item_ids:    Iterable[Optional[str]],
    item_table:  Optional[Mapping] = None,
    supplements: Optional[Mapping] = None,
) -> ComputedStats:
    """
    Full stats for one champion at one (level, loadout).

    curve:       base stats and growth
    level:       clamped to 1–18
    item_ids:    loadout; duplicates allowed, None/"" are empty slots
    item_table:  {item_id: {ddragon_stat_key: value}}; unknown ids add nothing
    supplements: {item_id: ItemSupplement}; defaults to ITEM_SUPPLEMENTS
    """
    item_table  = item_table or {}
    supplements = ITEM_SUPPLEMENTS if supplements is None else supplements
    lvl         = clamp_level(level)

    base = level_stats(curve, lvl)
    totals = dict(base)
    totals.update({
        "ability_power": 0.0,
        "crit_chance":   0.0,
        **{name: 0.0 for name in SUPPLEMENTARY_FIELDS},
    })

    bonus_as_percent = 0.0
    amplifiers = {}   # passive name → (stat, multiplier); presence, not count

    for item_id in item_ids:
        if not item_id:
            continue
        known = False

        if item_id in item_table:
            known = True
            item_stats = item_table[item_id] or {}
            for dd_key, field_name in DDRAGON_STAT_MAP.items():
                value = item_stats.get(dd_key)
                if value:
                    totals[field_name] += value
            bonus_as_percent += item_stats.get("PercentAttackSpeedMod", 0) or 0

        supplement = supplements.get(item_id)
        if supplement is not None:
            known = True
            for field_name in SUPPLEMENTARY_FIELDS:
                totals[field_name] += getattr(supplement.stats, field_name)
            for passive in supplement.passives:
                if passive.amplify_stat:
                    amplifiers[passive.name] = (passive.amplify_stat,
                                                passive.amplify_multiplier)

        if not known:
            logger.debug(f"Unknown item id {item_id!r}, contributes nothing")

    # Attack speed: bonus % is a fraction of base AS, added after the level term
    as_growth    = attack_speed_growth(curve, lvl)
    attack_speed = round_half_up(curve.attack_speed * (1 + as_growth + bonus_as_percent), 3)

    # Unique amplifiers on the already-summed total
    for stat, multiplier in amplifiers.values():
        if stat == "ap":
            totals["ability_power"] = round_half_up(totals["ability_power"] * multiplier)

    return ComputedStats(
        hp                 = round_half_up(totals["hp"]),
        mp                 = round_half_up(totals["mp"]),
        armor              = totals["armor"],
        magic_resist       = totals["magic_resist"],
        attack_damage      = round_half_up(totals["attack_damage"], 1),
        attack_speed       = attack_speed,
        ability_power      = totals["ability_power"],
        crit_chance        = totals["crit_chance"],
        lethality          = totals["lethality"],
        armor_pen_percent  = min(max(totals["armor_pen_percent"], 0.0), 1.0),
        magic_pen_flat     = totals["magic_pen_flat"],
        magic_pen_percent  = min(max(totals["magic_pen_percent"], 0.0), 1.0),
        ability_haste      = totals["ability_haste"],
        move_speed         = totals["move_speed"],
        base_attack_damage = base["attack_damage"],
    )
