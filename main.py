"""
LoL Damage Calculator — Main Entry Point

Prints the full combo of one champion against another from the bundled sample
data (champion curves, spells, items, keystones):

  python main.py ahri garen --level 11 --target-level 11 \
      --items ludens_companion sorcerers_shoes 3089 --keystone electrocute

Steps:
  1. Build both champions' stat snapshots (level + items)
  2. Parse the attacker's Q/W/E/R (bin.json numbers first, DDragon tooltip fallback)
  3. Resolve auto attack, abilities, item passives and keystone vs the target
  4. Print the breakdown
"""

import argparse
import logging
import sys

from dmgcalc.combo_calculator import CombatantSetup, calculate_damage, format_result
from dmgcalc.data.champion_spells import get_champion_bin, get_champion_spells
from dmgcalc.data.champion_stats import get_champion_curve
from dmgcalc.data.item_stats import ITEM_STATS, get_item_id
from dmgcalc.data.keystones import CONQUEROR_MAX_STACKS, KEYSTONES
from dmgcalc.spell_parser import parse_all_spells
from dmgcalc.stat_aggregator import compute_stats

# ── Config ─────────────────────────────────────────────────────────────────────
DEFAULT_ATTACKER = "ahri"
DEFAULT_TARGET   = "garen"
DEFAULT_LEVEL    = 11

logger = logging.getLogger("main")


def resolve_items(names) -> tuple:
    """Item names or ids → ids; unknown names are reported and skipped."""
    ids = []
    for name in names or ():
        item_id = get_item_id(name)
        if item_id is None:
            logger.warning(f"Unknown item {name!r}, skipping")
            continue
        ids.append(item_id)
    return tuple(ids)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LoL champion combo damage calculator")
    parser.add_argument("attacker", nargs="?", default=DEFAULT_ATTACKER)
    parser.add_argument("target", nargs="?", default=DEFAULT_TARGET)
    parser.add_argument("--level", type=int, default=DEFAULT_LEVEL,
                        help="attacker level (1-18)")
    parser.add_argument("--target-level", type=int, default=None,
                        help="target level (defaults to --level)")
    parser.add_argument("--items", nargs="*", default=[],
                        help="attacker items, by id or name (e.g. 3089 or rabadons_deathcap)")
    parser.add_argument("--target-items", nargs="*", default=[])
    parser.add_argument("--keystone", choices=sorted(KEYSTONES), default=None)
    parser.add_argument("--conqueror-stacks", type=int, default=CONQUEROR_MAX_STACKS)
    parser.add_argument("--ranks", type=int, nargs=4, default=None,
                        metavar=("Q", "W", "E", "R"),
                        help="ability ranks (estimated from level when omitted)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    target_level = args.target_level if args.target_level is not None else args.level

    attacker = CombatantSetup(
        curve            = get_champion_curve(args.attacker),
        level            = args.level,
        item_ids         = resolve_items(args.items),
        abilities        = tuple(parse_all_spells(get_champion_spells(args.attacker),
                                                  get_champion_bin(args.attacker),
                                                  args.attacker.capitalize())),
        spell_ranks      = tuple(args.ranks) if args.ranks else None,
        keystone         = args.keystone,
        conqueror_stacks = args.conqueror_stacks,
    )
    if not attacker.abilities:
        logger.warning(f"No spell data for {args.attacker!r}; auto attacks and items only")

    try:
        target_stats = compute_stats(get_champion_curve(args.target), target_level,
                                     resolve_items(args.target_items), ITEM_STATS)
        result = calculate_damage(attacker, target_stats, item_table=ITEM_STATS)
    except Exception as calc_err:
        logger.warning(f"Calculator error: {calc_err}")
        return 1

    print(f"{args.attacker.capitalize()} (lvl {args.level}) → "
          f"{args.target.capitalize()} (lvl {target_level}, {target_stats.hp:.0f} HP)")
    print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
