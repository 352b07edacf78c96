"""
Item stats for the damage calculator, keyed by DDragon item id.

Two independent tables:
  ITEM_STATS:       flat stats in DDragon `stats` key form (the primary table).
                    A sample; real callers pass the table built from item.json
                    via item_table_from_ddragon().
  ITEM_SUPPLEMENTS: stats DDragon leaves out (lethality, penetration,
                    ability haste, crit damage bonus) plus damage and
                    amplifier passives.
"""

from typing import Mapping, Optional

from dmgcalc.models import (DamageType, ItemPassive, ItemSupplement,
                            SupplementaryStats)

# --- Primary flat stats (sample of item.json) ---

ITEM_STATS = {
    # Starters / boots
    "1055": {"FlatPhysicalDamageMod": 10, "FlatHPPoolMod": 80},      # Doran's Blade
    "1056": {"FlatMagicDamageMod": 18,   "FlatHPPoolMod": 90},       # Doran's Ring
    "3006": {"PercentAttackSpeedMod": 0.25, "FlatMovementSpeedMod": 45},  # Berserker's Greaves
    "3020": {"FlatMovementSpeedMod": 45},                            # Sorcerer's Shoes
    "3047": {"FlatArmorMod": 20,         "FlatMovementSpeedMod": 45},  # Plated Steelcaps

    # Lethality
    "3142": {"FlatPhysicalDamageMod": 55},                           # Youmuu's Ghostblade
    "3814": {"FlatPhysicalDamageMod": 50, "FlatHPPoolMod": 250},     # Edge of Night
    "6694": {"FlatPhysicalDamageMod": 55},                           # Serpent's Fang
    "6697": {"FlatPhysicalDamageMod": 60},                           # Hubris

    # Crit / armor pen
    "3031": {"FlatPhysicalDamageMod": 65, "FlatCritChanceMod": 0.25},  # Infinity Edge
    "3036": {"FlatPhysicalDamageMod": 35, "FlatCritChanceMod": 0.25},  # Lord Dominik's Regards
    "3033": {"FlatPhysicalDamageMod": 35, "FlatCritChanceMod": 0.25},  # Mortal Reminder
    "3071": {"FlatPhysicalDamageMod": 40, "FlatHPPoolMod": 400},     # Black Cleaver

    # On-hit / spellblade
    "3078": {"FlatPhysicalDamageMod": 36, "PercentAttackSpeedMod": 0.30,
             "FlatHPPoolMod": 333},                                  # Trinity Force
    "3100": {"FlatMagicDamageMod": 100},                             # Lich Bane
    "3153": {"FlatPhysicalDamageMod": 40, "PercentAttackSpeedMod": 0.25},  # Blade of the Ruined King
    "3115": {"FlatMagicDamageMod": 80,   "PercentAttackSpeedMod": 0.50},   # Nashor's Tooth
    "3091": {"PercentAttackSpeedMod": 0.55, "FlatSpellBlockMod": 45},      # Wit's End

    # Mage
    "3089": {"FlatMagicDamageMod": 130},                             # Rabadon's Deathcap
    "3135": {"FlatMagicDamageMod": 95},                              # Void Staff
    "4645": {"FlatMagicDamageMod": 110},                             # Shadowflame
    "6653": {"FlatMagicDamageMod": 90},                              # Stormsurge
    "6655": {"FlatMagicDamageMod": 90,   "FlatMPPoolMod": 600},      # Luden's Companion
    "3157": {"FlatMagicDamageMod": 105,  "FlatArmorMod": 50},        # Zhonya's Hourglass
    "3102": {"FlatMagicDamageMod": 105,  "FlatSpellBlockMod": 40},   # Banshee's Veil

    # Defensive
    "3075": {"FlatArmorMod": 75,         "FlatHPPoolMod": 150},      # Thornmail
    "3143": {"FlatArmorMod": 75,         "FlatHPPoolMod": 350},      # Randuin's Omen
    "3110": {"FlatArmorMod": 65,         "FlatMPPoolMod": 400},      # Frozen Heart
    "3065": {"FlatSpellBlockMod": 50,    "FlatHPPoolMod": 450},      # Spirit Visage
    "3026": {"FlatPhysicalDamageMod": 55, "FlatArmorMod": 45},       # Guardian Angel
    "6333": {"FlatPhysicalDamageMod": 60, "FlatArmorMod": 50},       # Death's Dance
}

# --- Supplementary stats and passives ---

SPELLBLADE = "Spellblade"

ITEM_SUPPLEMENTS = {
    # ====== LETHALITY ======
    "3142": ItemSupplement(SupplementaryStats(lethality=18, ability_haste=15)),  # Youmuu's
    "3814": ItemSupplement(SupplementaryStats(lethality=10, ability_haste=15)),  # Edge of Night
    "6694": ItemSupplement(SupplementaryStats(lethality=12, ability_haste=10)),  # Serpent's Fang
    "6697": ItemSupplement(SupplementaryStats(lethality=15, ability_haste=10)),  # Hubris
    "6701": ItemSupplement(SupplementaryStats(lethality=18)),                    # Opportunity
    "6698": ItemSupplement(SupplementaryStats(lethality=12)),                    # Voltaic Cyclosword
    "6696": ItemSupplement(SupplementaryStats(lethality=12, ability_haste=20)),  # Profane Hydra

    # ====== ARMOR PENETRATION ======
    "3036": ItemSupplement(SupplementaryStats(armor_pen_percent=0.35)),          # Lord Dominik's
    "3033": ItemSupplement(SupplementaryStats(armor_pen_percent=0.35)),          # Mortal Reminder
    "3071": ItemSupplement(SupplementaryStats(armor_pen_percent=0.30, ability_haste=20)),  # Black Cleaver
    "6695": ItemSupplement(SupplementaryStats(armor_pen_percent=0.30, ability_haste=15)),  # Serylda's Grudge

    # ====== MAGIC PENETRATION ======
    "3020": ItemSupplement(SupplementaryStats(magic_pen_flat=15)),               # Sorcerer's Shoes
    "4645": ItemSupplement(SupplementaryStats(magic_pen_flat=12)),               # Shadowflame
    "3135": ItemSupplement(SupplementaryStats(magic_pen_percent=0.40)),          # Void Staff
    "6620": ItemSupplement(SupplementaryStats(magic_pen_flat=10)),               # Cryptbloom
    "6653": ItemSupplement(                                                      # Stormsurge
        SupplementaryStats(magic_pen_flat=10),
        (ItemPassive("Squall", "burst", formula="100 + 0.10 * AP",
                     damage_type=DamageType.MAGIC, cooldown=30),),
    ),

    # ====== SPELLBLADE ======
    "3078": ItemSupplement(                                                      # Trinity Force
        SupplementaryStats(ability_haste=20),
        (ItemPassive(SPELLBLADE, "after_ability", formula="2.0 * baseAD",
                     damage_type=DamageType.PHYSICAL, cooldown=1.5),),
    ),
    "3100": ItemSupplement(                                                      # Lich Bane
        SupplementaryStats(ability_haste=10),
        (ItemPassive(SPELLBLADE, "after_ability", formula="0.75 * AP + 0.5 * baseAD",
                     damage_type=DamageType.MAGIC, cooldown=2.5),),
    ),
    "6662": ItemSupplement(                                                      # Iceborn Gauntlet
        SupplementaryStats(ability_haste=20),
        (ItemPassive(SPELLBLADE, "after_ability", formula="1.0 * baseAD",
                     damage_type=DamageType.PHYSICAL, cooldown=1.5),),
    ),
    "3508": ItemSupplement(                                                      # Essence Reaver
        SupplementaryStats(ability_haste=20),
        (ItemPassive(SPELLBLADE, "after_ability", formula="1.0 * baseAD",
                     damage_type=DamageType.PHYSICAL, cooldown=1.5),),
    ),

    # ====== ON-HIT ======
    "3153": ItemSupplement(passives=(                                            # Blade of the Ruined King
        ItemPassive("Mist's Edge", "on_hit", formula="0.10 * targetCurrentHP",
                    damage_type=DamageType.PHYSICAL),)),
    "3115": ItemSupplement(                                                      # Nashor's Tooth
        SupplementaryStats(ability_haste=10),
        (ItemPassive("Icathian Bite", "on_hit", formula="15 + 0.15 * AP",
                     damage_type=DamageType.MAGIC),),
    ),
    "3091": ItemSupplement(passives=(                                            # Wit's End
        ItemPassive("Fray", "on_hit", formula="flatOnHit:42",
                    damage_type=DamageType.MAGIC),)),

    # ====== CRIT / AP AMPLIFICATION ======
    # IE bonus only counts at >= 60% crit chance
    "3031": ItemSupplement(SupplementaryStats(crit_damage_bonus=0.40)),          # Infinity Edge
    "3089": ItemSupplement(passives=(                                            # Rabadon's Deathcap
        ItemPassive("Magical Opus", "passive", amplify_stat="ap",
                    amplify_multiplier=1.35),)),

    # ====== BURST ======
    "6655": ItemSupplement(                                                      # Luden's Companion
        SupplementaryStats(magic_pen_flat=10, ability_haste=10),
        (ItemPassive("Fire", "burst", formula="100 + 0.10 * AP",
                     damage_type=DamageType.MAGIC, cooldown=10),),
    ),

    # ====== ABILITY HASTE ONLY ======
    "4629": ItemSupplement(SupplementaryStats(ability_haste=25)),   # Cosmic Drive
    "3110": ItemSupplement(SupplementaryStats(ability_haste=20)),   # Frozen Heart
    "3157": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Zhonya's Hourglass
    "3102": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Banshee's Veil
    "6675": ItemSupplement(SupplementaryStats(ability_haste=15)),   # Navori Flickerblade
    "6333": ItemSupplement(SupplementaryStats(ability_haste=15)),   # Death's Dance
    "3156": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Maw of Malmortius
    "3065": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Spirit Visage
    "6664": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Hollow Radiance
    "6665": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Jak'Sho
    "4633": ItemSupplement(SupplementaryStats(ability_haste=15)),   # Liandry's Torment
    "6657": ItemSupplement(SupplementaryStats(ability_haste=10)),   # Rod of Ages
    "3158": ItemSupplement(SupplementaryStats(ability_haste=15)),   # Ionian Boots of Lucidity
}

# --- Name lookup (for CLI input) ---

ITEM_IDS_BY_NAME = {
    "dorans_blade":            "1055",
    "dorans_ring":             "1056",
    "berserkers_greaves":      "3006",
    "sorcerers_shoes":         "3020",
    "plated_steelcaps":        "3047",
    "youmuus_ghostblade":      "3142",
    "edge_of_night":           "3814",
    "serpents_fang":           "6694",
    "hubris":                  "6697",
    "infinity_edge":           "3031",
    "lord_dominiks_regards":   "3036",
    "mortal_reminder":         "3033",
    "black_cleaver":           "3071",
    "trinity_force":           "3078",
    "lich_bane":               "3100",
    "blade_of_the_ruined_king": "3153",
    "nashors_tooth":           "3115",
    "wits_end":                "3091",
    "rabadons_deathcap":       "3089",
    "void_staff":              "3135",
    "shadowflame":             "4645",
    "stormsurge":              "6653",
    "ludens_companion":        "6655",
    "zhonyas_hourglass":       "3157",
    "banshees_veil":           "3102",
    "thornmail":               "3075",
    "randuins_omen":           "3143",
    "frozen_heart":            "3110",
    "spirit_visage":           "3065",
    "guardian_angel":          "3026",
    "deaths_dance":            "6333",
}


def _normalize_item_key(name: str) -> str:
    return (name.lower()
            .replace("'", "")
            .replace(" ", "_")
            .replace("-", "_"))


def get_item_id(name_or_id: str) -> Optional[str]:
    """Accept an item id or a display name; return the id or None."""
    if name_or_id.isdigit():
        return name_or_id
    return ITEM_IDS_BY_NAME.get(_normalize_item_key(name_or_id))


def get_supplement(item_id: str, supplements: Optional[Mapping] = None) -> ItemSupplement:
    table = ITEM_SUPPLEMENTS if supplements is None else supplements
    return table.get(item_id, ItemSupplement())


def item_table_from_ddragon(item_json: Mapping) -> dict:
    """item.json payload (or its `data` map) → {item_id: {stat_key: value}}."""
    entries = item_json.get("data", item_json)
    return {
        item_id: dict(entry.get("stats") or {})
        for item_id, entry in entries.items()
        if isinstance(entry, Mapping)
    }
