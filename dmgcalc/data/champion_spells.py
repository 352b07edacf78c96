"""
Sample ability data for the damage calculator, in the two raw shapes the
parser understands.

CHAMPION_SPELLS: DDragon champion `spells` entries (tooltip shape).
  - 'tooltip': markup; <magicDamage>/<physicalDamage>/<trueDamage> give the type
  - 'effect':  effect[i] = per-rank values, referenced as {{ eN }}
  - 'vars':    ratio vars, 'link' names the stat, 'coeff' scalar or per rank

CHAMPION_BIN: CommunityDragon bin.json entries (formula shape), keyed the way
bin.json keys them.

Add more champions as needed.
"""


def _spell(spell_id, name, tooltip, base, vars=(), maxrank=5, cooldown=()):
    return {
        "id": spell_id,
        "name": name,
        "tooltip": tooltip,
        "maxrank": maxrank,
        "cooldown": list(cooldown),
        "effect": [None, list(base)],
        "vars": [dict(v) for v in vars],
    }


def _ratio(key, link, coeff):
    return {"key": key, "link": link, "coeff": coeff}


_MAGIC    = "Deals <magicDamage>{{ e1 }} (+{{ a1 }}) magic damage</magicDamage>."
_PHYSICAL = "Deals <physicalDamage>{{ e1 }} (+{{ a1 }}) physical damage</physicalDamage>."
_TRUE     = "Deals <trueDamage>{{ e1 }} (+{{ a1 }}) true damage</trueDamage>."

CHAMPION_SPELLS = {
    "ahri": [
        _spell("AhriQ", "Orb of Deception", _MAGIC, [40, 65, 90, 115, 140],
               [_ratio("a1", "spelldamage", 0.45)], cooldown=[7] * 5),
        _spell("AhriW", "Fox-Fire", _MAGIC, [50, 75, 100, 125, 150],
               [_ratio("a1", "spelldamage", 0.3)], cooldown=[9, 8, 7, 6, 5]),
        _spell("AhriE", "Charm", _MAGIC, [80, 110, 140, 170, 200],
               [_ratio("a1", "spelldamage", 0.8)], cooldown=[12] * 5),
        _spell("AhriR", "Spirit Rush", _MAGIC, [60, 90, 120],
               [_ratio("a1", "spelldamage", 0.35)], maxrank=3, cooldown=[130, 105, 80]),
    ],
    "annie": [
        _spell("AnnieQ", "Disintegrate", _MAGIC, [80, 115, 150, 185, 220],
               [_ratio("a1", "spelldamage", 0.75)], cooldown=[4] * 5),
        _spell("AnnieW", "Incinerate", _MAGIC, [70, 115, 160, 205, 250],
               [_ratio("a1", "spelldamage", 0.85)], cooldown=[8] * 5),
        _spell("AnnieE", "Molten Shield", "Grants a shield.", [0, 0, 0, 0, 0],
               cooldown=[14, 13, 12, 11, 10]),
        _spell("AnnieR", "Summon: Tibbers", _MAGIC, [150, 275, 400],
               [_ratio("a1", "spelldamage", 0.75)], maxrank=3, cooldown=[120, 100, 80]),
    ],
    "garen": [
        _spell("GarenQ", "Decisive Strike", _PHYSICAL, [30, 60, 90, 120, 150],
               [_ratio("a1", "attackdamage", 0.5)], cooldown=[8] * 5),
        _spell("GarenW", "Courage", "Reduces incoming damage.", [0, 0, 0, 0, 0],
               cooldown=[20, 19, 18, 17, 16]),
        _spell("GarenE", "Judgment", _PHYSICAL, [4, 8, 12, 16, 20],
               [_ratio("a1", "attackdamage", [0.32, 0.34, 0.36, 0.38, 0.4]),
                _ratio("a2", "bonushealth", 0.01)],
               cooldown=[9] * 5),
        _spell("GarenR", "Demacian Justice", _TRUE, [150, 300, 450],
               maxrank=3, cooldown=[120, 100, 80]),
    ],
    "darius": [
        _spell("DariusCleave", "Decimate", _PHYSICAL, [50, 80, 110, 140, 170],
               [_ratio("a1", "attackdamage", [1.0, 1.1, 1.2, 1.3, 1.4])],
               cooldown=[9, 8, 7, 6, 5]),
        _spell("DariusNoxianTacticsONH", "Crippling Strike", _PHYSICAL, [0, 0, 0, 0, 0],
               [_ratio("a1", "attackdamage", [1.4, 1.45, 1.5, 1.55, 1.6])],
               cooldown=[7, 6.5, 6, 5.5, 5]),
        _spell("DariusAxeGrabCone", "Apprehend", "Pulls enemies in.", [0, 0, 0, 0, 0],
               cooldown=[24, 21, 18, 15, 12]),
        _spell("DariusExecute", "Noxian Guillotine", _TRUE, [125, 250, 375],
               [_ratio("a1", "bonusattackdamage", 0.75)], maxrank=3,
               cooldown=[120, 100, 80]),
    ],
    "khazix": [
        _spell("KhazixQ", "Taste Their Fear", _PHYSICAL, [60, 85, 110, 135, 160],
               [_ratio("a1", "bonusattackdamage", 1.1)], cooldown=[4] * 5),
        _spell("KhazixW", "Void Spike", _PHYSICAL, [85, 115, 145, 175, 205],
               [_ratio("a1", "bonusattackdamage", 1.0)], cooldown=[9] * 5),
        _spell("KhazixE", "Leap", _PHYSICAL, [65, 100, 135, 170, 205],
               [_ratio("a1", "bonusattackdamage", 0.2)], cooldown=[20, 18, 16, 14, 12]),
        _spell("KhazixR", "Void Assault", "Becomes invisible.", [0, 0, 0],
               maxrank=3, cooldown=[100, 85, 70]),
    ],
    "jinx": [
        _spell("JinxQ", "Switcheroo!", "Swaps weapons.", [0, 0, 0, 0, 0],
               cooldown=[0.9] * 5),
        _spell("JinxW", "Zap!", _PHYSICAL, [10, 60, 110, 160, 210],
               [_ratio("a1", "attackdamage", 1.6)], cooldown=[8, 7, 6, 5, 4]),
        _spell("JinxE", "Flame Chompers!", _MAGIC, [70, 120, 170, 220, 270],
               [_ratio("a1", "spelldamage", 1.0)], cooldown=[24, 20.5, 17, 13.5, 10]),
        _spell("JinxR", "Super Mega Death Rocket!", _PHYSICAL, [325, 475, 625],
               [_ratio("a1", "bonusattackdamage", 1.65)], maxrank=3,
               cooldown=[85, 65, 45]),
    ],
}

CHAMPION_BIN = {
    "ahri": {
        "Characters/Ahri/Spells/AhriQAbility/AhriQ": {
            "mSpell": {
                "mCastTime": 0.25,
                "DataValues": [
                    {"mName": "BaseDamage", "mValues": [0, 40, 65, 90, 115, 140, 165]},
                    {"mName": "APRatio",    "mValues": [0.45] * 7},
                ],
                "mSpellCalculations": {
                    "TotalDamage": {
                        "__type": "GameCalculation",
                        "mFormulaParts": [
                            {"__type": "NamedDataValueCalculationPart",
                             "mDataValue": "BaseDamage"},
                            {"__type": "StatByNamedDataValueCalculationPart",
                             "mDataValue": "APRatio"},
                        ],
                    },
                },
            },
        },
    },
}


def _champion_key(champion_name: str) -> str:
    return (champion_name.lower()
            .replace("'", "")
            .replace(" ", "")
            .replace(".", ""))


def get_champion_spells(champion_name: str) -> list:
    """DDragon `spells` list for the champion ([] when we have no sample)."""
    return CHAMPION_SPELLS.get(_champion_key(champion_name), [])


def get_champion_bin(champion_name: str):
    return CHAMPION_BIN.get(_champion_key(champion_name))


def estimate_spell_ranks(level: int) -> tuple:
    """
    Typical (Q, W, E, R) ranks at a champion level.
    R ranks at 6/11/16; remaining points go Q → W → E, max 5 each.
    """
    if level < 1:
        return (0, 0, 0, 0)
    r_rank = 3 if level >= 16 else 2 if level >= 11 else 1 if level >= 6 else 0
    remaining = min(level, 18) - r_rank
    q_rank = min(5, remaining)
    w_rank = min(5, max(0, remaining - 5))
    e_rank = min(5, max(0, remaining - 10))
    return (q_rank, w_rank, e_rank, r_rank)
