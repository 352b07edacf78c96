"""
Champion base stats in DDragon `stats` form (hp, growth, AD, AS, ...).
Source: DDragon champion.json (patch 14.x). A sample for the demo and tests;
real callers pass their own curves.
Add more champions as needed.
"""

from dmgcalc.models import BaseAttributeCurve

CHAMPION_STATS = {
    # Mages
    "ahri": {
        "hp": 590, "hpperlevel": 104, "mp": 418, "mpperlevel": 25,
        "armor": 21, "armorperlevel": 4.2, "spellblock": 30, "spellblockperlevel": 1.3,
        "attackdamage": 53, "attackdamageperlevel": 3,
        "attackspeed": 0.668, "attackspeedperlevel": 2.2, "movespeed": 330,
    },
    "annie": {
        "hp": 560, "hpperlevel": 96, "mp": 418, "mpperlevel": 25,
        "armor": 23, "armorperlevel": 4, "spellblock": 30, "spellblockperlevel": 1.3,
        "attackdamage": 50, "attackdamageperlevel": 2.65,
        "attackspeed": 0.61, "attackspeedperlevel": 1.36, "movespeed": 335,
    },
    "veigar": {
        "hp": 550, "hpperlevel": 108, "mp": 490, "mpperlevel": 26,
        "armor": 18, "armorperlevel": 5.2, "spellblock": 32, "spellblockperlevel": 1.3,
        "attackdamage": 52, "attackdamageperlevel": 2.7,
        "attackspeed": 0.625, "attackspeedperlevel": 2.24, "movespeed": 340,
    },
    # Fighters / assassins
    "garen": {
        "hp": 690, "hpperlevel": 98, "mp": 0, "mpperlevel": 0,
        "armor": 38, "armorperlevel": 4.2, "spellblock": 32, "spellblockperlevel": 1.55,
        "attackdamage": 69, "attackdamageperlevel": 4.5,
        "attackspeed": 0.625, "attackspeedperlevel": 3.65, "movespeed": 340,
    },
    "darius": {
        "hp": 652, "hpperlevel": 114, "mp": 263, "mpperlevel": 58,
        "armor": 39, "armorperlevel": 5.2, "spellblock": 32, "spellblockperlevel": 2.05,
        "attackdamage": 64, "attackdamageperlevel": 5,
        "attackspeed": 0.625, "attackspeedperlevel": 1, "movespeed": 340,
    },
    "khazix": {
        "hp": 643, "hpperlevel": 99, "mp": 327, "mpperlevel": 40,
        "armor": 32, "armorperlevel": 4.2, "spellblock": 32, "spellblockperlevel": 2.05,
        "attackdamage": 60, "attackdamageperlevel": 3.1,
        "attackspeed": 0.668, "attackspeedperlevel": 2.7, "movespeed": 350,
    },
    # Marksmen
    "jinx": {
        "hp": 630, "hpperlevel": 105, "mp": 260, "mpperlevel": 50,
        "armor": 26, "armorperlevel": 4.7, "spellblock": 30, "spellblockperlevel": 1.3,
        "attackdamage": 59, "attackdamageperlevel": 3.15,
        "attackspeed": 0.625, "attackspeedperlevel": 1.4, "movespeed": 325,
    },
    # Tanks
    "malphite": {
        "hp": 665, "hpperlevel": 104, "mp": 280, "mpperlevel": 60,
        "armor": 37, "armorperlevel": 4.95, "spellblock": 28, "spellblockperlevel": 2.05,
        "attackdamage": 62, "attackdamageperlevel": 4,
        "attackspeed": 0.736, "attackspeedperlevel": 3.4, "movespeed": 335,
    },
    # Generic fallback values
    "_default": {
        "hp": 600, "hpperlevel": 100, "mp": 300, "mpperlevel": 40,
        "armor": 28, "armorperlevel": 4.5, "spellblock": 30, "spellblockperlevel": 1.5,
        "attackdamage": 60, "attackdamageperlevel": 3.5,
        "attackspeed": 0.65, "attackspeedperlevel": 2.5, "movespeed": 335,
    },
}


def _champion_key(champion_name: str) -> str:
    return champion_name.lower().replace("'", "").replace(" ", "").replace(".", "")


def get_champion_stats(champion_name: str) -> dict:
    """Return DDragon stats block for champion. Falls back to _default if unknown."""
    return CHAMPION_STATS.get(_champion_key(champion_name), CHAMPION_STATS["_default"])


def get_champion_curve(champion_name: str) -> BaseAttributeCurve:
    return BaseAttributeCurve.from_ddragon(get_champion_stats(champion_name))
