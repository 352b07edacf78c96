"""
Keystone rune damage data.
baseDamage is [level 1, level 18], linearly interpolated in between.
Adaptive keystones deal magic damage when AP > AD, physical otherwise.
"""

from dataclasses import dataclass
from typing import Optional

from dmgcalc.models import MAX_LEVEL, clamp_level, round_half_up

ADAPTIVE = "adaptive"

CONQUEROR_MAX_STACKS = 12


@dataclass(frozen=True)
class Keystone:
    id:          str
    riot_id:     int
    name:        str
    tree:        str
    base_damage: tuple      # (lv1, lv18)
    ad_ratio:    float
    ap_ratio:    float
    damage_type: str        # adaptive | physical | magic | true
    cooldown:    float

    @property
    def deals_damage(self) -> bool:
        return self.base_damage[0] > 0 or self.base_damage[1] > 0


KEYSTONES = {
    # --- Domination ---
    "electrocute":      Keystone("electrocute", 8112, "Electrocute", "Domination",
                                 (30, 180), 0.4, 0.25, ADAPTIVE, 25),
    "dark-harvest":     Keystone("dark-harvest", 8128, "Dark Harvest", "Domination",
                                 (20, 60), 0.25, 0.15, ADAPTIVE, 45),
    # --- Sorcery ---
    "arcane-comet":     Keystone("arcane-comet", 8229, "Arcane Comet", "Sorcery",
                                 (30, 100), 0.2, 0.35, ADAPTIVE, 20),
    "summon-aery":      Keystone("summon-aery", 8214, "Summon Aery", "Sorcery",
                                 (10, 40), 0.15, 0.1, ADAPTIVE, 0),
    # --- Precision ---
    # Conqueror / Lethal Tempo / Fleet Footwork are steroids or heals, no burst
    "conqueror":        Keystone("conqueror", 8010, "Conqueror", "Precision",
                                 (0, 0), 0, 0, ADAPTIVE, 0),
    "lethal-tempo":     Keystone("lethal-tempo", 8008, "Lethal Tempo", "Precision",
                                 (0, 0), 0, 0, "physical", 0),
    "press-the-attack": Keystone("press-the-attack", 8005, "Press the Attack", "Precision",
                                 (40, 180), 0, 0, ADAPTIVE, 6),
    "fleet-footwork":   Keystone("fleet-footwork", 8021, "Fleet Footwork", "Precision",
                                 (0, 0), 0, 0, "physical", 0),
    # --- Resolve ---
    "grasp-of-the-undying": Keystone("grasp-of-the-undying", 8437, "Grasp of the Undying",
                                     "Resolve", (0, 0), 0, 0, "magic", 4),
    # --- Inspiration ---
    "first-strike":     Keystone("first-strike", 8369, "First Strike", "Inspiration",
                                 (0, 0), 0, 0, "true", 25),
}


def keystone_damage_at_level(keystone: Keystone, level: int) -> int:
    low, high = keystone.base_damage
    lvl = clamp_level(level)
    return int(round_half_up(low + (high - low) * (lvl - 1) / (MAX_LEVEL - 1)))


def find_keystone_by_riot_id(riot_id: int) -> Optional[str]:
    for keystone in KEYSTONES.values():
        if keystone.riot_id == riot_id:
            return keystone.id
    return None


def conqueror_bonus_per_stack(level: int, is_ap: bool) -> float:
    """Conqueror adaptive bonus per stack: 1.2–3.6 AD or 2–6 AP by level."""
    lvl = clamp_level(level)
    if is_ap:
        return 2 + (6 - 2) * (lvl - 1) / 17
    return 1.2 + (3.6 - 1.2) * (lvl - 1) / 17
