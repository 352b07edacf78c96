"""
Value objects shared by the aggregator, the parser and the resolver.

Every object here is a frozen dataclass: built once per query, never mutated,
safe to hand across threads.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional
import math

# ── Level bounds ───────────────────────────────────────────────────────────────
MIN_LEVEL = 1
MAX_LEVEL = 18


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the game client does (0.5 always goes up, also for 2.5)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


# ── Enums ──────────────────────────────────────────────────────────────────────

class DamageType(str, Enum):
    PHYSICAL = "physical"
    MAGIC    = "magic"
    TRUE     = "true"


class ScalingStat(str, Enum):
    """Attacker stats an ability ratio can point at."""
    AP         = "ap"
    AD         = "ad"
    BONUS_AD   = "bonus_ad"
    BASE_AD    = "base_ad"
    MAX_HP     = "max_hp"
    ARMOR      = "armor"
    MR         = "mr"
    LETHALITY  = "lethality"

    @classmethod
    def lookup(cls, token) -> Optional["ScalingStat"]:
        """Return the tag for `token`, or None when it is not one we resolve."""
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            return None


# ── Champion base curve ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BaseAttributeCurve:
    hp:                     float
    hp_per_level:           float
    mp:                     float
    mp_per_level:           float
    armor:                  float
    armor_per_level:        float
    magic_resist:           float
    magic_resist_per_level: float
    attack_damage:          float
    attack_damage_per_level: float
    attack_speed:           float
    attack_speed_per_level: float   # percent, e.g. 2.5 = +2.5% per level
    move_speed:             float
    move_speed_per_level:   float = 0.0

    @classmethod
    def from_ddragon(cls, stats: Mapping) -> "BaseAttributeCurve":
        """Build from a DDragon champion `stats` block (missing keys → 0)."""
        return cls(
            hp                      = stats.get("hp", 0),
            hp_per_level            = stats.get("hpperlevel", 0),
            mp                      = stats.get("mp", 0),
            mp_per_level            = stats.get("mpperlevel", 0),
            armor                   = stats.get("armor", 0),
            armor_per_level         = stats.get("armorperlevel", 0),
            magic_resist            = stats.get("spellblock", 0),
            magic_resist_per_level  = stats.get("spellblockperlevel", 0),
            attack_damage           = stats.get("attackdamage", 0),
            attack_damage_per_level = stats.get("attackdamageperlevel", 0),
            attack_speed            = stats.get("attackspeed", 0),
            attack_speed_per_level  = stats.get("attackspeedperlevel", 0),
            move_speed              = stats.get("movespeed", 0),
        )


# ── Item data ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SupplementaryStats:
    """Stats DDragon's item `stats` block does not carry."""
    lethality:          float = 0.0
    armor_pen_percent:  float = 0.0
    magic_pen_flat:     float = 0.0
    magic_pen_percent:  float = 0.0
    ability_haste:      float = 0.0
    crit_damage_bonus:  float = 0.0


@dataclass(frozen=True)
class ItemPassive:
    name:           str
    trigger:        str                          # on_hit | after_ability | burst | passive
    formula:        Optional[str] = None         # key into the passive formula table
    damage_type:    Optional[DamageType] = None
    amplify_stat:   Optional[str] = None         # e.g. "ap"
    amplify_multiplier: float = 1.0
    cooldown:       Optional[float] = None


@dataclass(frozen=True)
class ItemSupplement:
    stats:    SupplementaryStats = field(default_factory=SupplementaryStats)
    passives: tuple = ()


# ── Computed stats ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ComputedStats:
    hp:                 float = 0.0
    mp:                 float = 0.0
    armor:              float = 0.0
    magic_resist:       float = 0.0
    attack_damage:      float = 0.0
    attack_speed:       float = 0.0
    ability_power:      float = 0.0
    crit_chance:        float = 0.0
    lethality:          float = 0.0
    armor_pen_percent:  float = 0.0
    magic_pen_flat:     float = 0.0
    magic_pen_percent:  float = 0.0
    ability_haste:      float = 0.0
    move_speed:         float = 0.0
    # level-only AD (no items); feeds bonus/base AD ratios and spellblade
    base_attack_damage: float = 0.0


# ── Abilities ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScalingTerm:
    stat:   ScalingStat
    ratios: tuple        # one entry per rank; a single entry covers every rank

    @property
    def ratio(self) -> float:
        return self.ratios[0] if self.ratios else 0.0

    def ratio_at(self, rank: int) -> float:
        if not self.ratios:
            return 0.0
        idx = max(0, min(rank - 1, len(self.ratios) - 1))
        return self.ratios[idx]


@dataclass(frozen=True)
class ParsedAbility:
    key:          str = ""
    id:           str = ""
    name:         str = ""
    max_rank:     int = 5
    base_damage:  tuple = ()     # per rank
    scalings:     tuple = ()     # ScalingTerm, in descriptor order
    damage_type:  DamageType = DamageType.MAGIC
    cooldown:     tuple = ()
    cast_time:    float = 0.25
    is_valid:     bool = False

    @classmethod
    def invalid(cls, key: str = "", id: str = "", name: str = "",
                max_rank: int = 5) -> "ParsedAbility":
        return cls(key=key, id=id, name=name, max_rank=max_rank,
                   base_damage=(0,) * max_rank, scalings=(), is_valid=False)

    def base_damage_at(self, rank: int) -> float:
        if rank <= 0 or not self.base_damage:
            return 0
        return self.base_damage[min(rank, len(self.base_damage)) - 1]


# ── Damage results ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SingleDamageResult:
    label:            str
    raw_damage:       float
    mitigated_damage: int
    damage_type:      DamageType
    breakdown:        str          # e.g. "140 + 85(45% AP)"


@dataclass(frozen=True)
class DamageCalculationResult:
    auto_attack:       SingleDamageResult
    abilities:         tuple = ()
    item_passives:     tuple = ()
    keystone:          Optional[SingleDamageResult] = None
    total_combo:       int = 0
    target_hp_percent: float = 0.0
