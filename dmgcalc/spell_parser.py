"""
Ability Scaling Parser — raw ability descriptors → ParsedAbility.

Two raw shapes, told apart by an explicit `kind`:
  TooltipDescriptor:  DDragon spell: tooltip markup, `effect` arrays, `vars`.
  FormulaDescriptor:  CommunityDragon bin.json spell: mDataValues plus
                       mSpellCalculations formula parts.

Anything else parses to ParsedAbility.invalid(). Unknown stat tokens are
dropped from the term list; the rest of the parse carries on. No state is kept
between calls.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, NamedTuple, Optional, Union
import logging
import re

from dmgcalc.models import (DamageType, ParsedAbility, ScalingStat, ScalingTerm,
                            round_half_up)

logger = logging.getLogger(__name__)

SPELL_KEYS        = ("Q", "W", "E", "R")
DEFAULT_MAX_RANK  = 5
MAX_PART_DEPTH    = 2
MAX_RATIO         = 10.0

# Representative champion levels for ranks 1-5 of level-scaled parts
RANK_LEVELS = (1, 6, 11, 16, 18)


# ── Descriptors ────────────────────────────────────────────────────────────────

class DescriptorKind(str, Enum):
    TOOLTIP = "tooltip"
    FORMULA = "formula"


@dataclass(frozen=True)
class TooltipDescriptor:
    """Hashable; the dict-valued `vars` are left out of the hash."""
    key:       str = ""
    id:        str = ""
    name:      str = ""
    tooltip:   str = ""
    effect:    tuple = ()        # effect[i] = per-rank values (index 0 unused)
    vars:      tuple = field(default=(), hash=False)   # ({"key": "a1", "link": "spelldamage", "coeff": 0.6}, ...)
    max_rank:  int = DEFAULT_MAX_RANK
    cooldown:  tuple = ()
    kind:      DescriptorKind = field(default=DescriptorKind.TOOLTIP, init=False)


@dataclass(frozen=True)
class FormulaDescriptor:
    """Hashable; bin.json dicts are left out of the hash."""
    key:                str = ""
    id:                 str = ""
    name:               str = ""
    data_values:        tuple = field(default=(), hash=False)   # ({"mName": ..., "mValues": [...]}, ...)
    spell_calculations: Mapping = field(default_factory=dict, hash=False)
    tooltip:            str = ""       # only used for damage type
    max_rank:           int = DEFAULT_MAX_RANK
    cooldown:           tuple = ()
    cast_time:          Optional[float] = None
    kind:               DescriptorKind = field(default=DescriptorKind.FORMULA, init=False)


Descriptor = Union[TooltipDescriptor, FormulaDescriptor]


def _default_cast_time(key: str) -> float:
    return 0.5 if key == "R" else 0.25


def tooltip_descriptor(spell: Mapping, key: str = "") -> TooltipDescriptor:
    """DDragon champion `spells[i]` (or `passive`) → TooltipDescriptor."""
    return TooltipDescriptor(
        key      = key,
        id       = spell.get("id", ""),
        name     = spell.get("name", ""),
        tooltip  = spell.get("tooltip") or spell.get("description") or "",
        effect   = tuple(tuple(e) if e else None for e in spell.get("effect") or ()),
        vars     = tuple(spell.get("vars") or ()),
        max_rank = spell.get("maxrank", DEFAULT_MAX_RANK),
        cooldown = tuple(spell.get("cooldown") or ()),
    )


def formula_descriptor(bin_spell: Mapping, spell: Optional[Mapping] = None,
                       key: str = "") -> FormulaDescriptor:
    """bin.json `mSpell` block (+ optional DDragon spell metadata) → FormulaDescriptor."""
    spell = spell or {}
    # bin.json uses "DataValues" as often as "mDataValues"
    data_values = bin_spell.get("mDataValues") or bin_spell.get("DataValues") or ()
    return FormulaDescriptor(
        key                = key,
        id                 = spell.get("id", ""),
        name               = spell.get("name", ""),
        data_values        = tuple(data_values),
        spell_calculations = bin_spell.get("mSpellCalculations") or {},
        tooltip            = spell.get("tooltip") or spell.get("description") or "",
        max_rank           = spell.get("maxrank", DEFAULT_MAX_RANK),
        cooldown           = tuple(spell.get("cooldown") or ()),
        cast_time          = bin_spell.get("mCastTime"),
    )


def descriptor_from_payload(payload: Mapping) -> Optional[Descriptor]:
    """
    Raw mapping with an explicit `shape` ("tooltip" | "formula") → descriptor.

    tooltip: {"shape": "tooltip", "key": "Q", "spell": {...DDragon spell...}}
    formula: {"shape": "formula", "key": "Q", "bin": {...mSpell...}, "spell": {...}}
    """
    if not isinstance(payload, Mapping):
        return None
    shape = payload.get("shape")
    key = payload.get("key", "")
    if shape == DescriptorKind.TOOLTIP.value:
        return tooltip_descriptor(payload.get("spell") or {}, key)
    if shape == DescriptorKind.FORMULA.value:
        return formula_descriptor(payload.get("bin") or {}, payload.get("spell"), key)
    logger.debug(f"Unknown descriptor shape {shape!r}")
    return None


# ── Damage type ────────────────────────────────────────────────────────────────

def detect_damage_type(tooltip: str) -> Optional[DamageType]:
    """Count <magicDamage>/<physicalDamage>/<trueDamage> tags; None when absent."""
    magic    = len(re.findall(r"<magicDamage>", tooltip, re.IGNORECASE))
    physical = len(re.findall(r"<physicalDamage>", tooltip, re.IGNORECASE))
    true     = len(re.findall(r"<trueDamage>", tooltip, re.IGNORECASE))

    if true > 0 and true >= magic and true >= physical:
        return DamageType.TRUE
    if magic > 0 and magic >= physical:
        return DamageType.MAGIC
    if physical > 0:
        return DamageType.PHYSICAL
    return None


# ── Tooltip shape ──────────────────────────────────────────────────────────────

# DDragon var `link` → scaling tag
TOOLTIP_LINKS = {
    "spelldamage":        ScalingStat.AP,
    "attackdamage":       ScalingStat.AD,
    "bonusattackdamage":  ScalingStat.BONUS_AD,
    "baseattackdamage":   ScalingStat.BASE_AD,
    "health":             ScalingStat.MAX_HP,
    "maxhealth":          ScalingStat.MAX_HP,
    "armor":              ScalingStat.ARMOR,
    "spellblock":         ScalingStat.MR,
    "lethality":          ScalingStat.LETHALITY,
}

_EFFECT_REF = re.compile(r"\{\{\s*e(\d+)\s*\}\}", re.IGNORECASE)


def _tooltip_base_damage(d: TooltipDescriptor) -> tuple:
    effects = d.effect

    def usable(idx):
        return 0 < idx < len(effects) and effects[idx] and any(effects[idx])

    for match in _EFFECT_REF.finditer(d.tooltip):
        idx = int(match.group(1))
        if usable(idx):
            return tuple(effects[idx][:d.max_rank])

    for idx in range(1, len(effects)):
        if usable(idx):
            return tuple(effects[idx][:d.max_rank])
    return ()


def _tooltip_scalings(d: TooltipDescriptor) -> tuple:
    terms = []
    for var in d.vars:
        if not isinstance(var, Mapping):
            continue
        stat = TOOLTIP_LINKS.get(str(var.get("link", "")).lower())
        if stat is None:
            logger.debug(f"{d.id or d.key}: dropping var with link {var.get('link')!r}")
            continue
        coeff = var.get("coeff")
        ratios = tuple(coeff[:d.max_rank]) if isinstance(coeff, (list, tuple)) else (coeff,)
        if not ratios or not all(isinstance(r, (int, float)) for r in ratios):
            continue
        terms.append(ScalingTerm(stat, ratios))
    return tuple(terms)


def _parse_tooltip(d: TooltipDescriptor) -> ParsedAbility:
    base_damage = _tooltip_base_damage(d)
    scalings = _tooltip_scalings(d)
    is_valid = any(base_damage) or bool(scalings)

    return ParsedAbility(
        key         = d.key,
        id          = d.id,
        name        = d.name,
        max_rank    = d.max_rank,
        base_damage = base_damage if base_damage else (0,) * d.max_rank,
        scalings    = scalings,
        damage_type = detect_damage_type(d.tooltip) or DamageType.MAGIC,
        cooldown    = d.cooldown,
        cast_time   = _default_cast_time(d.key),
        is_valid    = is_valid,
    )


# ── Formula shape ──────────────────────────────────────────────────────────────

# bin.json mStat code → scaling tag (absent / 0 means AP)
BIN_STATS = {
    None: ScalingStat.AP,
    0:    ScalingStat.AP,
    1:    ScalingStat.BONUS_AD,
    2:    ScalingStat.AD,
    3:    ScalingStat.ARMOR,
    4:    ScalingStat.AP,
    5:    ScalingStat.MR,
    6:    ScalingStat.MR,          # bonus MR, treated as MR
    11:   ScalingStat.MAX_HP,
    29:   ScalingStat.LETHALITY,
}


class PartResult(NamedTuple):
    base_damage: Optional[tuple] = None
    scalings:    tuple = ()


EMPTY = PartResult()


def _valid_ratios(ratios) -> bool:
    return bool(ratios) and max(ratios) > 0 and all(r <= MAX_RATIO for r in ratios)


def interpolate_by_level(start: float, end: float, level: int) -> float:
    return start + (end - start) * (level - 1) / 17


def breakpoint_value(level1_value: float, breakpoints, level: int) -> float:
    """Level-1 value plus, per level gained, the rate of the latest breakpoint reached."""
    ordered = sorted(breakpoints, key=lambda bp: bp.get("mLevel", 0))
    value = level1_value
    for lv in range(2, level + 1):
        rate = 0
        for bp in ordered:
            if bp.get("mLevel", 0) <= lv:
                rate = bp.get("mBonusPerLevelAtAndAfter", 0)
        value += rate
    return value


def _ratio_stat_from_name(name: str) -> Optional[ScalingStat]:
    """Guess the stat of a ratio-like data value from its name."""
    if "bonusad" in name:
        return ScalingStat.BONUS_AD
    if "ad" in name:
        return ScalingStat.AD
    if "hp" in name or "health" in name:
        return ScalingStat.MAX_HP
    if "armor" in name:
        return ScalingStat.ARMOR
    if "mr" in name or "spellblock" in name:
        return ScalingStat.MR
    if "lethality" in name:
        return ScalingStat.LETHALITY
    return ScalingStat.AP


class _FormulaParser:
    """Walks one spell's formula parts. Built per parse call, discarded after."""

    def __init__(self, data_values: Mapping, max_rank: int):
        self.data_values = data_values
        self.max_rank = max_rank

    def ranks(self, values) -> tuple:
        # index 0 is rank 0 in bin data
        return tuple(values[1:self.max_rank + 1]) or tuple(values[:1])

    def term(self, stat: Optional[ScalingStat], ratios) -> PartResult:
        if stat is None or not _valid_ratios(ratios):
            return EMPTY
        return PartResult(scalings=(ScalingTerm(stat, tuple(ratios)),))

    def level_based(self, part: Mapping) -> Optional[tuple]:
        kind = part.get("__type")
        if kind == "ByCharLevelInterpolationCalculationPart":
            start = part.get("mStartValue") or 0
            end = part.get("mEndValue") or 0
            if start == 0 and end == 0:
                return None
            return tuple(int(round_half_up(interpolate_by_level(start, end, lv)))
                         for lv in RANK_LEVELS)
        breakpoints = part.get("mBreakpoints")
        if not breakpoints:
            return None
        level1 = part.get("mLevel1Value") or 0
        return tuple(int(round_half_up(breakpoint_value(level1, breakpoints, lv)))
                     for lv in RANK_LEVELS)

    def part(self, part: Mapping, depth: int = 0) -> PartResult:
        if depth >= MAX_PART_DEPTH or not isinstance(part, Mapping):
            return EMPTY
        kind = part.get("__type")

        if kind == "NamedDataValueCalculationPart":
            name = (part.get("mDataValue") or "").lower()
            values = self.data_values.get(name)
            if not values:
                return EMPTY
            if "ratio" in name or "coefficient" in name:
                return self.term(_ratio_stat_from_name(name), self.ranks(values))
            return PartResult(base_damage=self.ranks(values))

        if kind == "StatByCoefficientCalculationPart":
            ratio = part.get("mCoefficient") or 0
            return self.term(BIN_STATS.get(part.get("mStat")), (ratio,))

        if kind == "StatByNamedDataValueCalculationPart":
            values = self.data_values.get((part.get("mDataValue") or "").lower())
            if not values:
                return EMPTY
            return self.term(BIN_STATS.get(part.get("mStat")), self.ranks(values))

        if kind in ("ByCharLevelInterpolationCalculationPart",
                    "ByCharLevelBreakpointsCalculationPart"):
            return PartResult(base_damage=self.level_based(part))

        if kind == "NumberCalculationPart":
            number = part.get("mNumber") or 0
            if number > 0:
                return PartResult(base_damage=(number,) * self.max_rank)
            return EMPTY

        if kind == "SumOfSubPartsCalculationPart":
            base, scalings = None, ()
            for sub in part.get("mSubparts") or ():
                result = self.part(sub, depth + 1)
                base = _add_ranks(base, result.base_damage)
                scalings += result.scalings
            return PartResult(base, scalings)

        if kind == "ProductOfSubPartsCalculationPart":
            p1, p2 = part.get("mPart1"), part.get("mPart2")
            if not p1 or not p2:
                return EMPTY
            r1 = self.part(p1, depth + 1)
            r2 = self.part(p2, depth + 1)
            if r1.base_damage and r2.base_damage:
                other = r2.base_damage
                base = tuple(round_half_up(v * (other[i] if i < len(other) else 1))
                             for i, v in enumerate(r1.base_damage))
            else:
                base = r1.base_damage or r2.base_damage
            return PartResult(base, r1.scalings + r2.scalings)

        if kind == "StatBySubPartCalculationPart":
            stat = BIN_STATS.get(part.get("mStat"))
            if stat is None:
                return EMPTY
            sub = part.get("mSubpart")
            if not sub:
                return self.term(stat, (part.get("mCoefficient") or 0,))
            result = self.part(sub, depth + 1)
            if result.base_damage:
                return self.term(stat, result.base_damage)
            return EMPTY

        return EMPTY


def _add_ranks(current: Optional[tuple], extra: Optional[tuple]) -> Optional[tuple]:
    if not extra:
        return current
    if not current:
        return tuple(extra)
    n = min(len(current), len(extra))
    return tuple(current[i] + extra[i] for i in range(n)) + tuple(current[n:])


def _primary_calculation(calculations: Mapping) -> Optional[Mapping]:
    """Pick the damage calculation: *totaldamage*/*calculate(d)damage*, then any *damage*, then the first."""
    entries = [(name, calc) for name, calc in calculations.items()
               if isinstance(calc, Mapping) and calc.get("__type") == "GameCalculation"]

    for name, calc in entries:
        lowered = name.lower()
        if ("totaldamage" in lowered or "calculatedamage" in lowered
                or "calculateddamage" in lowered):
            return calc
    for name, calc in entries:
        if "damage" in name.lower():
            return calc
    for _, calc in entries:
        if calc.get("mFormulaParts"):
            return calc
    return None


def _parse_formula(d: FormulaDescriptor) -> ParsedAbility:
    data_values = {}
    for dv in d.data_values:
        if isinstance(dv, Mapping) and dv.get("mName"):
            data_values[dv["mName"].lower()] = list(dv.get("mValues") or ())

    base_damage, scalings = None, ()
    calc = _primary_calculation(d.spell_calculations)
    if calc is not None:
        walker = _FormulaParser(data_values, d.max_rank)
        for part in calc.get("mFormulaParts") or ():
            result = walker.part(part)
            base_damage = _add_ranks(base_damage, result.base_damage)
            scalings += result.scalings

    is_valid = bool(base_damage and any(base_damage)) or bool(scalings)
    if not is_valid:
        logger.debug(f"{d.id or d.key}: no damage calculation found in bin data")

    return ParsedAbility(
        key         = d.key,
        id          = d.id,
        name        = d.name,
        max_rank    = d.max_rank,
        base_damage = base_damage if base_damage else (0,) * d.max_rank,
        scalings    = scalings,
        damage_type = detect_damage_type(d.tooltip) or DamageType.MAGIC,
        cooldown    = d.cooldown,
        cast_time   = d.cast_time if d.cast_time is not None else _default_cast_time(d.key),
        is_valid    = is_valid,
    )


# ── Entry point ────────────────────────────────────────────────────────────────

def parse(descriptor) -> ParsedAbility:
    """Normalize either descriptor shape; anything else → ParsedAbility.invalid()."""
    kind = getattr(descriptor, "kind", None)
    if kind is DescriptorKind.TOOLTIP:
        return _parse_tooltip(descriptor)
    if kind is DescriptorKind.FORMULA:
        return _parse_formula(descriptor)
    logger.debug(f"Unparseable ability descriptor: {type(descriptor).__name__}")
    return ParsedAbility.invalid()


# ── bin.json lookup helpers ────────────────────────────────────────────────────

def _spell_block(entry) -> Optional[Mapping]:
    spell = entry.get("mSpell") if isinstance(entry, Mapping) else None
    if not spell:
        return None
    if spell.get("mDataValues") or spell.get("DataValues") or spell.get("mSpellCalculations"):
        return spell
    return None


def find_bin_spell(bin_data: Mapping, champion: str, spell_id: str,
                   key: str) -> Optional[Mapping]:
    """
    Locate a spell's `mSpell` block in a champion bin.json.

    Tries Characters/{Champ}/Spells/{SpellId}Ability/{SpellId},
    Characters/{Champ}/Spells/{Champ}{Key}Ability/{Champ}{Key},
    Characters/{Champ}/Spells/{SpellId}Ability, then any key ending in
    /{SpellId} under /spells/.
    """
    patterns = (
        f"Characters/{champion}/Spells/{spell_id}Ability/{spell_id}",
        f"Characters/{champion}/Spells/{champion}{key}Ability/{champion}{key}",
        f"Characters/{champion}/Spells/{spell_id}Ability",
    )
    for pattern in patterns:
        spell = _spell_block(bin_data.get(pattern))
        if spell is not None:
            return spell

    wanted = spell_id.lower()
    for bin_key, entry in bin_data.items():
        lowered = bin_key.lower()
        if f"/spells/{wanted}" in lowered and lowered.endswith(f"/{wanted}"):
            spell = _spell_block(entry)
            if spell is not None:
                return spell
    return None


def find_bin_passive(bin_data: Mapping, champion: str,
                     image_id: str) -> Optional[Mapping]:
    patterns = (
        f"Characters/{champion}/Spells/{champion}PassiveAbility/{champion}Passive",
        f"Characters/{champion}/Spells/{image_id}Ability/{image_id}",
    )
    for pattern in patterns:
        spell = _spell_block(bin_data.get(pattern))
        if spell is not None:
            return spell

    prefix = f"characters/{champion.lower()}/spells/"
    for bin_key, entry in bin_data.items():
        lowered = bin_key.lower()
        if prefix in lowered and "passive" in lowered:
            spell = _spell_block(entry)
            if spell is not None:
                return spell
    return None


def parse_spell(spell: Mapping, key: str, bin_data: Optional[Mapping] = None,
                champion: str = "") -> ParsedAbility:
    """Prefer bin.json numbers when they parse; fall back to the DDragon tooltip shape."""
    if bin_data:
        bin_spell = find_bin_spell(bin_data, champion, spell.get("id", ""), key)
        if bin_spell is not None:
            parsed = parse(formula_descriptor(bin_spell, spell, key))
            if parsed.is_valid:
                return parsed
            # bin cast time still beats the default
            if bin_spell.get("mCastTime") is not None:
                return replace(parse(tooltip_descriptor(spell, key)),
                               cast_time=bin_spell["mCastTime"])
    return parse(tooltip_descriptor(spell, key))


def parse_all_spells(spells, bin_data: Optional[Mapping] = None,
                     champion: str = "") -> list[ParsedAbility]:
    return [parse_spell(spell, key, bin_data, champion)
            for spell, key in zip(spells, SPELL_KEYS)]


def parse_passive(passive: Mapping, bin_data: Optional[Mapping] = None,
                  champion: str = "") -> ParsedAbility:
    """Champion passive as key "P": no cast time, no cooldown."""
    image_id = re.sub(r"\.png$", "", (passive.get("image") or {}).get("full", ""),
                      flags=re.IGNORECASE)
    parsed = None
    if bin_data:
        bin_spell = find_bin_passive(bin_data, champion, image_id)
        if bin_spell is not None:
            parsed = parse(formula_descriptor(bin_spell, passive, "P"))
    if parsed is None or not parsed.is_valid:
        parsed = parse(tooltip_descriptor(passive, "P"))

    return ParsedAbility(
        key         = "P",
        id          = image_id or f"{champion}Passive",
        name        = passive.get("name", ""),
        max_rank    = DEFAULT_MAX_RANK,
        base_damage = parsed.base_damage,
        scalings    = parsed.scalings,
        damage_type = parsed.damage_type,
        cooldown    = (),
        cast_time   = 0.0,
        is_valid    = parsed.is_valid,
    )
