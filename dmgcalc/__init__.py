"""
dmgcalc — League of Legends combat math.

stat_aggregator  → ComputedStats from base curve + level + items
spell_parser     → ParsedAbility from DDragon / CommunityDragon spell data
damage_resolver  → post-mitigation damage and breakdowns
combo_calculator → full burst of one champion against another
"""

from dmgcalc.combo_calculator import CombatantSetup, calculate_damage, format_result
from dmgcalc.damage_resolver import (ability_damage, auto_attack, defense_mitigation,
                                     effective_armor, effective_magic_resist,
                                     mitigated_damage, resolve_ability)
from dmgcalc.models import (BaseAttributeCurve, ComputedStats, DamageCalculationResult,
                            DamageType, ParsedAbility, ScalingStat, ScalingTerm,
                            SingleDamageResult)
from dmgcalc.spell_parser import (FormulaDescriptor, TooltipDescriptor,
                                  descriptor_from_payload, parse)
from dmgcalc.stat_aggregator import compute_stats, stat_at_level

__version__ = "0.1.0"
