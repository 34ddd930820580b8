"""
Effects module of the combat engine.

Contains the conditions and their rule table, the duration types, the
status effect model and the manager that tracks effects per combatant.
"""

from .conditions import CONDITION_RULES, Condition, ConditionRule
from .duration import DurationType
from .status_effect import StatusEffect
from .status_manager import StatusEffectManager

__all__ = [
    # Import from conditions.py
    "CONDITION_RULES",
    "Condition",
    "ConditionRule",
    # Import from duration.py
    "DurationType",
    # Import from status_effect.py
    "StatusEffect",
    # Import from status_manager.py
    "StatusEffectManager",
]
