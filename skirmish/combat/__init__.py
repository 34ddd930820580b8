"""
Combat module of the combat engine.

Contains the combat system and its parts: encounter state, initiative, attack
resolution, monster decision making, special abilities and combat results.
"""

from .attack import AttackOutcome, AttackResolver, find_target
from .combat_result import CombatResult, CombatResultType
from .combat_system import CombatSystem
from .encounter import EncounterOutcome, EncounterState, EncounterStatus
from .initiative import InitiativeTracker
from .monster_ai import (
    MonsterAction,
    MonsterDecision,
    choose_target,
    decide_action,
    wants_to_flee,
)
from .special_abilities import (
    SPECIAL_ABILITIES,
    SpecialAbilityOutcome,
    SpecialAbilityRule,
    find_special_ability,
    trigger_special_ability,
)

__all__ = [
    # Import from attack.py
    "AttackOutcome",
    "AttackResolver",
    "find_target",
    # Import from combat_result.py
    "CombatResult",
    "CombatResultType",
    # Import from combat_system.py
    "CombatSystem",
    # Import from encounter.py
    "EncounterOutcome",
    "EncounterState",
    "EncounterStatus",
    # Import from initiative.py
    "InitiativeTracker",
    # Import from monster_ai.py
    "MonsterAction",
    "MonsterDecision",
    "choose_target",
    "decide_action",
    "wants_to_flee",
    # Import from special_abilities.py
    "SPECIAL_ABILITIES",
    "SpecialAbilityOutcome",
    "SpecialAbilityRule",
    "find_special_ability",
    "trigger_special_ability",
]
