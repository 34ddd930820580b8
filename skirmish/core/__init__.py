"""
Core module of the combat engine.

Contains the rule constants, the dice service, logging setup, validation
helpers and console utilities shared by the rest of the engine.
"""

from .constants import (
    ATTACK_KEYWORDS,
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_PLAYER_WEAPON,
    DEFENSIVE_FLEE_HP_PERCENT,
    ENEMY_FLEE_DC,
    FLEE_KEYWORDS,
    IMPROVED_CRITICAL_THRESHOLD,
    MARTIAL_ARTS_DAMAGE,
    PLAYER_FLEE_DC,
    SPECIAL_ABILITY_SAVES,
    UNARMED_STRIKE_DAMAGE,
    CombatantKind,
    NiceEnum,
    StatType,
)
from .dice import (
    D20Roll,
    Dice,
    DiceExpression,
    RollBreakdown,
    get_ability_modifier,
)
from .logging import get_logger, setup_logging
from .utils import cprint, crule, make_bar

__all__ = [
    # Import from constants.py
    "ATTACK_KEYWORDS",
    "DEFAULT_CRITICAL_THRESHOLD",
    "DEFAULT_PLAYER_WEAPON",
    "DEFENSIVE_FLEE_HP_PERCENT",
    "ENEMY_FLEE_DC",
    "FLEE_KEYWORDS",
    "IMPROVED_CRITICAL_THRESHOLD",
    "MARTIAL_ARTS_DAMAGE",
    "PLAYER_FLEE_DC",
    "SPECIAL_ABILITY_SAVES",
    "UNARMED_STRIKE_DAMAGE",
    "CombatantKind",
    "NiceEnum",
    "StatType",
    # Import from dice.py
    "D20Roll",
    "Dice",
    "DiceExpression",
    "RollBreakdown",
    "get_ability_modifier",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "cprint",
    "crule",
    "make_bar",
]
