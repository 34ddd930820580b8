"""
Entities module of the combat engine.

Contains the combatant capability and the two kinds of combatants that
implement it: the player character and monsters.
"""

from .character import CombatFeature, PlayerCharacter
from .combatant import Combatant, hp_percentage, is_hostile
from .monster import Monster, MonsterBehavior

__all__ = [
    # Import from character.py
    "CombatFeature",
    "PlayerCharacter",
    # Import from combatant.py
    "Combatant",
    "hp_percentage",
    "is_hostile",
    # Import from monster.py
    "Monster",
    "MonsterBehavior",
]
