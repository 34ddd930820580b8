"""
Skirmish: turn-based combat resolution for a single-player text adventure.

The engine decides how an encounter between the player character and a group
of monsters unfolds: initiative, attacks, damage, status conditions, monster
behavior, flight and the end of combat. Every step is reported as an
immutable CombatResult, so any presentation layer can sit on top of it.
"""

from skirmish.combat import CombatResult, CombatResultType, CombatSystem
from skirmish.core import Dice, StatType
from skirmish.effects import Condition, DurationType, StatusEffect, StatusEffectManager
from skirmish.entities import CombatFeature, Monster, MonsterBehavior, PlayerCharacter
from skirmish.items import Armor, ArmorType, Inventory, Weapon, WeaponProperty

__version__ = "0.1.0"

__all__ = [
    "Armor",
    "ArmorType",
    "CombatFeature",
    "CombatResult",
    "CombatResultType",
    "CombatSystem",
    "Condition",
    "Dice",
    "DurationType",
    "Inventory",
    "Monster",
    "MonsterBehavior",
    "PlayerCharacter",
    "StatType",
    "StatusEffect",
    "StatusEffectManager",
    "Weapon",
    "WeaponProperty",
]
