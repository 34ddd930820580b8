"""
Items module of the combat engine.

Contains the equipment models and the inventory that tracks what a character
carries and has equipped.
"""

from .inventory import Inventory
from .item import Armor, ArmorType, EquipmentSlot, Item, Weapon, WeaponProperty

__all__ = [
    # Import from inventory.py
    "Inventory",
    # Import from item.py
    "Armor",
    "ArmorType",
    "EquipmentSlot",
    "Item",
    "Weapon",
    "WeaponProperty",
]
