"""
Item module for the combat engine.

Defines the equipment the combat engine reasons about: weapons, whose
properties decide which ability drives an attack, and armor, which decides
the wearer's Armor Class.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from skirmish.core.constants import NiceEnum
from skirmish.core.dice import Dice


class EquipmentSlot(NiceEnum):
    """Defines where an item is worn or held."""

    MAIN_HAND = "MAIN_HAND"
    OFF_HAND = "OFF_HAND"
    ARMOR = "ARMOR"


class WeaponProperty(NiceEnum):
    """Weapon properties that change how an attack is resolved."""

    FINESSE = "FINESSE"
    RANGED = "RANGED"
    LIGHT = "LIGHT"
    TWO_HANDED = "TWO_HANDED"


class ArmorType(NiceEnum):
    """Defines the armor categories and how they cap Dexterity."""

    LIGHT = "LIGHT"
    MEDIUM = "MEDIUM"
    HEAVY = "HEAVY"
    SHIELD = "SHIELD"


class Item(BaseModel):
    """Anything a character can carry."""

    name: str = Field(description="The name of the item.")
    description: str = Field(default="", description="A short description.")
    weight: float = Field(default=0.0, ge=0, description="Weight in pounds.")

    def model_post_init(self, _: Any) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Item name must not be empty.")

    def __str__(self) -> str:
        return self.name


class Weapon(Item):
    """
    A weapon that can be equipped in the main hand.

    The damage dice are rolled on a hit; the properties decide whether the
    attack uses Strength, Dexterity or the higher of the two.
    """

    item_type: Literal["Weapon"] = "Weapon"
    damage_dice: str = Field(
        default="",
        description="Damage dice, e.g. '1d8'. Empty means the default weapon dice.",
    )
    attack_bonus: int = Field(default=0, description="Magic bonus to attack rolls.")
    damage_bonus: int = Field(default=0, description="Magic bonus to damage rolls.")
    properties: set[WeaponProperty] = Field(
        default_factory=set,
        description="The weapon properties.",
    )

    def model_post_init(self, context: Any) -> None:
        super().model_post_init(context)
        if self.damage_dice:
            Dice.parse_notation(self.damage_dice)

    def has_property(self, prop: WeaponProperty) -> bool:
        return prop in self.properties

    @property
    def is_ranged(self) -> bool:
        return WeaponProperty.RANGED in self.properties

    @property
    def is_finesse(self) -> bool:
        return WeaponProperty.FINESSE in self.properties


class Armor(Item):
    """
    A piece of armor, or a shield.

    Body armor replaces the unarmored 10 + DEX base; a shield adds its AC on
    top of whatever the wearer has.
    """

    item_type: Literal["Armor"] = "Armor"
    armor_type: ArmorType = Field(description="The armor category.")
    base_ac: int = Field(ge=0, description="The AC granted by the armor.")
    max_dex_bonus: int | None = Field(
        default=None,
        description="Cap on the Dexterity modifier, None for no cap.",
    )

    @property
    def is_shield(self) -> bool:
        return self.armor_type == ArmorType.SHIELD

    def calculate_ac(self, dex_modifier: int) -> int:
        """
        Computes the Armor Class granted by this armor.

        Args:
            dex_modifier (int): The wearer's Dexterity modifier.

        Returns:
            int: The Armor Class, or the flat bonus for a shield.

        """
        if self.is_shield:
            return self.base_ac
        if self.armor_type == ArmorType.HEAVY:
            return self.base_ac
        dex = dex_modifier
        if self.armor_type == ArmorType.MEDIUM:
            dex = min(dex, 2 if self.max_dex_bonus is None else self.max_dex_bonus)
        elif self.max_dex_bonus is not None:
            dex = min(dex, self.max_dex_bonus)
        return self.base_ac + dex
