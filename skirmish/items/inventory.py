"""
Inventory management module for the combat engine.

Keeps the items a character carries and which of them are equipped. The
combat engine reads the equipped weapon and armor for attack and AC math,
unequips the weapon when a character is disarmed, and gives dropped items
back after a victory.
"""

from typing import Optional

from catchery import log_debug, log_warning

from skirmish.core.error_handling import validate_required_object

from .item import Armor, EquipmentSlot, Item, Weapon, WeaponProperty


class Inventory:
    """
    Carried and equipped items of a character.

    Attributes:
        owner_name (str):
            Name of the owner, used in log messages.

    """

    owner_name: str

    def __init__(self, owner_name: str = "") -> None:
        self.owner_name = owner_name
        self._items: list[Item] = []
        self._equipped: dict[EquipmentSlot, Item] = {}

    @property
    def items(self) -> tuple[Item, ...]:
        """All carried items, equipped or not."""
        return tuple(self._items)

    @property
    def equipped(self) -> dict[EquipmentSlot, Item]:
        """A copy of the slot to item mapping."""
        return dict(self._equipped)

    def __len__(self) -> int:
        return len(self._items)

    def contains(self, item: Item) -> bool:
        """Checks whether this exact item is carried."""
        return any(carried is item for carried in self._items)

    # ============================================================================
    # CARRYING
    # ============================================================================

    def add_item(self, item: Item) -> None:
        """
        Adds an item to the carried items.

        Args:
            item (Item): The item to add.

        """
        validate_required_object(item, "item", {"owner": self.owner_name})
        if not self.contains(item):
            self._items.append(item)
            log_debug(
                f"{self.owner_name} picks up {item.name}",
                {"owner": self.owner_name, "item": item.name},
            )

    def remove_item(self, item: Item) -> bool:
        """
        Removes an item, unequipping it first if needed.

        Args:
            item (Item): The item to remove.

        Returns:
            bool: True if the item was carried and has been removed.

        """
        for index, carried in enumerate(self._items):
            if carried is item:
                self._unequip_item(item)
                del self._items[index]
                return True
        return False

    def find_item_by_name(self, name: str) -> Optional[Item]:
        """
        Finds a carried item by name, ignoring case.

        An exact match wins over a partial one.

        Args:
            name (str): The name, or part of it.

        Returns:
            Optional[Item]: The item, or None if nothing matches.

        """
        if not name:
            return None
        needle = name.strip().lower()
        for item in self._items:
            if item.name.lower() == needle:
                return item
        for item in self._items:
            if needle in item.name.lower():
                return item
        return None

    # ============================================================================
    # EQUIPPING
    # ============================================================================

    def equip(self, item: Item) -> bool:
        """
        Equips a weapon, a shield or a piece of body armor.

        Items not carried yet are added to the inventory first. An item
        already occupying the target slot goes back to the carried items.

        Args:
            item (Item): The item to equip.

        Returns:
            bool: True if the item has been equipped, False otherwise.

        """
        slot = self._slot_for(item)
        if slot is None:
            log_warning(
                f"{item.name} cannot be equipped",
                {"owner": self.owner_name, "item": item.name},
            )
            return False

        # A shield and a two-handed weapon cannot be used together.
        if slot == EquipmentSlot.OFF_HAND:
            main = self._equipped.get(EquipmentSlot.MAIN_HAND)
            if isinstance(main, Weapon) and main.has_property(WeaponProperty.TWO_HANDED):
                log_warning(
                    f"Cannot equip {item.name} while wielding {main.name}",
                    {"owner": self.owner_name, "item": item.name},
                )
                return False
        if isinstance(item, Weapon) and item.has_property(WeaponProperty.TWO_HANDED):
            if EquipmentSlot.OFF_HAND in self._equipped:
                log_warning(
                    f"Cannot wield {item.name} with a shield equipped",
                    {"owner": self.owner_name, "item": item.name},
                )
                return False

        self.add_item(item)
        self._equipped[slot] = item
        return True

    def unequip(self, slot: EquipmentSlot) -> Optional[Item]:
        """
        Unequips whatever occupies a slot. The item stays in the inventory.

        Args:
            slot (EquipmentSlot): The slot to clear.

        Returns:
            Optional[Item]: The unequipped item, or None if the slot was empty.

        """
        return self._equipped.pop(slot, None)

    def is_equipped(self, item: Item) -> bool:
        return any(equipped is item for equipped in self._equipped.values())

    def get_equipped_weapon(self) -> Optional[Weapon]:
        item = self._equipped.get(EquipmentSlot.MAIN_HAND)
        return item if isinstance(item, Weapon) else None

    def get_equipped_armor(self) -> Optional[Armor]:
        item = self._equipped.get(EquipmentSlot.ARMOR)
        return item if isinstance(item, Armor) else None

    def get_equipped_shield(self) -> Optional[Armor]:
        item = self._equipped.get(EquipmentSlot.OFF_HAND)
        return item if isinstance(item, Armor) else None

    def _unequip_item(self, item: Item) -> None:
        for slot, equipped in list(self._equipped.items()):
            if equipped is item:
                del self._equipped[slot]

    @staticmethod
    def _slot_for(item: Item) -> Optional[EquipmentSlot]:
        if isinstance(item, Weapon):
            return EquipmentSlot.MAIN_HAND
        if isinstance(item, Armor):
            return EquipmentSlot.OFF_HAND if item.is_shield else EquipmentSlot.ARMOR
        return None
