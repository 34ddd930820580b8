"""
Combatant capability shared by every participant of an encounter.

Player characters and monsters are unrelated classes; the engine only relies
on the structural interface below.
"""

from typing import Protocol, runtime_checkable

from skirmish.core.constants import CombatantKind, StatType


@runtime_checkable
class Combatant(Protocol):
    """Anything that can take part in an encounter."""

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> CombatantKind: ...

    @property
    def current_hp(self) -> int: ...

    @property
    def max_hp(self) -> int: ...

    @property
    def armor_class(self) -> int: ...

    @property
    def initiative_modifier(self) -> int: ...

    def is_alive(self) -> bool: ...

    def is_unconscious(self) -> bool: ...

    def is_bloodied(self) -> bool: ...

    def take_damage(self, amount: int) -> int:
        """Applies damage and returns the hit points actually lost."""
        ...

    def heal(self, amount: int) -> int:
        """Restores hit points and returns the amount actually healed."""
        ...

    def get_saving_throw_modifier(self, ability: StatType) -> int: ...


def is_hostile(first: Combatant, second: Combatant) -> bool:
    """
    Determines if two combatants fight on opposite sides.

    Args:
        first (Combatant): The first combatant.
        second (Combatant): The second combatant.

    Returns:
        bool: True if they are opponents, False otherwise.

    """
    return first is not second and first.kind != second.kind


def hp_percentage(combatant: Combatant) -> int:
    """Current HP as an integer percentage of max HP."""
    if combatant.max_hp <= 0:
        return 0
    return (combatant.current_hp * 100) // combatant.max_hp
