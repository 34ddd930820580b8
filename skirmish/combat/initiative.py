"""
Initiative and turn scheduling.

Initiative is rolled once per encounter and the resulting order never
changes. Combatants that die or leave the encounter keep their place in the
order but are skipped when the cursor advances.
"""

from typing import Optional

from catchery import log_debug

from skirmish.core.dice import Dice
from skirmish.entities.combatant import Combatant


class InitiativeTracker:
    """Turn order and turn cursor of an encounter."""

    def __init__(self, dice: Dice) -> None:
        self._dice = dice
        self._order: list[Combatant] = []
        self._rolls: dict[Combatant, int] = {}
        self._departed: set[Combatant] = set()
        self._cursor = 0
        self._round = 0

    def roll(self, combatants: list[Combatant]) -> list[tuple[Combatant, int]]:
        """
        Rolls initiative and fixes the turn order.

        Every combatant rolls 1d20 + its initiative modifier. The order is
        sorted by descending total; equal totals keep the order in which the
        combatants were given.

        Args:
            combatants (list[Combatant]): Everyone taking part.

        Returns:
            list[tuple[Combatant, int]]: (combatant, roll) pairs in turn order.

        """
        self._rolls = {
            combatant: self._dice.roll_with_modifier(20, combatant.initiative_modifier)
            for combatant in combatants
        }
        # sorted() is stable, so ties keep insertion order.
        self._order = sorted(combatants, key=lambda c: self._rolls[c], reverse=True)
        self._departed = set()
        self._cursor = 0
        self._round = 1
        log_debug(
            "Initiative rolled",
            {"order": [f"{c.name}={self._rolls[c]}" for c in self._order]},
        )
        return [(combatant, self._rolls[combatant]) for combatant in self._order]

    def clear(self) -> None:
        self._order = []
        self._rolls = {}
        self._departed = set()
        self._cursor = 0
        self._round = 0

    @property
    def order(self) -> tuple[Combatant, ...]:
        return tuple(self._order)

    @property
    def round_number(self) -> int:
        return self._round

    @property
    def current_index(self) -> int:
        return self._cursor

    def is_active(self) -> bool:
        return bool(self._order)

    def get_roll(self, combatant: Combatant) -> Optional[int]:
        return self._rolls.get(combatant)

    def current_combatant(self) -> Optional[Combatant]:
        if not self._order:
            return None
        return self._order[self._cursor]

    def mark_departed(self, combatant: Combatant) -> None:
        """Removes a combatant from future turns without changing the order."""
        self._departed.add(combatant)

    def has_departed(self, combatant: Combatant) -> bool:
        return combatant in self._departed

    def is_eligible(self, combatant: Combatant) -> bool:
        """Whether a combatant still gets turns."""
        return combatant.is_alive() and combatant not in self._departed

    def advance(self) -> Optional[Combatant]:
        """
        Moves the cursor to the next combatant still in the fight, starting
        a new round when it wraps around.

        Returns:
            Optional[Combatant]: The new current combatant, or None if
            nobody is left.

        """
        if not self._order:
            return None
        for _ in range(len(self._order)):
            self._cursor += 1
            if self._cursor >= len(self._order):
                self._cursor = 0
                self._round += 1
            if self.is_eligible(self._order[self._cursor]):
                return self._order[self._cursor]
        return None
