"""
Encounter state.

Holds everything that belongs to one encounter: the participants and their
initiative, the items dropped during the fight, who last hit whom, and
whether the encounter is still running. The combat system owns the state and
only hands out copies of its collections.
"""

from typing import Optional

from skirmish.core.constants import NiceEnum
from skirmish.core.dice import Dice
from skirmish.entities.character import PlayerCharacter
from skirmish.entities.combatant import Combatant, is_hostile
from skirmish.entities.monster import Monster
from skirmish.items.item import Item

from .initiative import InitiativeTracker


class EncounterStatus(NiceEnum):
    NOT_STARTED = "NOT_STARTED"
    ACTIVE = "ACTIVE"
    OVER = "OVER"


class EncounterOutcome(NiceEnum):
    """Why an encounter ended."""

    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"
    FLED = "FLED"


class EncounterState:
    """
    Mutable state of a single encounter.

    Attributes:
        player (Optional[PlayerCharacter]):
            The player character.
        tracker (InitiativeTracker):
            Turn order and turn cursor.
        status (EncounterStatus):
            Whether the encounter is running.
        outcome (Optional[EncounterOutcome]):
            Terminal reason, set once the encounter is over.

    """

    player: Optional[PlayerCharacter]
    tracker: InitiativeTracker
    status: EncounterStatus
    outcome: Optional[EncounterOutcome]

    def __init__(self, dice: Dice) -> None:
        self.player = None
        self.tracker = InitiativeTracker(dice)
        self.status = EncounterStatus.NOT_STARTED
        self.outcome = None
        self._participants: list[Combatant] = []
        self._dropped_items: list[Item] = []
        self._last_attacker: dict[Combatant, Combatant] = {}

    def begin(self, player: PlayerCharacter, enemies: list[Monster]) -> None:
        """Replaces the previous encounter, if any, with a new one."""
        self.player = player
        self._participants = [player, *enemies]
        self._dropped_items = []
        self._last_attacker = {}
        self.tracker.clear()
        self.status = EncounterStatus.ACTIVE
        self.outcome = None

    def finish(self, outcome: EncounterOutcome) -> None:
        self.status = EncounterStatus.OVER
        self.outcome = outcome

    def is_active(self) -> bool:
        return self.status == EncounterStatus.ACTIVE

    # ============================================================================
    # PARTICIPANTS
    # ============================================================================

    @property
    def participants(self) -> list[Combatant]:
        return list(self._participants)

    @property
    def enemies(self) -> list[Monster]:
        """Every monster of the encounter, including defeated and fled ones."""
        return [c for c in self._participants if isinstance(c, Monster)]

    @property
    def present_enemies(self) -> list[Monster]:
        """Monsters that have not left the encounter."""
        return [m for m in self.enemies if not self.tracker.has_departed(m)]

    @property
    def living_enemies(self) -> list[Monster]:
        return [m for m in self.present_enemies if m.is_alive()]

    @property
    def defeated_enemies(self) -> list[Monster]:
        return [m for m in self.enemies if not m.is_alive()]

    def hostile_targets(self, combatant: Combatant) -> list[Combatant]:
        """Living, present combatants fighting against the given one."""
        return [
            other
            for other in self._participants
            if is_hostile(combatant, other)
            and other.is_alive()
            and not self.tracker.has_departed(other)
        ]

    def depart(self, combatant: Combatant) -> None:
        """Takes a combatant out of the fight, e.g. a monster that fled."""
        self.tracker.mark_departed(combatant)

    # ============================================================================
    # AGGRO
    # ============================================================================

    def record_attack(self, attacker: Combatant, defender: Combatant) -> None:
        self._last_attacker[defender] = attacker

    def get_last_attacker(self, combatant: Combatant) -> Optional[Combatant]:
        return self._last_attacker.get(combatant)

    def forget_dead_attackers(self) -> None:
        """Drops aggro entries pointing at, or held by, dead combatants."""
        self._last_attacker = {
            defender: attacker
            for defender, attacker in self._last_attacker.items()
            if defender.is_alive() and attacker.is_alive()
        }

    # ============================================================================
    # DROPPED ITEMS
    # ============================================================================

    @property
    def dropped_items(self) -> list[Item]:
        return list(self._dropped_items)

    def drop_item(self, item: Item) -> None:
        self._dropped_items.append(item)

    def take_dropped_item(self, name: str) -> Optional[Item]:
        """
        Removes a dropped item by name, ignoring case.

        Returns:
            Optional[Item]: The item, or None if nothing matches.

        """
        needle = name.strip().lower()
        for index, item in enumerate(self._dropped_items):
            if needle and needle in item.name.lower():
                return self._dropped_items.pop(index)
        return None

    def take_all_dropped_items(self) -> list[Item]:
        items, self._dropped_items = self._dropped_items, []
        return items
