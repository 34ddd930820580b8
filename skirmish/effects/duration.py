"""
Duration types of status effects.
"""

from skirmish.core.constants import NiceEnum


class DurationType(NiceEnum):
    """How long a status effect lasts."""

    ROUNDS = "ROUNDS"
    UNTIL_END_OF_TURN = "UNTIL_END_OF_TURN"
    UNTIL_START_OF_TURN = "UNTIL_START_OF_TURN"
    UNTIL_SAVE = "UNTIL_SAVE"
    PERMANENT = "PERMANENT"
    INDEFINITE = "INDEFINITE"

    @property
    def description(self) -> str:
        return {
            DurationType.ROUNDS: "Lasts for a number of rounds",
            DurationType.UNTIL_END_OF_TURN: "Lasts until end of turn",
            DurationType.UNTIL_START_OF_TURN: "Lasts until start of next turn",
            DurationType.UNTIL_SAVE: "Lasts until successful saving throw",
            DurationType.PERMANENT: "Permanent until dispelled",
            DurationType.INDEFINITE: "Lasts until removed",
        }[self]

    @property
    def uses_round_counter(self) -> bool:
        return self is DurationType.ROUNDS

    @property
    def allows_saving_throw(self) -> bool:
        return self is DurationType.UNTIL_SAVE

    @property
    def checks_at_turn_start(self) -> bool:
        return self is DurationType.UNTIL_START_OF_TURN

    @property
    def checks_at_turn_end(self) -> bool:
        return self in (
            DurationType.ROUNDS,
            DurationType.UNTIL_END_OF_TURN,
            DurationType.UNTIL_SAVE,
        )
