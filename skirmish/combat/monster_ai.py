"""
Monster decision making.

Each monster behavior maps to a simple rule for choosing between attacking
and fleeing, and for choosing whom to attack.
"""

from typing import Any, Optional

from catchery import log_debug
from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import DEFENSIVE_FLEE_HP_PERCENT, NiceEnum
from skirmish.entities.combatant import Combatant, hp_percentage
from skirmish.entities.monster import Monster, MonsterBehavior

from .encounter import EncounterState


class MonsterAction(NiceEnum):
    ATTACK = "ATTACK"
    FLEE = "FLEE"


class MonsterDecision(BaseModel):
    """What a monster wants to do on its turn."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    action: MonsterAction = Field(description="The chosen action.")
    target: Any = Field(
        default=None,
        description="Whom to attack, also the fallback target when fleeing fails.",
    )
    reason: str = Field(default="", description="Short explanation for logs.")


def _lowest_hp(targets: list[Combatant]) -> Optional[Combatant]:
    """The target with the lowest current HP; ties keep the given order."""
    if not targets:
        return None
    return min(targets, key=lambda target: target.current_hp)


def choose_target(monster: Monster, state: EncounterState) -> Optional[Combatant]:
    """
    Chooses whom a monster attacks.

    Tactical monsters always focus the weakest target. Everyone else goes
    after whoever last hit them, if still standing, and otherwise the first
    living target.

    Args:
        monster (Monster): The monster choosing.
        state (EncounterState): The current encounter.

    Returns:
        Optional[Combatant]: The target, or None if nobody can be attacked.

    """
    targets = state.hostile_targets(monster)
    if not targets:
        return None
    if monster.behavior == MonsterBehavior.TACTICAL:
        return _lowest_hp(targets)
    last_attacker = state.get_last_attacker(monster)
    if last_attacker is not None and any(t is last_attacker for t in targets):
        return last_attacker
    return targets[0]


def wants_to_flee(monster: Monster) -> bool:
    """
    Whether a monster's behavior tells it to run.

    Returns:
        bool: True for bloodied cowardly monsters and for defensive monsters
        at or below the flee threshold.

    """
    if monster.behavior == MonsterBehavior.COWARDLY:
        return monster.is_bloodied()
    if monster.behavior == MonsterBehavior.DEFENSIVE:
        return hp_percentage(monster) <= DEFENSIVE_FLEE_HP_PERCENT
    return False


def decide_action(monster: Monster, state: EncounterState) -> MonsterDecision:
    """
    Decides the action of a monster on its turn.

    Args:
        monster (Monster): The acting monster.
        state (EncounterState): The current encounter.

    Returns:
        MonsterDecision: FLEE or ATTACK, with the target to attack.

    """
    target = choose_target(monster, state)
    if wants_to_flee(monster):
        decision = MonsterDecision(
            action=MonsterAction.FLEE,
            target=target,
            reason=f"{monster.behavior.display_name} at {monster.current_hp} HP",
        )
    else:
        decision = MonsterDecision(
            action=MonsterAction.ATTACK,
            target=target,
            reason=monster.behavior.display_name,
        )
    log_debug(
        f"{monster.name} decides to {decision.action.display_name.lower()}",
        {
            "monster": monster.name,
            "behavior": str(monster.behavior),
            "target": target.name if target is not None else None,
        },
    )
    return decision
