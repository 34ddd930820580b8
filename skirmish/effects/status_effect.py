"""
Status effect module for the combat engine.

A status effect couples a condition with a duration. The effect itself only
knows how to count down and when it ends; the StatusEffectManager decides
when turn boundaries happen and removes expired effects.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from skirmish.core.constants import StatType
from skirmish.core.dice import Dice
from skirmish.entities.combatant import Combatant

from .conditions import Condition, ConditionRule
from .duration import DurationType


class StatusEffect(BaseModel):
    """
    A timed condition on a combatant.

    Round counted effects start at one round unless told otherwise; every
    other duration type keeps the counter at -1. Saving throws are possible
    whenever both a saving throw ability and a positive DC are set.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(description="Display name of the effect.")
    description: str = Field(default="", description="What the effect does.")
    condition: Optional[Condition] = Field(
        default=None,
        description="The condition imposed, None for purely narrative effects.",
    )
    duration_type: DurationType = Field(
        default=DurationType.INDEFINITE,
        description="How long the effect lasts.",
    )
    remaining_duration: Optional[int] = Field(
        default=None,
        description="Rounds left, only meaningful for round counted effects.",
    )
    saving_throw_ability: Optional[StatType] = Field(
        default=None,
        description="Ability used to shake the effect off.",
    )
    save_dc: int = Field(default=0, ge=0, description="DC of the saving throw.")
    source: Any = Field(default=None, description="Who or what applied the effect.")

    _expired: bool = PrivateAttr(default=False)

    def model_post_init(self, _: Any) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Status effect name must not be empty.")
        if self.duration_type.uses_round_counter:
            if self.remaining_duration is None:
                self.remaining_duration = 1
            elif self.remaining_duration < 1:
                raise ValueError(
                    f"Round counted effects need at least 1 round, "
                    f"got {self.remaining_duration}."
                )
        else:
            self.remaining_duration = -1
        if self.duration_type.allows_saving_throw and not self.allows_saving_throw():
            raise ValueError(
                f"Effect '{self.name}' lasts until a save but has no save ability or DC."
            )

    # ============================================================================
    # FACTORIES
    # ============================================================================

    @classmethod
    def for_rounds(
        cls, condition: Condition, rounds: int, source: Any = None
    ) -> "StatusEffect":
        return cls(
            name=condition.display_name,
            description=condition.description,
            condition=condition,
            duration_type=DurationType.ROUNDS,
            remaining_duration=rounds,
            source=source,
        )

    @classmethod
    def until_save(
        cls,
        condition: Condition,
        ability: StatType,
        dc: int,
        source: Any = None,
    ) -> "StatusEffect":
        """
        Creates an effect that lasts until the bearer succeeds on a saving
        throw, rolled at the end of each of its turns.

        Args:
            condition (Condition): The condition imposed.
            ability (StatType): The saving throw ability.
            dc (int): The saving throw DC.
            source (Any): Who applied the effect.

        Returns:
            StatusEffect: The new effect.

        """
        return cls(
            name=condition.display_name,
            description=condition.description,
            condition=condition,
            duration_type=DurationType.UNTIL_SAVE,
            saving_throw_ability=ability,
            save_dc=dc,
            source=source,
        )

    @classmethod
    def until_end_of_turn(cls, condition: Condition, source: Any = None) -> "StatusEffect":
        return cls._with_duration(condition, DurationType.UNTIL_END_OF_TURN, source)

    @classmethod
    def until_start_of_turn(
        cls, condition: Condition, source: Any = None
    ) -> "StatusEffect":
        return cls._with_duration(condition, DurationType.UNTIL_START_OF_TURN, source)

    @classmethod
    def permanent(cls, condition: Condition, source: Any = None) -> "StatusEffect":
        return cls._with_duration(condition, DurationType.PERMANENT, source)

    @classmethod
    def indefinite(cls, condition: Condition, source: Any = None) -> "StatusEffect":
        return cls._with_duration(condition, DurationType.INDEFINITE, source)

    @classmethod
    def _with_duration(
        cls, condition: Condition, duration_type: DurationType, source: Any
    ) -> "StatusEffect":
        return cls(
            name=condition.display_name,
            description=condition.description,
            condition=condition,
            duration_type=duration_type,
            source=source,
        )

    # ============================================================================
    # DURATION
    # ============================================================================

    def is_expired(self) -> bool:
        return self._expired or self.remaining_duration == 0

    def expire(self) -> None:
        self._expired = True

    def decrement_duration(self) -> None:
        """Removes one round from a round counted effect, never below zero."""
        if self.duration_type.uses_round_counter and self.remaining_duration:
            self.remaining_duration = max(0, self.remaining_duration - 1)

    def allows_saving_throw(self) -> bool:
        return self.saving_throw_ability is not None and self.save_dc > 0

    def attempt_save(
        self, bearer: Combatant, dice: Dice, auto_fail_str_dex: bool = False
    ) -> bool:
        """
        Rolls the bearer's saving throw against this effect.

        Args:
            bearer (Combatant): The combatant suffering the effect.
            dice (Dice): The dice service.
            auto_fail_str_dex (bool): Whether the bearer automatically fails
                Strength and Dexterity saves.

        Returns:
            bool: True if the save succeeded, False if it failed or no save
            is allowed.

        """
        if not self.allows_saving_throw():
            return False
        ability = self.saving_throw_ability
        if auto_fail_str_dex and ability in (StatType.STRENGTH, StatType.DEXTERITY):
            return False
        modifier = bearer.get_saving_throw_modifier(ability)
        return dice.check_against_dc(modifier, self.save_dc)

    def on_turn_start(self, bearer: Combatant) -> Optional[str]:
        """
        Handles the start of the bearer's turn.

        Returns:
            Optional[str]: A message if the effect ended, None otherwise.

        """
        if self.is_expired():
            return None
        if self.duration_type.checks_at_turn_start:
            self.expire()
            return f"{self.name} on {bearer.name} has ended."
        return None

    def on_turn_end(
        self, bearer: Combatant, dice: Dice, auto_fail_str_dex: bool = False
    ) -> Optional[str]:
        """
        Handles the end of the bearer's turn: saving throws first, then the
        duration bookkeeping.

        Returns:
            Optional[str]: A message if the effect ended, None otherwise.

        """
        if self.is_expired():
            return None
        if self.allows_saving_throw():
            if self.attempt_save(bearer, dice, auto_fail_str_dex):
                self.expire()
                return (
                    f"{bearer.name} saves against {self.name}! "
                    f"[{self.saving_throw_ability.short_name} save DC {self.save_dc}]"
                )
        if self.duration_type is DurationType.UNTIL_END_OF_TURN:
            self.expire()
            return f"{self.name} on {bearer.name} has ended."
        if self.duration_type.uses_round_counter:
            self.decrement_duration()
            if self.is_expired():
                return f"{self.name} on {bearer.name} has worn off."
        return None

    # ============================================================================
    # MECHANICS
    # ============================================================================

    @property
    def rule(self) -> ConditionRule:
        """The rule flags of the condition, all False for narrative effects."""
        if self.condition is None:
            return _NO_RULE
        return self.condition.rule

    def grants_advantage_to_attackers(self) -> bool:
        return self.rule.grants_advantage_to_attackers

    def causes_attack_disadvantage(self) -> bool:
        return self.rule.causes_attack_disadvantage

    def grants_attack_advantage(self) -> bool:
        return self.rule.grants_attack_advantage

    def prevents_movement(self) -> bool:
        return self.rule.prevents_movement

    def prevents_actions(self) -> bool:
        return self.rule.prevents_actions

    def auto_fails_str_dex_saves(self) -> bool:
        return self.rule.auto_fails_str_dex_saves

    def melee_crits_on_hit(self) -> bool:
        return self.rule.melee_crits_on_hit

    def __str__(self) -> str:
        if self.duration_type.uses_round_counter:
            rounds = self.remaining_duration
            return f"{self.name} ({rounds} round{'' if rounds == 1 else 's'})"
        if self.duration_type is DurationType.UNTIL_SAVE:
            return (
                f"{self.name} (DC {self.save_dc} "
                f"{self.saving_throw_ability.short_name} save)"
            )
        return self.name


_NO_RULE = ConditionRule(description="No mechanical effect.")
