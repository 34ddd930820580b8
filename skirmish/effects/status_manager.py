"""
Status effect manager for the combat engine.

Keeps the status effects of every combatant in an encounter, processes turn
boundaries, and answers the rule queries used by attack resolution and by
the turn scheduler.
"""

from collections.abc import Callable
from typing import Optional

from catchery import log_debug

from skirmish.core.dice import Dice
from skirmish.core.error_handling import validate_required_object
from skirmish.entities.combatant import Combatant

from .conditions import Condition
from .status_effect import StatusEffect


class StatusEffectManager:
    """
    Per-combatant collections of status effects.

    Effects stack: applying an effect never replaces another one, even with
    the same condition.
    """

    def __init__(self, dice: Optional[Dice] = None) -> None:
        self._dice = dice if dice is not None else Dice()
        self._effects: dict[Combatant, list[StatusEffect]] = {}

    # ============================================================================
    # EFFECT MANAGEMENT
    # ============================================================================

    def apply_effect(self, combatant: Combatant, effect: StatusEffect) -> StatusEffect:
        """
        Applies an effect to a combatant.

        Args:
            combatant (Combatant): The combatant receiving the effect.
            effect (StatusEffect): The effect to apply.

        Returns:
            StatusEffect: The applied effect.

        Raises:
            ValueError: If the combatant or the effect is None.

        """
        validate_required_object(combatant, "combatant", {"effect": getattr(effect, "name", None)})
        validate_required_object(effect, "effect", {"combatant": combatant.name})
        self._effects.setdefault(combatant, []).append(effect)
        log_debug(
            f"{combatant.name} is affected by {effect}",
            {"combatant": combatant.name, "effect": effect.name},
        )
        return effect

    def remove_effect(self, combatant: Combatant, effect: StatusEffect) -> bool:
        """
        Removes a specific effect instance.

        Returns:
            bool: True if the effect was active and has been removed.

        """
        effects = self._effects.get(combatant, [])
        for index, active in enumerate(effects):
            if active is effect:
                del effects[index]
                self._drop_if_empty(combatant)
                return True
        return False

    def remove_condition(self, combatant: Combatant, condition: Condition) -> int:
        """
        Removes every effect imposing a condition.

        Returns:
            int: The number of effects removed.

        """
        effects = self._effects.get(combatant, [])
        kept = [effect for effect in effects if effect.condition != condition]
        removed = len(effects) - len(kept)
        if removed:
            self._effects[combatant] = kept
            self._drop_if_empty(combatant)
        return removed

    def clear_effects(self, combatant: Combatant) -> None:
        self._effects.pop(combatant, None)

    def reset(self) -> None:
        """Forgets every effect of every combatant."""
        self._effects.clear()

    def get_effects(self, combatant: Combatant) -> list[StatusEffect]:
        """A copy of the active effects of a combatant."""
        return list(self._effects.get(combatant, []))

    def get_conditions(self, combatant: Combatant) -> set[Condition]:
        return {
            effect.condition
            for effect in self._effects.get(combatant, [])
            if effect.condition is not None
        }

    # ============================================================================
    # TURN PROCESSING
    # ============================================================================

    def process_turn_start(self, combatant: Combatant) -> list[str]:
        """
        Processes the start of a combatant's turn.

        Args:
            combatant (Combatant): The combatant whose turn starts.

        Returns:
            list[str]: Messages of the effects that ended.

        """
        return self._process(combatant, lambda effect: effect.on_turn_start(combatant))

    def process_turn_end(self, combatant: Combatant) -> list[str]:
        """
        Processes the end of a combatant's turn: saving throws, round
        counters, and until-end-of-turn effects.

        Args:
            combatant (Combatant): The combatant whose turn ends.

        Returns:
            list[str]: Messages of the effects that ended.

        """
        auto_fail = self.auto_fails_str_dex_saves(combatant)
        return self._process(
            combatant,
            lambda effect: effect.on_turn_end(combatant, self._dice, auto_fail),
        )

    def _process(
        self,
        combatant: Combatant,
        handler: Callable[[StatusEffect], Optional[str]],
    ) -> list[str]:
        messages: list[str] = []
        for effect in self.get_effects(combatant):
            message = handler(effect)
            if message:
                messages.append(message)
        self._remove_expired(combatant)
        return messages

    def _remove_expired(self, combatant: Combatant) -> None:
        effects = self._effects.get(combatant)
        if effects is None:
            return
        self._effects[combatant] = [e for e in effects if not e.is_expired()]
        self._drop_if_empty(combatant)

    def _drop_if_empty(self, combatant: Combatant) -> None:
        if not self._effects.get(combatant):
            self._effects.pop(combatant, None)

    # ============================================================================
    # QUERIES
    # ============================================================================

    def has_condition(self, combatant: Combatant, condition: Condition) -> bool:
        return any(
            effect.condition == condition for effect in self._effects.get(combatant, [])
        )

    def has_any_effects(self, combatant: Combatant) -> bool:
        return bool(self._effects.get(combatant))

    def _any(self, combatant: Combatant, check: Callable[[StatusEffect], bool]) -> bool:
        return any(check(effect) for effect in self._effects.get(combatant, []))

    def attacks_have_advantage_against(self, target: Combatant) -> bool:
        """True if the target suffers a condition that gives attackers advantage."""
        return self._any(target, StatusEffect.grants_advantage_to_attackers)

    def has_disadvantage_on_attacks(self, combatant: Combatant) -> bool:
        return self._any(combatant, StatusEffect.causes_attack_disadvantage)

    def has_advantage_on_attacks(self, combatant: Combatant) -> bool:
        return self._any(combatant, StatusEffect.grants_attack_advantage)

    def can_move(self, combatant: Combatant) -> bool:
        return not self._any(combatant, StatusEffect.prevents_movement)

    def can_take_actions(self, combatant: Combatant) -> bool:
        return not self._any(combatant, StatusEffect.prevents_actions)

    def auto_fails_str_dex_saves(self, combatant: Combatant) -> bool:
        return self._any(combatant, StatusEffect.auto_fails_str_dex_saves)

    def melee_crits_on_hit(self, target: Combatant) -> bool:
        """True if melee hits against the target are always critical hits."""
        return self._any(target, StatusEffect.melee_crits_on_hit)

    # ============================================================================
    # DISPLAY
    # ============================================================================

    def get_status_display(self, combatant: Combatant) -> str:
        """
        Renders the active effects of a combatant.

        Args:
            combatant (Combatant): The combatant to describe.

        Returns:
            str: E.g. "Hero: Poisoned (2 rounds), Prone", or
            "Hero: no active effects".

        """
        effects = self._effects.get(combatant)
        if not effects:
            return f"{combatant.name}: no active effects"
        return f"{combatant.name}: " + ", ".join(str(effect) for effect in effects)

    def __repr__(self) -> str:
        counts = {
            combatant.name: len(effects) for combatant, effects in self._effects.items()
        }
        return f"StatusEffectManager({counts})"
