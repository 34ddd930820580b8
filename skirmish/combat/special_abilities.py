"""
Special abilities triggered by a monster's successful hit.

A monster's special ability is a free-form name. The registry matches it
against known abilities; each known ability rolls a saving throw for the
target and applies its secondary effect when the save fails. Unknown names
do nothing.
"""

from collections.abc import Callable
from typing import Optional

from catchery import log_debug
from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import SPECIAL_ABILITY_SAVES, StatType
from skirmish.core.dice import Dice
from skirmish.effects.conditions import Condition
from skirmish.effects.status_effect import StatusEffect
from skirmish.effects.status_manager import StatusEffectManager
from skirmish.entities.character import PlayerCharacter
from skirmish.entities.combatant import Combatant
from skirmish.entities.monster import Monster
from skirmish.items.item import EquipmentSlot

from .encounter import EncounterState


class SpecialAbilityRule(BaseModel):
    """Saving throw and secondary effect of a special ability."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Lower-case name matched against ability names.")
    display_name: str = Field(description="Name used in messages.")
    save_ability: StatType = Field(description="Saving throw ability.")
    save_dc: int = Field(gt=0, description="Saving throw DC.")

    @property
    def save_label(self) -> str:
        return f"{self.save_ability.short_name} save DC {self.save_dc}"


class SpecialAbilityOutcome(BaseModel):
    """What happened when a special ability fired."""

    model_config = ConfigDict(frozen=True)

    ability_name: str
    saved: bool
    annotation: str


# Secondary effect of a failed save: returns the text after "FAILED!".
FailureHandler = Callable[
    [Monster, Combatant, SpecialAbilityRule, EncounterState, StatusEffectManager], str
]


def _disarm(
    monster: Monster,
    target: Combatant,
    rule: SpecialAbilityRule,
    state: EncounterState,
    status_effects: StatusEffectManager,
) -> str:
    if not isinstance(target, PlayerCharacter):
        return "(nothing to disarm)"
    weapon = target.inventory.get_equipped_weapon()
    if weapon is None:
        return "(no weapon equipped)"
    target.inventory.unequip(EquipmentSlot.MAIN_HAND)
    target.inventory.remove_item(weapon)
    state.drop_item(weapon)
    return f"{target.name} drops {weapon.name}!"


def _adhesive(
    monster: Monster,
    target: Combatant,
    rule: SpecialAbilityRule,
    state: EncounterState,
    status_effects: StatusEffectManager,
) -> str:
    status_effects.apply_effect(
        target,
        StatusEffect.until_save(
            Condition.RESTRAINED, rule.save_ability, rule.save_dc, source=monster
        ),
    )
    return f"{target.name} is RESTRAINED!"


def _rule(key: str) -> SpecialAbilityRule:
    ability, dc = SPECIAL_ABILITY_SAVES[key]
    return SpecialAbilityRule(
        key=key, display_name=key.capitalize(), save_ability=ability, save_dc=dc
    )


SPECIAL_ABILITIES: dict[str, tuple[SpecialAbilityRule, FailureHandler]] = {
    "disarm": (_rule("disarm"), _disarm),
    "adhesive": (_rule("adhesive"), _adhesive),
}


def find_special_ability(
    name: Optional[str],
) -> Optional[tuple[SpecialAbilityRule, FailureHandler]]:
    """
    Looks up a special ability by name.

    The match ignores case and accepts names that contain a known key, so
    "Adhesive Skin" resolves to the adhesive rule.

    Args:
        name (Optional[str]): The monster's special ability name.

    Returns:
        Optional[tuple[SpecialAbilityRule, FailureHandler]]: The rule and
        its failure handler, or None for unknown names.

    """
    if not name:
        return None
    lowered = name.lower()
    for key, entry in SPECIAL_ABILITIES.items():
        if key in lowered:
            return entry
    return None


def trigger_special_ability(
    monster: Monster,
    target: Combatant,
    state: EncounterState,
    status_effects: StatusEffectManager,
    dice: Dice,
) -> Optional[SpecialAbilityOutcome]:
    """
    Fires a monster's special ability after a successful hit.

    Args:
        monster (Monster): The monster that hit.
        target (Combatant): The combatant that was hit.
        state (EncounterState): The current encounter, receives dropped items.
        status_effects (StatusEffectManager): Receives applied conditions.
        dice (Dice): The dice service for the saving throw.

    Returns:
        Optional[SpecialAbilityOutcome]: The ability name, whether the
        save succeeded, and the annotation for the hit. None if the ability
        is unknown.

    """
    entry = find_special_ability(monster.special_ability)
    if entry is None:
        if monster.special_ability:
            log_debug(
                f"Unknown special ability '{monster.special_ability}' ignored",
                {"monster": monster.name},
            )
        return None
    rule, on_failure = entry

    auto_fail = rule.save_ability in (
        StatType.STRENGTH,
        StatType.DEXTERITY,
    ) and status_effects.auto_fails_str_dex_saves(target)
    saved = not auto_fail and dice.check_against_dc(
        target.get_saving_throw_modifier(rule.save_ability), rule.save_dc
    )
    if saved:
        return SpecialAbilityOutcome(
            ability_name=rule.display_name,
            saved=True,
            annotation=f"[{rule.display_name}: {rule.save_label} - SAVED!]",
        )

    outcome = on_failure(monster, target, rule, state, status_effects)
    log_debug(
        f"{monster.name}'s {rule.display_name} affects {target.name}",
        {"monster": monster.name, "target": target.name, "outcome": outcome},
    )
    return SpecialAbilityOutcome(
        ability_name=rule.display_name,
        saved=False,
        annotation=f"[{rule.display_name}: {rule.save_label} - FAILED! {outcome}]",
    )
