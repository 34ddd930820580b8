"""
Tests for monster special abilities.
"""

import pytest

from skirmish.combat.encounter import EncounterState
from skirmish.combat.special_abilities import find_special_ability, trigger_special_ability
from skirmish.core.constants import StatType
from skirmish.effects.conditions import Condition
from skirmish.effects.duration import DurationType
from skirmish.effects.status_effect import StatusEffect
from skirmish.effects.status_manager import StatusEffectManager
from skirmish.entities.monster import Monster


@pytest.fixture
def status_effects(dice):
    return StatusEffectManager(dice)


@pytest.fixture
def bandit():
    return Monster(
        monster_id="bandit",
        name="Bandit Captain",
        armor_class=15,
        max_hp=32,
        special_ability="Disarm",
    )


@pytest.fixture
def mimic():
    return Monster(
        monster_id="mimic",
        name="Mimic",
        armor_class=12,
        max_hp=58,
        special_ability="Adhesive",
    )


@pytest.fixture
def state(dice, hero, bandit, mimic):
    encounter = EncounterState(dice)
    encounter.begin(hero, [bandit, mimic])
    return encounter


@pytest.mark.parametrize(
    "name, key",
    [
        ("Disarm", "disarm"),
        ("disarm", "disarm"),
        ("Adhesive Skin", "adhesive"),
        ("ADHESIVE", "adhesive"),
    ],
)
def test_find_special_ability_matches_names(name, key):
    rule, _ = find_special_ability(name)
    assert rule.key == key


@pytest.mark.parametrize("name", [None, "", "Fire Breath"])
def test_find_special_ability_ignores_unknown_names(name):
    assert find_special_ability(name) is None


def test_disarm_failed_save_drops_weapon(state, status_effects, dice, hero, bandit, longsword):
    """
    Test that a failed DEX save makes the player drop the equipped weapon.
    """
    # DEX save +1: 2 + 1 = 3 vs DC 11.
    dice.queue(2)
    outcome = trigger_special_ability(bandit, hero, state, status_effects, dice)

    assert outcome.ability_name == "Disarm"
    assert not outcome.saved
    assert outcome.annotation == (
        "[Disarm: DEX save DC 11 - FAILED! Aldric drops Longsword!]"
    )
    assert hero.inventory.get_equipped_weapon() is None
    assert not hero.inventory.contains(longsword)
    assert state.dropped_items == [longsword]


def test_disarm_successful_save_keeps_weapon(state, status_effects, dice, hero, bandit, longsword):
    dice.queue(15)
    outcome = trigger_special_ability(bandit, hero, state, status_effects, dice)
    assert outcome.saved
    assert outcome.annotation == "[Disarm: DEX save DC 11 - SAVED!]"
    assert hero.inventory.get_equipped_weapon() is longsword
    assert state.dropped_items == []


def test_disarm_without_weapon(state, status_effects, dice, hero, bandit, longsword):
    hero.inventory.remove_item(longsword)
    dice.queue(1)
    outcome = trigger_special_ability(bandit, hero, state, status_effects, dice)
    assert outcome.annotation.endswith("FAILED! (no weapon equipped)]")
    assert state.dropped_items == []


def test_adhesive_failed_save_restrains(state, status_effects, dice, hero, mimic):
    """
    Test that a failed STR save leaves the player restrained until a save.
    """
    # STR save +5: 2 + 5 = 7 vs DC 13.
    dice.queue(2)
    outcome = trigger_special_ability(mimic, hero, state, status_effects, dice)

    assert not outcome.saved
    assert outcome.annotation == (
        "[Adhesive: STR save DC 13 - FAILED! Aldric is RESTRAINED!]"
    )
    (effect,) = status_effects.get_effects(hero)
    assert effect.condition == Condition.RESTRAINED
    assert effect.duration_type == DurationType.UNTIL_SAVE
    assert effect.saving_throw_ability == StatType.STRENGTH
    assert effect.save_dc == 13
    assert effect.source is mimic


def test_adhesive_successful_save(state, status_effects, dice, hero, mimic):
    dice.queue(8)
    outcome = trigger_special_ability(mimic, hero, state, status_effects, dice)
    assert outcome.saved
    assert not status_effects.has_any_effects(hero)


def test_stunned_target_auto_fails_the_save(state, status_effects, dice, hero, mimic):
    """
    Test that a target auto-failing STR saves gets no roll at all.
    """
    status_effects.apply_effect(hero, StatusEffect.indefinite(Condition.STUNNED))
    dice.queue(20)
    outcome = trigger_special_ability(mimic, hero, state, status_effects, dice)
    assert not outcome.saved
    assert status_effects.has_condition(hero, Condition.RESTRAINED)
    assert dice.remaining == [20]


def test_unknown_ability_does_nothing(state, status_effects, dice, hero):
    gazer = Monster(
        monster_id="gazer",
        name="Gazer",
        armor_class=13,
        max_hp=13,
        special_ability="Mesmerizing Gaze",
    )
    assert trigger_special_ability(gazer, hero, state, status_effects, dice) is None
    assert not status_effects.has_any_effects(hero)
