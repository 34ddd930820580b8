"""
Tests for monsters.
"""

import pytest

from skirmish.core.constants import CombatantKind, StatType
from skirmish.entities.combatant import Combatant, hp_percentage, is_hostile
from skirmish.entities.monster import Monster, MonsterBehavior


def test_monster_is_a_combatant(goblin):
    assert isinstance(goblin, Combatant)
    assert goblin.kind == CombatantKind.ENEMY


def test_monster_damage_is_clamped(goblin):
    """
    Test that monster HP never drops below zero.
    """
    assert goblin.take_damage(8) == 7
    assert goblin.current_hp == 0
    assert not goblin.is_alive()


def test_monster_healing_is_clamped(goblin):
    goblin.take_damage(4)
    assert goblin.heal(10) == 4
    assert goblin.current_hp == goblin.max_hp


def test_monster_rejects_invalid_behavior():
    """
    Test that the behavior must be a MonsterBehavior.
    """
    with pytest.raises(ValueError):
        Monster(
            monster_id="rat",
            name="Rat",
            armor_class=10,
            max_hp=1,
            behavior="SNEAKY",
        )


def test_monster_rejects_empty_identifier():
    with pytest.raises(ValueError):
        Monster(monster_id="", name="Rat", armor_class=10, max_hp=1)


@pytest.mark.parametrize("damage_dice", ["banana", "", "2d", "1d0"])
def test_monster_rejects_invalid_damage_dice(damage_dice):
    """
    Test that a monster cannot be built with damage it could never roll.
    """
    with pytest.raises(ValueError):
        Monster(
            monster_id="rat",
            name="Rat",
            armor_class=10,
            max_hp=1,
            damage_dice=damage_dice,
        )


def test_copy_preserves_behavior_and_special_ability():
    """
    Test that copying a template keeps its behavior tag and special ability,
    with a new instance id and full HP.
    """
    template = Monster(
        monster_id="bandit",
        name="Bandit Captain",
        armor_class=15,
        max_hp=32,
        behavior=MonsterBehavior.TACTICAL,
        special_ability="Disarm",
        ability_modifiers={StatType.DEXTERITY: 3},
    )
    template.take_damage(10)
    copy = template.copy()

    assert copy is not template
    assert copy.behavior == MonsterBehavior.TACTICAL
    assert copy.special_ability == "Disarm"
    assert copy.has_special_ability()
    assert copy.current_hp == 32
    assert copy.instance_id != template.instance_id
    assert copy.initiative_modifier == 3
    # Modifiers are not shared with the template.
    copy.ability_modifiers[StatType.DEXTERITY] = 0
    assert template.ability_modifiers[StatType.DEXTERITY] == 3


def test_reset_hit_points(goblin):
    goblin.take_damage(5)
    goblin.reset_hit_points()
    assert goblin.current_hp == 7


def test_roll_attack_adds_attack_bonus(goblin, dice):
    dice.queue(12)
    d20, total = goblin.roll_attack(dice)
    assert d20.natural == 12
    assert total == 16


def test_roll_damage_doubles_dice_on_critical(goblin, dice):
    dice.queue(3, 4)
    breakdown = goblin.roll_damage(dice, critical=True)
    assert breakdown.value == 9


def test_is_hostile(hero, goblin):
    """
    Test that only combatants of different kinds are hostile.
    """
    assert is_hostile(hero, goblin)
    assert is_hostile(goblin, hero)
    assert not is_hostile(goblin, goblin)
    assert not is_hostile(goblin, goblin.copy())


def test_hp_percentage(goblin):
    goblin.take_damage(5)
    assert hp_percentage(goblin) == 28
