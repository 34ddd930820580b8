"""
Shared fixtures for the combat engine tests.
"""

import pytest

from skirmish.core.constants import StatType
from skirmish.core.dice import Dice
from skirmish.entities.character import PlayerCharacter
from skirmish.entities.monster import Monster, MonsterBehavior
from skirmish.items.item import Weapon


class ScriptedDice(Dice):
    """
    Dice returning queued faces in order, then a fixed default face.

    Faces larger than the die are clamped to its number of sides, so a queued
    20 rolled on a d6 gives 6.
    """

    def __init__(self, faces=None, default=10):
        super().__init__(seed=0)
        self._faces = list(faces or [])
        self.default = default

    def queue(self, *faces):
        self._faces.extend(faces)

    @property
    def remaining(self):
        return list(self._faces)

    def roll(self, sides):
        if sides < 1:
            raise ValueError(f"Die must have at least 1 side, got {sides}")
        value = self._faces.pop(0) if self._faces else self.default
        value = max(1, min(sides, value))
        self._history.append((sides, value))
        return value


@pytest.fixture
def dice():
    """Scripted dice with an empty queue."""
    return ScriptedDice()


@pytest.fixture
def longsword():
    return Weapon(name="Longsword", damage_dice="1d8")


@pytest.fixture
def hero(longsword):
    """A level 1 fighter: STR +3, DEX +1, AC 11, attack +5, 1d8+3 damage."""
    character = PlayerCharacter(
        name="Aldric",
        max_hp=20,
        ability_scores={
            StatType.STRENGTH: 16,
            StatType.DEXTERITY: 12,
            StatType.CONSTITUTION: 14,
        },
        saving_throw_proficiencies={StatType.STRENGTH, StatType.CONSTITUTION},
    )
    character.inventory.equip(longsword)
    return character


@pytest.fixture
def goblin():
    """A goblin: AC 13, 7 HP, worth 50 XP."""
    return Monster(
        monster_id="goblin",
        name="Goblin",
        armor_class=13,
        max_hp=7,
        attack_bonus=4,
        damage_dice="1d6+2",
        experience_value=50,
        behavior=MonsterBehavior.AGGRESSIVE,
    )


@pytest.fixture
def ogre():
    """A monster hitting hard enough to drop the hero in one blow."""
    return Monster(
        monster_id="ogre",
        name="Ogre",
        armor_class=11,
        max_hp=59,
        attack_bonus=10,
        damage_dice="4d6+10",
        experience_value=450,
    )
