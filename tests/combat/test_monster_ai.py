"""
Tests for monster decision making.
"""

import pytest

from skirmish.combat.encounter import EncounterState
from skirmish.combat.monster_ai import (
    MonsterAction,
    choose_target,
    decide_action,
    wants_to_flee,
)
from skirmish.entities.character import PlayerCharacter
from skirmish.entities.monster import Monster, MonsterBehavior


class FakeEncounter:
    """Minimal encounter exposing several hostile targets."""

    def __init__(self, targets, last_attacker=None):
        self.targets = targets
        self.last_attacker = last_attacker

    def hostile_targets(self, combatant):
        return [target for target in self.targets if target.is_alive()]

    def get_last_attacker(self, combatant):
        return self.last_attacker


def make_monster(behavior, max_hp=20):
    return Monster(
        monster_id=str(behavior).lower(),
        name=f"{behavior.display_name} Orc",
        armor_class=13,
        max_hp=max_hp,
        behavior=behavior,
    )


@pytest.fixture
def sturdy():
    return PlayerCharacter(name="Sturdy", max_hp=50)


@pytest.fixture
def frail():
    return PlayerCharacter(name="Frail", max_hp=5)


@pytest.mark.parametrize("order", [0, 1])
def test_tactical_monster_picks_lowest_hp_target(sturdy, frail, order):
    """
    Test that a tactical monster facing targets at 50 and 5 HP always picks
    the 5 HP one, even when the other one hit it last.
    """
    targets = [sturdy, frail] if order == 0 else [frail, sturdy]
    monster = make_monster(MonsterBehavior.TACTICAL)
    encounter = FakeEncounter(targets, last_attacker=sturdy)
    for _ in range(10):
        assert choose_target(monster, encounter) is frail
        decision = decide_action(monster, encounter)
        assert decision.action == MonsterAction.ATTACK
        assert decision.target is frail


def test_aggressive_monster_defaults_to_first_living_target(sturdy, frail):
    monster = make_monster(MonsterBehavior.AGGRESSIVE)
    assert choose_target(monster, FakeEncounter([sturdy, frail])) is sturdy
    sturdy.take_damage(50)
    assert choose_target(monster, FakeEncounter([sturdy, frail])) is frail


def test_monster_goes_after_its_last_attacker(sturdy, frail):
    """
    Test that non-tactical monsters retaliate against whoever hit them last.
    """
    monster = make_monster(MonsterBehavior.AGGRESSIVE)
    encounter = FakeEncounter([sturdy, frail], last_attacker=frail)
    assert choose_target(monster, encounter) is frail
    frail.take_damage(5)
    assert choose_target(monster, encounter) is sturdy


def test_no_target_available():
    monster = make_monster(MonsterBehavior.AGGRESSIVE)
    assert choose_target(monster, FakeEncounter([])) is None
    assert decide_action(monster, FakeEncounter([])).target is None


def test_cowardly_monster_flees_when_bloodied():
    monster = make_monster(MonsterBehavior.COWARDLY)
    assert not wants_to_flee(monster)
    monster.take_damage(10)
    assert wants_to_flee(monster)


def test_defensive_monster_flees_at_a_quarter_hp():
    monster = make_monster(MonsterBehavior.DEFENSIVE)
    monster.take_damage(14)
    assert not wants_to_flee(monster)
    monster.take_damage(1)
    assert wants_to_flee(monster)


@pytest.mark.parametrize("behavior", [MonsterBehavior.AGGRESSIVE, MonsterBehavior.TACTICAL])
def test_attackers_never_flee(behavior):
    monster = make_monster(behavior)
    monster.take_damage(19)
    assert not wants_to_flee(monster)


def test_decide_action_in_a_real_encounter(dice, hero, goblin):
    """
    Test that a fleeing decision still carries the target to fall back on.
    """
    state = EncounterState(dice)
    state.begin(hero, [goblin])
    decision = decide_action(goblin, state)
    assert decision.action == MonsterAction.ATTACK
    assert decision.target is hero

    goblin.behavior = MonsterBehavior.COWARDLY
    goblin.take_damage(4)
    decision = decide_action(goblin, state)
    assert decision.action == MonsterAction.FLEE
    assert decision.target is hero
