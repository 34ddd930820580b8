"""
Tests for initiative and turn scheduling.
"""

import pytest

from skirmish.combat.initiative import InitiativeTracker


@pytest.fixture
def tracker(dice):
    return InitiativeTracker(dice)


def test_roll_orders_by_descending_total(tracker, dice, hero, goblin, ogre):
    """
    Test that combatants act from the highest initiative to the lowest.
    """
    # Hero +1, goblin +0, ogre +0.
    dice.queue(5, 12, 18)
    rolls = tracker.roll([hero, goblin, ogre])
    assert rolls == [(ogre, 18), (goblin, 12), (hero, 6)]
    assert tracker.order == (ogre, goblin, hero)
    assert tracker.round_number == 1
    assert tracker.current_combatant() is ogre
    assert tracker.get_roll(hero) == 6


def test_ties_keep_insertion_order(tracker, dice, goblin, ogre):
    dice.queue(10, 10)
    tracker.roll([goblin, ogre])
    assert tracker.order == (goblin, ogre)


def test_advance_wraps_and_counts_rounds(tracker, dice, hero, goblin):
    dice.queue(15, 5)
    tracker.roll([hero, goblin])
    assert tracker.advance() is goblin
    assert tracker.round_number == 1
    assert tracker.advance() is hero
    assert tracker.round_number == 2
    assert tracker.current_index == 0


def test_advance_skips_dead_and_departed(tracker, dice, hero, goblin, ogre):
    """
    Test that dead or departed combatants keep their place but lose turns.
    """
    dice.queue(15, 10, 5)
    tracker.roll([hero, goblin, ogre])
    goblin.take_damage(goblin.max_hp)
    assert tracker.advance() is ogre
    tracker.mark_departed(ogre)
    assert tracker.advance() is hero
    assert tracker.advance() is hero
    assert tracker.order == (hero, goblin, ogre)
    assert not tracker.is_eligible(goblin)
    assert tracker.has_departed(ogre)


def test_advance_returns_none_when_nobody_is_left(tracker, dice, goblin):
    dice.queue(10)
    tracker.roll([goblin])
    goblin.take_damage(goblin.max_hp)
    assert tracker.advance() is None


def test_clear(tracker, dice, hero):
    dice.queue(10)
    tracker.roll([hero])
    tracker.clear()
    assert not tracker.is_active()
    assert tracker.current_combatant() is None
    assert tracker.advance() is None
    assert tracker.round_number == 0
