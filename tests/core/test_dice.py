"""
Tests for the dice service.
"""

import random

import pytest

from skirmish.core.dice import Dice, DiceExpression, get_ability_modifier


@pytest.mark.parametrize(
    "score, modifier",
    [(1, -5), (8, -1), (9, -1), (10, 0), (11, 0), (16, 3), (20, 5)],
)
def test_get_ability_modifier(score, modifier):
    """
    Test the ability score modifier table.
    """
    assert get_ability_modifier(score) == modifier


def test_roll_stays_within_die_faces():
    """
    Test that every roll is between 1 and the number of sides.
    """
    dice = Dice(seed=42)
    for sides in (1, 4, 6, 20):
        for _ in range(200):
            assert 1 <= dice.roll(sides) <= sides


def test_roll_rejects_dice_without_faces():
    """
    Test that a die needs at least one side.
    """
    with pytest.raises(ValueError):
        Dice(seed=1).roll(0)


def test_same_seed_gives_same_sequence():
    """
    Test that two dice with the same seed roll the same faces.
    """
    first = Dice(seed=1234)
    second = Dice(seed=1234)
    assert [first.roll(20) for _ in range(20)] == [second.roll(20) for _ in range(20)]


def test_explicit_rng_takes_precedence_over_seed():
    """
    Test that a provided random generator is used as is.
    """
    a = Dice(seed=1, rng=random.Random(99))
    b = Dice(rng=random.Random(99))
    assert [a.roll(6) for _ in range(10)] == [b.roll(6) for _ in range(10)]


def test_check_against_dc_meets_or_beats(dice):
    """
    Test that a check succeeds when d20 + modifier reaches the DC.
    """
    dice.queue(10, 9)
    assert dice.check_against_dc(2, 12)
    assert not dice.check_against_dc(2, 12)


def test_roll_d20_with_advantage_keeps_highest(dice):
    """
    Test that advantage rolls two d20 and keeps the highest.
    """
    dice.queue(4, 17)
    roll = dice.roll_d20(advantage=True)
    assert roll.natural == 17
    assert roll.faces == [4, 17]
    assert roll.advantage and not roll.disadvantage


def test_roll_d20_with_disadvantage_keeps_lowest(dice):
    """
    Test that disadvantage rolls two d20 and keeps the lowest.
    """
    dice.queue(4, 17)
    roll = dice.roll_d20(disadvantage=True)
    assert roll.natural == 4


def test_roll_d20_advantage_and_disadvantage_cancel(dice):
    """
    Test that advantage and disadvantage together roll a single d20.
    """
    dice.queue(4, 17)
    roll = dice.roll_d20(advantage=True, disadvantage=True)
    assert roll.faces == [4]
    assert not roll.advantage and not roll.disadvantage


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("1d8", DiceExpression(count=1, sides=8)),
        ("2d6+3", DiceExpression(count=2, sides=6, modifier=3)),
        ("1d4 - 1", DiceExpression(count=1, sides=4, modifier=-1)),
        ("d20", DiceExpression(count=1, sides=20)),
        ("5", DiceExpression(modifier=5)),
    ],
)
def test_parse_notation(expression, expected):
    """
    Test parsing of the supported dice notations.
    """
    assert Dice.parse_notation(expression) == expected


@pytest.mark.parametrize("expression", ["", "   ", "abc", "2d", "0d6", "1d0", "101d6"])
def test_parse_notation_rejects_invalid_expressions(expression):
    """
    Test that malformed or out of range expressions raise ValueError.
    """
    with pytest.raises(ValueError):
        Dice.parse_notation(expression)


def test_dice_expression_str():
    """
    Test the notation rendering of a parsed expression.
    """
    assert str(DiceExpression(count=2, sides=6, modifier=3)) == "2d6+3"
    assert str(DiceExpression(count=1, sides=4, modifier=-1)) == "1d4-1"
    assert str(DiceExpression(modifier=7)) == "7"


def test_roll_notation_sums_dice_and_modifier(dice):
    """
    Test that rolling an expression adds the modifier once.
    """
    dice.queue(3, 5)
    breakdown = dice.roll_notation("2d6+3")
    assert breakdown.value == 11
    assert breakdown.rolls == [3, 5]
    assert breakdown.dice_total == 8
    assert breakdown.description == "2d6+3"


def test_roll_notation_critical_doubles_dice_only(dice):
    """
    Test that a critical doubles the number of dice but not the modifier.
    """
    dice.queue(3, 5)
    breakdown = dice.roll_notation("1d6+3", critical=True)
    assert breakdown.rolls == [3, 5]
    assert breakdown.value == 11
    assert breakdown.description == "2d6+3"


def test_history_records_rolls():
    """
    Test that the history keeps (sides, value) pairs and can be cleared.
    """
    dice = Dice(seed=5)
    value = dice.roll(12)
    assert dice.history == [(12, value)]
    assert dice.last_roll == value
    dice.clear_history()
    assert dice.history == []
    assert dice.last_roll is None


def test_history_is_bounded():
    """
    Test that only the most recent rolls are kept.
    """
    dice = Dice(seed=5)
    for _ in range(250):
        dice.roll(6)
    assert len(dice.history) == 100
