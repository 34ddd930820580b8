"""
Dice service for the combat engine.

Every random number used by the engine comes from a Dice instance, so a
seeded instance (or a subclass returning scripted faces) makes a whole
encounter reproducible.
"""

import random
import re
from collections import deque
from typing import Optional

from catchery import log_warning
from pydantic import BaseModel, Field

# Maximum number of individual rolls kept in the roll history.
HISTORY_SIZE = 100

MAX_DICE_COUNT = 100
MAX_DICE_SIDES = 1000


def get_ability_modifier(score: int) -> int:
    """
    Calculates the D&D ability score modifier.

    Args:
        score (int): The ability score.

    Returns:
        int: The modifier, (score - 10) // 2.

    """
    return (score - 10) // 2


class DiceExpression(BaseModel):
    """A parsed dice expression such as 2d6+3."""

    count: int = Field(default=0, description="Number of dice to roll")
    sides: int = Field(default=0, description="Number of sides of each die")
    modifier: int = Field(default=0, description="Flat modifier added once")

    def __str__(self) -> str:
        if self.count == 0:
            return str(self.modifier)
        text = f"{self.count}d{self.sides}"
        if self.modifier > 0:
            text += f"+{self.modifier}"
        elif self.modifier < 0:
            text += str(self.modifier)
        return text


class RollBreakdown(BaseModel):
    """Class to hold roll breakdown information."""

    value: int = Field(description="Total roll result")
    description: str = Field(description="Description of the roll")
    rolls: list[int] = Field(
        default_factory=list,
        description="List of individual dice rolls",
    )
    modifier: int = Field(default=0, description="Flat modifier included in value")

    @property
    def dice_total(self) -> int:
        """Sum of the dice, without the flat modifier."""
        return sum(self.rolls)


class D20Roll(BaseModel):
    """A d20 roll, possibly made with advantage or disadvantage."""

    natural: int = Field(description="The face that was kept")
    faces: list[int] = Field(default_factory=list, description="All faces rolled")
    advantage: bool = False
    disadvantage: bool = False

    def is_natural_20(self) -> bool:
        return self.natural == 20

    def is_natural_1(self) -> bool:
        return self.natural == 1


class Dice:
    """Pseudo-random die-roll source."""

    DICE_PATTERN = re.compile(r"^(\d*)d(\d+)\s*([+-]\s*\d+)?$", re.IGNORECASE)

    def __init__(
        self, seed: Optional[int] = None, rng: Optional[random.Random] = None
    ) -> None:
        """
        Args:
            seed (Optional[int]): Seed for a private random generator.
            rng (Optional[random.Random]): Generator to use instead, takes
                precedence over the seed.

        """
        self._rng = rng if rng is not None else random.Random(seed)
        self._history: deque[tuple[int, int]] = deque(maxlen=HISTORY_SIZE)

    # ============================================================================
    # BASIC ROLLS
    # ============================================================================

    def roll(self, sides: int) -> int:
        """
        Rolls a single die.

        Args:
            sides (int): The number of sides of the die.

        Returns:
            int: A value uniformly distributed in [1, sides].

        Raises:
            ValueError: If sides is lower than 1.

        """
        if sides < 1:
            raise ValueError(f"Die must have at least 1 side, got {sides}")
        value = self._rng.randint(1, sides)
        self._history.append((sides, value))
        return value

    def roll_multiple(self, count: int, sides: int) -> list[int]:
        """Rolls count dice with the given number of sides."""
        if count < 0:
            raise ValueError(f"Cannot roll a negative number of dice: {count}")
        return [self.roll(sides) for _ in range(count)]

    def roll_with_modifier(self, sides: int, modifier: int) -> int:
        """Rolls a single die and adds a modifier."""
        return self.roll(sides) + modifier

    def check_against_dc(self, modifier: int, dc: int) -> bool:
        """
        Makes a d20 check.

        Args:
            modifier (int): The modifier added to the d20.
            dc (int): The difficulty class to meet or beat.

        Returns:
            bool: True if d20 + modifier >= dc.

        """
        return self.roll_with_modifier(20, modifier) >= dc

    def roll_d20(self, advantage: bool = False, disadvantage: bool = False) -> D20Roll:
        """
        Rolls a d20, with advantage or disadvantage when exactly one applies.

        Args:
            advantage (bool): Whether any source grants advantage.
            disadvantage (bool): Whether any source imposes disadvantage.

        Returns:
            D20Roll: The kept face and every face rolled.

        """
        if advantage and disadvantage:
            advantage = disadvantage = False
        if advantage or disadvantage:
            faces = [self.roll(20), self.roll(20)]
            natural = max(faces) if advantage else min(faces)
        else:
            faces = [self.roll(20)]
            natural = faces[0]
        return D20Roll(
            natural=natural,
            faces=faces,
            advantage=advantage,
            disadvantage=disadvantage,
        )

    # ============================================================================
    # DICE NOTATION
    # ============================================================================

    @staticmethod
    def parse_notation(expression: str) -> DiceExpression:
        """
        Parses dice notation: NdS, NdS+M, NdS-M, dS or a plain integer.

        Args:
            expression (str): The dice expression.

        Returns:
            DiceExpression: The parsed expression.

        Raises:
            ValueError: If the expression is empty, malformed or out of limits.

        """
        if not expression or not expression.strip():
            log_warning("Empty dice expression provided", {"expression": expression})
            raise ValueError("Invalid dice expression: empty")

        expr = expression.strip()
        if re.fullmatch(r"[+-]?\d+", expr):
            return DiceExpression(modifier=int(expr))

        match = Dice.DICE_PATTERN.match(expr)
        if not match:
            log_warning("Malformed dice expression", {"expression": expression})
            raise ValueError(f"Invalid dice expression: {expression}")

        count_str, sides_str, modifier_str = match.groups()
        count = int(count_str) if count_str else 1
        sides = int(sides_str)
        modifier = int(modifier_str.replace(" ", "")) if modifier_str else 0

        context = {"expression": expression, "count": count, "sides": sides}
        if count <= 0 or count > MAX_DICE_COUNT:
            log_warning(f"Invalid dice count: {count}", context)
            raise ValueError(f"Invalid dice count: {count}")
        if sides <= 0 or sides > MAX_DICE_SIDES:
            log_warning(f"Invalid dice sides: {sides}", context)
            raise ValueError(f"Invalid dice sides: {sides}")

        return DiceExpression(count=count, sides=sides, modifier=modifier)

    def roll_notation(self, expression: str, critical: bool = False) -> RollBreakdown:
        """
        Rolls a dice expression.

        Args:
            expression (str): The dice expression, e.g. "2d6+3".
            critical (bool): Whether to roll the dice twice as many times.
                The flat modifier is never doubled.

        Returns:
            RollBreakdown: The total, the individual rolls and a description.

        """
        parsed = self.parse_notation(expression)
        count = parsed.count * 2 if critical else parsed.count
        rolls = self.roll_multiple(count, parsed.sides) if count else []
        value = sum(rolls) + parsed.modifier

        description = f"{count}d{parsed.sides}" if count else ""
        if parsed.modifier or not count:
            sign = "+" if parsed.modifier >= 0 and count else ""
            description += f"{sign}{parsed.modifier}"
        return RollBreakdown(
            value=value,
            description=description,
            rolls=rolls,
            modifier=parsed.modifier,
        )

    # ============================================================================
    # HISTORY
    # ============================================================================

    @property
    def history(self) -> list[tuple[int, int]]:
        """The most recent rolls as (sides, value) pairs, oldest first."""
        return list(self._history)

    @property
    def last_roll(self) -> Optional[int]:
        return self._history[-1][1] if self._history else None

    def clear_history(self) -> None:
        self._history.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rolls={len(self._history)})"

