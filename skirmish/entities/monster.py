"""
Monster module for the combat engine.

Monsters are built once as templates and copied into each encounter. A copy
keeps the template's behavior and special ability but gets its own instance
identifier and a full set of hit points.
"""

import uuid
from typing import Optional

from skirmish.core.constants import CombatantKind, NiceEnum, StatType
from skirmish.core.dice import D20Roll, Dice, RollBreakdown
from skirmish.core.error_handling import (
    ensure_non_negative_int,
    require_enum_type,
    require_non_empty_string,
    require_positive_int,
)


class MonsterBehavior(NiceEnum):
    """How a monster chooses its actions and targets."""

    AGGRESSIVE = "AGGRESSIVE"
    COWARDLY = "COWARDLY"
    TACTICAL = "TACTICAL"
    DEFENSIVE = "DEFENSIVE"

    @property
    def description(self) -> str:
        return {
            MonsterBehavior.AGGRESSIVE: "Always attacks, closest target first.",
            MonsterBehavior.COWARDLY: "Flees when bloodied.",
            MonsterBehavior.TACTICAL: "Focuses the weakest target.",
            MonsterBehavior.DEFENSIVE: "Fights back, flees when nearly dead.",
        }.get(self, "")


def _new_instance_id() -> str:
    return uuid.uuid4().hex[:8]


class Monster:
    """
    A hostile combatant.

    Attributes:
        monster_id (str):
            Identifier of the template this monster comes from.
        instance_id (str):
            Identifier unique to this copy.
        name (str):
            Display name.
        attack_bonus (int):
            Bonus added to the monster's attack rolls.
        damage_dice (str):
            Damage dice rolled on a hit, e.g. "1d6+2".
        experience_value (int):
            Experience awarded for defeating the monster.
        behavior (MonsterBehavior):
            How the monster picks actions and targets.
        special_ability (Optional[str]):
            Name of the ability triggered on a hit, if any.
        ability_modifiers (dict[StatType, int]):
            Modifiers used for saving throws and ability checks.

    """

    monster_id: str
    instance_id: str
    name: str
    attack_bonus: int
    damage_dice: str
    experience_value: int
    behavior: MonsterBehavior
    special_ability: Optional[str]
    ability_modifiers: dict[StatType, int]

    def __init__(
        self,
        monster_id: str,
        name: str,
        armor_class: int,
        max_hp: int,
        attack_bonus: int = 0,
        damage_dice: str = "1d6",
        experience_value: int = 0,
        behavior: MonsterBehavior = MonsterBehavior.AGGRESSIVE,
        special_ability: Optional[str] = None,
        ability_modifiers: Optional[dict[StatType, int]] = None,
    ) -> None:
        """
        Raises:
            ValueError: If an identifier or the name is empty, max_hp is not
                positive, damage_dice is not valid dice notation, or behavior
                is not a MonsterBehavior.

        """
        ctx = {"monster": name, "monster_id": monster_id}
        self.monster_id = require_non_empty_string(monster_id, "monster_id", ctx)
        self.name = require_non_empty_string(name, "name", ctx)
        self._armor_class = ensure_non_negative_int(armor_class, "armor_class", 10, ctx)
        self._max_hp = require_positive_int(max_hp, "max_hp", ctx)
        self._current_hp = self._max_hp
        self.attack_bonus = attack_bonus
        Dice.parse_notation(damage_dice)
        self.damage_dice = damage_dice
        self.experience_value = ensure_non_negative_int(
            experience_value, "experience_value", 0, ctx
        )
        self.behavior = require_enum_type(behavior, MonsterBehavior, "behavior", ctx)
        self.special_ability = special_ability or None
        self.ability_modifiers = {stat: 0 for stat in StatType}
        self.ability_modifiers.update(ability_modifiers or {})
        self.instance_id = _new_instance_id()

    # ============================================================================
    # COMBATANT CAPABILITY
    # ============================================================================

    @property
    def kind(self) -> CombatantKind:
        return CombatantKind.ENEMY

    @property
    def current_hp(self) -> int:
        return self._current_hp

    @property
    def max_hp(self) -> int:
        return self._max_hp

    @property
    def armor_class(self) -> int:
        return self._armor_class

    @property
    def initiative_modifier(self) -> int:
        return self.ability_modifiers[StatType.DEXTERITY]

    def is_alive(self) -> bool:
        return self._current_hp > 0

    def is_unconscious(self) -> bool:
        return self._current_hp <= 0

    def is_bloodied(self) -> bool:
        return self._current_hp <= self._max_hp // 2

    def take_damage(self, amount: int) -> int:
        amount = ensure_non_negative_int(amount, "damage", 0, {"monster": self.name})
        lost = min(amount, self._current_hp)
        self._current_hp -= lost
        return lost

    def heal(self, amount: int) -> int:
        amount = ensure_non_negative_int(amount, "healing", 0, {"monster": self.name})
        healed = min(amount, self._max_hp - self._current_hp)
        self._current_hp += healed
        return healed

    def get_saving_throw_modifier(self, ability: StatType) -> int:
        return self.ability_modifiers.get(ability, 0)

    # ============================================================================
    # MONSTER SPECIFIC
    # ============================================================================

    def reset_hit_points(self) -> None:
        self._current_hp = self._max_hp

    def has_special_ability(self) -> bool:
        return bool(self.special_ability)

    def roll_attack(
        self, dice: Dice, advantage: bool = False, disadvantage: bool = False
    ) -> tuple[D20Roll, int]:
        """
        Rolls an attack.

        Args:
            dice (Dice): The dice service.
            advantage (bool): Whether the attack has advantage.
            disadvantage (bool): Whether the attack has disadvantage.

        Returns:
            tuple[D20Roll, int]: The d20 roll and the attack total.

        """
        d20 = dice.roll_d20(advantage=advantage, disadvantage=disadvantage)
        return d20, d20.natural + self.attack_bonus

    def roll_damage(self, dice: Dice, critical: bool = False) -> RollBreakdown:
        """Rolls the damage dice, doubling the dice on a critical hit."""
        return dice.roll_notation(self.damage_dice, critical=critical)

    def copy(self) -> "Monster":
        """
        Creates a fresh instance of this monster for a new encounter.

        Returns:
            Monster: A copy at full HP, with the same behavior and special
            ability and a new instance identifier.

        """
        return Monster(
            monster_id=self.monster_id,
            name=self.name,
            armor_class=self._armor_class,
            max_hp=self._max_hp,
            attack_bonus=self.attack_bonus,
            damage_dice=self.damage_dice,
            experience_value=self.experience_value,
            behavior=self.behavior,
            special_ability=self.special_ability,
            ability_modifiers=dict(self.ability_modifiers),
        )

    def __repr__(self) -> str:
        return (
            f"Monster(name={self.name!r}, id={self.instance_id}, "
            f"hp={self._current_hp}/{self._max_hp})"
        )

    def __str__(self) -> str:
        return self.name
