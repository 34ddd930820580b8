"""
Player character module for the combat engine.

The player character owns ability scores, hit points, experience and an
inventory. Class features are reduced to the single hook the combat engine
needs: flat modifiers to attacks, damage and AC, an improved critical
threshold, and the extra action keywords a class makes available.
"""

from typing import Optional

from catchery import log_debug
from pydantic import BaseModel, Field

from skirmish.core.constants import (
    DEFAULT_CRITICAL_THRESHOLD,
    CombatantKind,
    StatType,
)
from skirmish.core.dice import Dice, get_ability_modifier
from skirmish.core.error_handling import (
    ensure_int_in_range,
    ensure_non_negative_int,
    require_non_empty_string,
    require_positive_int,
)
from skirmish.items.inventory import Inventory


class CombatFeature(BaseModel):
    """A class feature, reduced to what matters during combat."""

    name: str = Field(description="The name of the feature.")
    attack_bonus: int = Field(default=0, description="Bonus to every attack roll.")
    ranged_attack_bonus: int = Field(
        default=0, description="Bonus to attack rolls with ranged weapons."
    )
    damage_bonus: int = Field(default=0, description="Bonus to every damage roll.")
    ac_bonus: int = Field(default=0, description="Bonus to Armor Class.")
    critical_threshold: Optional[int] = Field(
        default=None,
        ge=2,
        le=20,
        description="Natural roll needed for a critical hit, None to keep 20.",
    )
    martial_arts: bool = Field(
        default=False,
        description="Unarmed strikes use the higher of STR/DEX and roll dice.",
    )
    actions: list[str] = Field(
        default_factory=list,
        description="Extra action keywords granted by the feature.",
    )


class PlayerCharacter:
    """
    The player-controlled combatant.

    Attributes:
        name (str):
            The character's name.
        level (int):
            The character level, drives the proficiency bonus.
        ability_scores (dict[StatType, int]):
            The six ability scores.
        saving_throw_proficiencies (set[StatType]):
            Abilities whose saving throws add the proficiency bonus.
        experience (int):
            Experience points earned so far.
        features (list[CombatFeature]):
            Class features that modify combat.
        inventory (Inventory):
            Carried and equipped items.

    """

    name: str
    level: int
    ability_scores: dict[StatType, int]
    saving_throw_proficiencies: set[StatType]
    experience: int
    features: list[CombatFeature]
    inventory: Inventory

    def __init__(
        self,
        name: str,
        max_hp: int,
        level: int = 1,
        ability_scores: Optional[dict[StatType, int]] = None,
        saving_throw_proficiencies: Optional[set[StatType]] = None,
        features: Optional[list[CombatFeature]] = None,
        experience: int = 0,
    ) -> None:
        """
        Initialize a player character at full hit points.

        Args:
            name (str): The character's name.
            max_hp (int): Maximum hit points, must be positive.
            level (int): The character level, between 1 and 20.
            ability_scores (Optional[dict[StatType, int]]): Ability scores,
                missing abilities default to 10.
            saving_throw_proficiencies (Optional[set[StatType]]): Proficient
                saving throws.
            features (Optional[list[CombatFeature]]): Combat features.
            experience (int): Starting experience points.

        Raises:
            ValueError: If the name is empty or max_hp is not positive.

        """
        ctx = {"character": name}
        self.name = require_non_empty_string(name, "name", ctx)
        self._max_hp = require_positive_int(max_hp, "max_hp", ctx)
        self._current_hp = self._max_hp
        self._temporary_hp = 0
        self.level = ensure_int_in_range(level, "level", 1, 20, ctx)
        self.ability_scores = {stat: 10 for stat in StatType}
        self.ability_scores.update(ability_scores or {})
        self.saving_throw_proficiencies = set(saving_throw_proficiencies or ())
        self.features = list(features or [])
        self.experience = ensure_non_negative_int(experience, "experience", 0, ctx)
        self.inventory = Inventory(owner_name=name)

    # ============================================================================
    # COMBATANT CAPABILITY
    # ============================================================================

    @property
    def kind(self) -> CombatantKind:
        return CombatantKind.PLAYER

    @property
    def current_hp(self) -> int:
        return self._current_hp

    @property
    def max_hp(self) -> int:
        return self._max_hp

    @property
    def temporary_hp(self) -> int:
        return self._temporary_hp

    @property
    def armor_class(self) -> int:
        """
        Armor Class from armor (or 10 + DEX unarmored), shield and features.

        Returns:
            int: The current Armor Class.

        """
        dex = self.get_ability_modifier(StatType.DEXTERITY)
        armor = self.inventory.get_equipped_armor()
        ac = armor.calculate_ac(dex) if armor else 10 + dex
        shield = self.inventory.get_equipped_shield()
        if shield:
            ac += shield.calculate_ac(dex)
        ac += sum(feature.ac_bonus for feature in self.features)
        return ac

    @property
    def initiative_modifier(self) -> int:
        return self.get_ability_modifier(StatType.DEXTERITY)

    def is_alive(self) -> bool:
        return self._current_hp > 0

    def is_unconscious(self) -> bool:
        return self._current_hp <= 0

    def is_bloodied(self) -> bool:
        return self._current_hp <= self._max_hp // 2

    def take_damage(self, amount: int) -> int:
        """
        Applies damage, consuming temporary hit points first.

        Args:
            amount (int): The incoming damage.

        Returns:
            int: The hit points actually lost, temporary ones excluded.

        """
        amount = ensure_non_negative_int(amount, "damage", 0, {"character": self.name})
        absorbed = min(self._temporary_hp, amount)
        self._temporary_hp -= absorbed
        remaining = amount - absorbed
        lost = min(remaining, self._current_hp)
        self._current_hp -= lost
        return lost

    def heal(self, amount: int) -> int:
        amount = ensure_non_negative_int(amount, "healing", 0, {"character": self.name})
        healed = min(amount, self._max_hp - self._current_hp)
        self._current_hp += healed
        return healed

    def set_temporary_hit_points(self, amount: int) -> None:
        """Temporary hit points do not stack: the larger value is kept."""
        self._temporary_hp = max(self._temporary_hp, max(0, amount))

    def get_saving_throw_modifier(self, ability: StatType) -> int:
        modifier = self.get_ability_modifier(ability)
        if ability in self.saving_throw_proficiencies:
            modifier += self.proficiency_bonus
        return modifier

    # ============================================================================
    # ABILITIES AND FEATURES
    # ============================================================================

    def get_ability_modifier(self, ability: StatType) -> int:
        return get_ability_modifier(self.ability_scores.get(ability, 10))

    @property
    def proficiency_bonus(self) -> int:
        return 2 + (self.level - 1) // 4

    @property
    def critical_threshold(self) -> int:
        """The lowest natural roll that scores a critical hit."""
        thresholds = [
            feature.critical_threshold
            for feature in self.features
            if feature.critical_threshold is not None
        ]
        return min([DEFAULT_CRITICAL_THRESHOLD, *thresholds])

    @property
    def has_improved_critical(self) -> bool:
        return self.critical_threshold < DEFAULT_CRITICAL_THRESHOLD

    @property
    def has_martial_arts(self) -> bool:
        return any(feature.martial_arts for feature in self.features)

    def get_attack_bonus(self, ranged: bool = False) -> int:
        """Flat attack bonus granted by features."""
        bonus = sum(feature.attack_bonus for feature in self.features)
        if ranged:
            bonus += sum(feature.ranged_attack_bonus for feature in self.features)
        return bonus

    def get_damage_bonus(self) -> int:
        return sum(feature.damage_bonus for feature in self.features)

    def get_feature_actions(self) -> list[str]:
        """Extra action keywords, in feature order, without duplicates."""
        actions: list[str] = []
        for feature in self.features:
            for action in feature.actions:
                if action not in actions:
                    actions.append(action)
        return actions

    def add_feature(self, feature: CombatFeature) -> None:
        self.features.append(feature)

    # ============================================================================
    # PROGRESSION
    # ============================================================================

    def add_experience(self, amount: int) -> None:
        """
        Adds experience points.

        Args:
            amount (int): The experience to add, negative values are ignored.

        """
        amount = ensure_non_negative_int(amount, "experience", 0, {"character": self.name})
        self.experience += amount
        log_debug(
            f"{self.name} gains {amount} XP",
            {"character": self.name, "total": self.experience},
        )

    def roll_ability_check(self, dice: Dice, ability: StatType, dc: int) -> bool:
        """Makes an ability check against a difficulty class."""
        return dice.check_against_dc(self.get_ability_modifier(ability), dc)

    def __repr__(self) -> str:
        return (
            f"PlayerCharacter(name={self.name!r}, hp={self._current_hp}/{self._max_hp})"
        )

    def __str__(self) -> str:
        return self.name
