"""
Attack resolution.

Computes attack rolls, critical hits and damage for both player characters
and monsters, and applies the damage to the defender. Advantage and
disadvantage come from the status effect manager.
"""

from typing import Any, Optional

from catchery import log_debug
from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import (
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_PLAYER_WEAPON,
    MARTIAL_ARTS_DAMAGE,
    UNARMED_STRIKE_DAMAGE,
    StatType,
)
from skirmish.core.dice import Dice
from skirmish.effects.status_manager import StatusEffectManager
from skirmish.entities.character import PlayerCharacter
from skirmish.entities.combatant import Combatant
from skirmish.entities.monster import Monster
from skirmish.items.item import Weapon

from .combat_result import CombatResult


class AttackOutcome(BaseModel):
    """Everything that happened during a single attack."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    attacker: Any = Field(description="The attacking combatant.")
    defender: Any = Field(description="The defending combatant.")
    hit: bool = Field(description="Whether the attack hit.")
    critical: bool = Field(default=False, description="Whether it was a critical hit.")
    natural_roll: int = Field(description="The d20 face that was kept.")
    attack_roll: int = Field(description="The attack roll total.")
    target_ac: int = Field(description="The defender's Armor Class.")
    damage: int = Field(default=0, description="Damage dealt, 0 on a miss.")
    opportunity: bool = Field(default=False, description="Opportunity attack flag.")
    annotations: list[str] = Field(default_factory=list)

    @property
    def annotation(self) -> str:
        return " ".join(self.annotations)

    def to_result(self) -> CombatResult:
        """Turns the outcome into the matching hit or miss result."""
        if self.opportunity:
            if self.hit:
                return CombatResult.opportunity_attack(
                    self.attacker,
                    self.defender,
                    self.attack_roll,
                    self.target_ac,
                    self.damage,
                    self.annotation,
                )
            return CombatResult.opportunity_attack_miss(
                self.attacker, self.defender, self.attack_roll, self.target_ac
            )
        if self.hit:
            return CombatResult.attack_hit(
                self.attacker,
                self.defender,
                self.attack_roll,
                self.target_ac,
                self.damage,
                self.annotation,
            )
        return CombatResult.attack_miss(
            self.attacker,
            self.defender,
            self.attack_roll,
            self.target_ac,
            self.annotation,
        )


def find_target(enemies: list[Combatant], name: Optional[str]) -> Optional[Combatant]:
    """
    Finds the living enemy a player means.

    Args:
        enemies (list[Combatant]): The candidate enemies.
        name (Optional[str]): A full or partial name, matched ignoring case.
            When empty, the first living enemy is chosen.

    Returns:
        Optional[Combatant]: The enemy, or None if nobody matches.

    """
    living = [enemy for enemy in enemies if enemy.is_alive()]
    if not name or not name.strip():
        return living[0] if living else None
    needle = name.strip().lower()
    for enemy in living:
        if enemy.name.lower() == needle:
            return enemy
    for enemy in living:
        if needle in enemy.name.lower():
            return enemy
    return None


class AttackResolver:
    """Resolves attacks between combatants."""

    def __init__(self, dice: Dice, status_effects: StatusEffectManager) -> None:
        self._dice = dice
        self._status = status_effects

    def resolve(
        self, attacker: Combatant, defender: Combatant, opportunity: bool = False
    ) -> AttackOutcome:
        """
        Resolves an attack with the rules matching the attacker.

        Raises:
            TypeError: If the attacker is neither a player character nor a
                monster.

        """
        if isinstance(attacker, PlayerCharacter):
            return self.resolve_player_attack(attacker, defender, opportunity)
        if isinstance(attacker, Monster):
            return self.resolve_monster_attack(attacker, defender, opportunity)
        raise TypeError(f"Cannot resolve attacks for {type(attacker).__name__}")

    def roll_modes(self, attacker: Combatant, defender: Combatant) -> tuple[bool, bool]:
        """
        Works out advantage and disadvantage for an attack.

        Returns:
            tuple[bool, bool]: (advantage, disadvantage). Both can be True,
            in which case they cancel out when rolling.

        """
        advantage = self._status.has_advantage_on_attacks(
            attacker
        ) or self._status.attacks_have_advantage_against(defender)
        disadvantage = self._status.has_disadvantage_on_attacks(attacker)
        return advantage, disadvantage

    # ============================================================================
    # PLAYER ATTACKS
    # ============================================================================

    @staticmethod
    def select_ability(player: PlayerCharacter, weapon: Optional[Weapon]) -> StatType:
        """
        Picks the ability that drives an attack.

        Args:
            player (PlayerCharacter): The attacker.
            weapon (Optional[Weapon]): The equipped weapon, None for unarmed.

        Returns:
            StatType: DEXTERITY for ranged weapons, the higher of STRENGTH and
            DEXTERITY for finesse weapons and martial arts, STRENGTH otherwise.

        """
        if weapon is not None and weapon.is_ranged:
            return StatType.DEXTERITY
        if (weapon is not None and weapon.is_finesse) or (
            weapon is None and player.has_martial_arts
        ):
            strength = player.get_ability_modifier(StatType.STRENGTH)
            dexterity = player.get_ability_modifier(StatType.DEXTERITY)
            return StatType.DEXTERITY if dexterity > strength else StatType.STRENGTH
        return StatType.STRENGTH

    def resolve_player_attack(
        self, player: PlayerCharacter, defender: Combatant, opportunity: bool = False
    ) -> AttackOutcome:
        """
        Resolves an attack made by the player character.

        Args:
            player (PlayerCharacter): The attacker.
            defender (Combatant): The target.
            opportunity (bool): Whether this is an opportunity attack.

        Returns:
            AttackOutcome: The outcome, damage already applied.

        """
        weapon = player.inventory.get_equipped_weapon()
        ranged = weapon is not None and weapon.is_ranged
        ability_mod = player.get_ability_modifier(self.select_ability(player, weapon))
        attack_mod = ability_mod + player.proficiency_bonus + player.get_attack_bonus(ranged)
        if weapon is not None:
            attack_mod += weapon.attack_bonus

        advantage, disadvantage = self.roll_modes(player, defender)
        d20 = self._dice.roll_d20(advantage=advantage, disadvantage=disadvantage)
        attack_roll = d20.natural + attack_mod
        target_ac = defender.armor_class

        annotations: list[str] = []
        threshold = player.critical_threshold
        critical = d20.natural >= threshold
        hit = critical or attack_roll >= target_ac
        if critical:
            if d20.natural < DEFAULT_CRITICAL_THRESHOLD:
                annotations.append("[IMPROVED CRITICAL!]")
            else:
                annotations.append("[CRITICAL HIT!]")
        elif hit and not ranged and self._status.melee_crits_on_hit(defender):
            critical = True
            annotations.append("[AUTO-CRIT!]")

        damage = 0
        if hit:
            damage = self._roll_player_damage(player, weapon, ability_mod, critical)
            defender.take_damage(damage)

        log_debug(
            f"{player.name} attacks {defender.name}",
            {
                "natural": d20.natural,
                "attack_roll": attack_roll,
                "target_ac": target_ac,
                "hit": hit,
                "critical": critical,
                "damage": damage,
            },
        )
        return AttackOutcome(
            attacker=player,
            defender=defender,
            hit=hit,
            critical=critical,
            natural_roll=d20.natural,
            attack_roll=attack_roll,
            target_ac=target_ac,
            damage=damage,
            opportunity=opportunity,
            annotations=annotations,
        )

    def _roll_player_damage(
        self,
        player: PlayerCharacter,
        weapon: Optional[Weapon],
        ability_mod: int,
        critical: bool,
    ) -> int:
        flat = ability_mod + player.get_damage_bonus()
        if weapon is not None:
            roll = self._dice.roll_notation(
                weapon.damage_dice or DEFAULT_PLAYER_WEAPON, critical=critical
            )
            total = roll.value + flat + weapon.damage_bonus
        elif player.has_martial_arts:
            total = self._dice.roll_notation(MARTIAL_ARTS_DAMAGE, critical=critical).value + flat
        else:
            strikes = 2 if critical else 1
            total = UNARMED_STRIKE_DAMAGE * strikes + flat
        return max(1, total)

    # ============================================================================
    # MONSTER ATTACKS
    # ============================================================================

    def resolve_monster_attack(
        self, monster: Monster, defender: Combatant, opportunity: bool = False
    ) -> AttackOutcome:
        """
        Resolves a melee attack made by a monster.

        Args:
            monster (Monster): The attacker.
            defender (Combatant): The target.
            opportunity (bool): Whether this is an opportunity attack.

        Returns:
            AttackOutcome: The outcome, damage already applied.

        """
        advantage, disadvantage = self.roll_modes(monster, defender)
        d20, attack_roll = monster.roll_attack(self._dice, advantage, disadvantage)
        target_ac = defender.armor_class

        annotations: list[str] = []
        critical = d20.natural >= DEFAULT_CRITICAL_THRESHOLD
        hit = critical or attack_roll >= target_ac
        if critical:
            annotations.append("[CRITICAL HIT!]")
        elif hit and self._status.melee_crits_on_hit(defender):
            critical = True
            annotations.append("[AUTO-CRIT!]")

        damage = 0
        if hit:
            damage = max(1, monster.roll_damage(self._dice, critical=critical).value)
            defender.take_damage(damage)

        log_debug(
            f"{monster.name} attacks {defender.name}",
            {
                "natural": d20.natural,
                "attack_roll": attack_roll,
                "target_ac": target_ac,
                "hit": hit,
                "critical": critical,
                "damage": damage,
            },
        )
        return AttackOutcome(
            attacker=monster,
            defender=defender,
            hit=hit,
            critical=critical,
            natural_roll=d20.natural,
            attack_roll=attack_roll,
            target_ac=target_ac,
            damage=damage,
            opportunity=opportunity,
            annotations=annotations,
        )
