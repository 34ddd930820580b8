"""
Combat results.

Every public operation of the combat system returns a CombatResult. Results
are immutable and carry everything a presentation layer needs to describe
what happened: a type, a message, and the numbers behind it.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import NiceEnum


class CombatResultType(NiceEnum):
    """The kinds of outcome a combat step can have."""

    COMBAT_START = "COMBAT_START"
    TURN_START = "TURN_START"
    ATTACK_HIT = "ATTACK_HIT"
    ATTACK_MISS = "ATTACK_MISS"
    SPECIAL_ABILITY = "SPECIAL_ABILITY"
    ENEMY_DEFEATED = "ENEMY_DEFEATED"
    PLAYER_DEFEATED = "PLAYER_DEFEATED"
    VICTORY = "VICTORY"
    FLED = "FLED"
    INFO = "INFO"
    ERROR = "ERROR"

    @property
    def is_terminal(self) -> bool:
        """Whether a result of this type ends the encounter."""
        return self in (
            CombatResultType.VICTORY,
            CombatResultType.PLAYER_DEFEATED,
            CombatResultType.FLED,
        )


def _status_suffix(defender: Any) -> str:
    if not defender.is_alive():
        return " (defeated)"
    if defender.is_bloodied():
        return " (bloodied)"
    return ""


def _join(*parts: Optional[str]) -> str:
    return " ".join(part for part in parts if part)


class CombatResult(BaseModel):
    """Immutable outcome of one combat step."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: CombatResultType = Field(description="What kind of outcome this is.")
    message: str = Field(default="", description="Human readable description.")
    attacker: Any = Field(default=None, description="The acting combatant.")
    defender: Any = Field(default=None, description="The targeted combatant.")
    attack_roll: Optional[int] = Field(default=None, description="Attack roll total.")
    target_ac: Optional[int] = Field(default=None, description="Defender's AC.")
    damage_roll: Optional[int] = Field(default=None, description="Damage dealt.")
    xp_gained: Optional[int] = Field(default=None, description="Experience awarded.")
    turn_order: Optional[tuple[Any, ...]] = Field(
        default=None,
        description="Initiative order, only set when combat starts.",
    )
    initiative_rolls: Optional[tuple[tuple[str, int], ...]] = Field(
        default=None,
        description="(name, roll) pairs in initiative order, only set when combat starts.",
    )

    # ============================================================================
    # FACTORIES
    # ============================================================================

    @classmethod
    def combat_start(
        cls, turn_order: list[Any], initiative_rolls: list[tuple[str, int]]
    ) -> "CombatResult":
        lines = ["Combat begins!", "", "Initiative Rolls:"]
        lines.extend(f"  {name}: {roll}" for name, roll in initiative_rolls)
        return cls(
            type=CombatResultType.COMBAT_START,
            message="\n".join(lines),
            turn_order=tuple(turn_order),
            initiative_rolls=tuple(initiative_rolls),
        )

    @classmethod
    def turn_start(cls, combatant: Any, details: str = "") -> "CombatResult":
        return cls(
            type=CombatResultType.TURN_START,
            message=_join(f"{combatant.name}'s turn!", details),
            attacker=combatant,
        )

    @classmethod
    def attack_hit(
        cls,
        attacker: Any,
        defender: Any,
        attack_roll: int,
        target_ac: int,
        damage: int,
        annotation: str = "",
    ) -> "CombatResult":
        """
        Creates the result of a hit.

        Args:
            attacker (Any): The attacking combatant.
            defender (Any): The combatant that was hit.
            attack_roll (int): The attack roll total.
            target_ac (int): The defender's Armor Class.
            damage (int): The damage dealt.
            annotation (str): Extra text such as critical hit or special
                ability notes.

        Returns:
            CombatResult: An ATTACK_HIT result.

        """
        message = (
            f"{attacker.name} attacks {defender.name}! "
            f"[Roll: {attack_roll} vs AC {target_ac}] HIT! [Damage: {damage}]"
            f"{_status_suffix(defender)}"
        )
        return cls(
            type=CombatResultType.ATTACK_HIT,
            message=_join(message, annotation),
            attacker=attacker,
            defender=defender,
            attack_roll=attack_roll,
            target_ac=target_ac,
            damage_roll=damage,
        )

    @classmethod
    def attack_miss(
        cls,
        attacker: Any,
        defender: Any,
        attack_roll: int,
        target_ac: int,
        annotation: str = "",
    ) -> "CombatResult":
        message = (
            f"{attacker.name} attacks {defender.name}! "
            f"[Roll: {attack_roll} vs AC {target_ac}] MISS!"
        )
        return cls(
            type=CombatResultType.ATTACK_MISS,
            message=_join(message, annotation),
            attacker=attacker,
            defender=defender,
            attack_roll=attack_roll,
            target_ac=target_ac,
        )

    @classmethod
    def opportunity_attack(
        cls,
        attacker: Any,
        defender: Any,
        attack_roll: int,
        target_ac: int,
        damage: int,
        annotation: str = "",
    ) -> "CombatResult":
        message = (
            f"Opportunity Attack! {attacker.name} strikes {defender.name}! "
            f"[Roll: {attack_roll} vs AC {target_ac}] HIT! [Damage: {damage}]"
        )
        return cls(
            type=CombatResultType.ATTACK_HIT,
            message=_join(message, annotation),
            attacker=attacker,
            defender=defender,
            attack_roll=attack_roll,
            target_ac=target_ac,
            damage_roll=damage,
        )

    @classmethod
    def opportunity_attack_miss(
        cls, attacker: Any, defender: Any, attack_roll: int, target_ac: int
    ) -> "CombatResult":
        return cls(
            type=CombatResultType.ATTACK_MISS,
            message=(
                f"Opportunity Attack! {attacker.name} strikes at {defender.name}! "
                f"[Roll: {attack_roll} vs AC {target_ac}] MISS!"
            ),
            attacker=attacker,
            defender=defender,
            attack_roll=attack_roll,
            target_ac=target_ac,
        )

    @classmethod
    def special_ability(
        cls, hit: "CombatResult", ability_name: str, description: str
    ) -> "CombatResult":
        """
        Creates the result of a hit that triggered a special ability.

        Args:
            hit (CombatResult): The hit that triggered the ability.
            ability_name (str): The name of the ability.
            description (str): What the ability did.

        Returns:
            CombatResult: A SPECIAL_ABILITY result keeping the hit's numbers.

        """
        user, target = hit.attacker, hit.defender
        return cls(
            type=CombatResultType.SPECIAL_ABILITY,
            message=(
                f"{hit.message}\n"
                f"{user.name} uses {ability_name} on {target.name}! {description}"
            ),
            attacker=user,
            defender=target,
            attack_roll=hit.attack_roll,
            target_ac=hit.target_ac,
            damage_roll=hit.damage_roll,
        )

    @classmethod
    def enemy_defeated(
        cls, enemy: Any, attack: Optional["CombatResult"] = None
    ) -> "CombatResult":
        """
        Creates the result of an enemy falling, keeping the numbers of the
        killing blow when given.
        """
        message = f"{enemy.name} has been defeated!"
        if attack is None:
            return cls(type=CombatResultType.ENEMY_DEFEATED, message=message, defender=enemy)
        return cls(
            type=CombatResultType.ENEMY_DEFEATED,
            message=f"{attack.message}\n{message}",
            attacker=attack.attacker,
            defender=enemy,
            attack_roll=attack.attack_roll,
            target_ac=attack.target_ac,
            damage_roll=attack.damage_roll,
        )

    @classmethod
    def player_defeated(cls, player: Any, details: str = "") -> "CombatResult":
        message = f"{player.name} has fallen..."
        return cls(
            type=CombatResultType.PLAYER_DEFEATED,
            message=f"{details}\n{message}" if details else message,
            defender=player,
        )

    @classmethod
    def victory(
        cls, xp_gained: int, details: str = "", last_blow: Optional["CombatResult"] = None
    ) -> "CombatResult":
        message = f"Victory! You gained {xp_gained} XP."
        fields: dict[str, Any] = {}
        if last_blow is not None:
            fields = {
                "attacker": last_blow.attacker,
                "defender": last_blow.defender,
                "attack_roll": last_blow.attack_roll,
                "target_ac": last_blow.target_ac,
                "damage_roll": last_blow.damage_roll,
            }
        return cls(
            type=CombatResultType.VICTORY,
            message=f"{details}\n{message}" if details else message,
            xp_gained=xp_gained,
            **fields,
        )

    @classmethod
    def fled(cls, details: str = "") -> "CombatResult":
        message = "You fled from combat!"
        return cls(
            type=CombatResultType.FLED,
            message=f"{details}\n{message}" if details else message,
        )

    @classmethod
    def info(cls, message: str, actor: Any = None) -> "CombatResult":
        return cls(type=CombatResultType.INFO, message=message, attacker=actor)

    @classmethod
    def error(cls, message: str) -> "CombatResult":
        return cls(type=CombatResultType.ERROR, message=message)

    # ============================================================================
    # PREDICATES
    # ============================================================================

    def is_success(self) -> bool:
        return self.type != CombatResultType.ERROR

    def is_error(self) -> bool:
        return self.type == CombatResultType.ERROR

    def ends_combat(self) -> bool:
        return self.type.is_terminal

    def __str__(self) -> str:
        return self.message
