"""
Conditions and their mechanical rules.

Every condition maps to a fixed set of rule flags in CONDITION_RULES. The
status effect manager answers its queries by looking the flags up, so the
rules of a condition live in exactly one place.
"""

from pydantic import BaseModel, ConfigDict

from skirmish.core.constants import NiceEnum


class Condition(NiceEnum):
    """The fourteen conditions a combatant can suffer."""

    BLINDED = "BLINDED"
    CHARMED = "CHARMED"
    DEAFENED = "DEAFENED"
    FRIGHTENED = "FRIGHTENED"
    GRAPPLED = "GRAPPLED"
    INCAPACITATED = "INCAPACITATED"
    INVISIBLE = "INVISIBLE"
    PARALYZED = "PARALYZED"
    PETRIFIED = "PETRIFIED"
    POISONED = "POISONED"
    PRONE = "PRONE"
    RESTRAINED = "RESTRAINED"
    STUNNED = "STUNNED"
    UNCONSCIOUS = "UNCONSCIOUS"

    @property
    def rule(self) -> "ConditionRule":
        return CONDITION_RULES[self]

    @property
    def description(self) -> str:
        return CONDITION_RULES[self].description

    @property
    def emoji(self) -> str:
        return {
            Condition.BLINDED: "🙈",
            Condition.CHARMED: "💕",
            Condition.DEAFENED: "🙉",
            Condition.FRIGHTENED: "😱",
            Condition.GRAPPLED: "🤼",
            Condition.INCAPACITATED: "💫",
            Condition.INVISIBLE: "👻",
            Condition.PARALYZED: "🧊",
            Condition.PETRIFIED: "🗿",
            Condition.POISONED: "🤢",
            Condition.PRONE: "🛌",
            Condition.RESTRAINED: "⛓",
            Condition.STUNNED: "😵",
            Condition.UNCONSCIOUS: "💤",
        }.get(self, "❔")


class ConditionRule(BaseModel):
    """Mechanical facts of a condition."""

    model_config = ConfigDict(frozen=True)

    description: str
    # Attack rolls against the bearer have advantage.
    grants_advantage_to_attackers: bool = False
    # The bearer's attack rolls have disadvantage.
    causes_attack_disadvantage: bool = False
    # The bearer's attack rolls have advantage.
    grants_attack_advantage: bool = False
    prevents_movement: bool = False
    prevents_actions: bool = False
    auto_fails_str_dex_saves: bool = False
    # Melee hits against the bearer are critical hits.
    melee_crits_on_hit: bool = False


CONDITION_RULES: dict[Condition, ConditionRule] = {
    Condition.BLINDED: ConditionRule(
        description="Can't see. Attacks against it have advantage, its attacks have disadvantage.",
        grants_advantage_to_attackers=True,
        causes_attack_disadvantage=True,
    ),
    Condition.CHARMED: ConditionRule(
        description="Can't attack the charmer.",
    ),
    Condition.DEAFENED: ConditionRule(
        description="Can't hear.",
    ),
    Condition.FRIGHTENED: ConditionRule(
        description="Disadvantage on attacks while the source of fear is in sight.",
        causes_attack_disadvantage=True,
    ),
    Condition.GRAPPLED: ConditionRule(
        description="Speed becomes 0.",
        prevents_movement=True,
    ),
    Condition.INCAPACITATED: ConditionRule(
        description="Can't take actions or reactions.",
        prevents_actions=True,
    ),
    Condition.INVISIBLE: ConditionRule(
        description="Can't be seen. Its attacks have advantage.",
        grants_attack_advantage=True,
    ),
    Condition.PARALYZED: ConditionRule(
        description="Incapacitated and can't move. Melee hits against it are critical.",
        grants_advantage_to_attackers=True,
        prevents_movement=True,
        prevents_actions=True,
        auto_fails_str_dex_saves=True,
        melee_crits_on_hit=True,
    ),
    Condition.PETRIFIED: ConditionRule(
        description="Turned to stone. Incapacitated and can't move.",
        grants_advantage_to_attackers=True,
        prevents_movement=True,
        prevents_actions=True,
        auto_fails_str_dex_saves=True,
    ),
    Condition.POISONED: ConditionRule(
        description="Disadvantage on attack rolls and ability checks.",
        causes_attack_disadvantage=True,
    ),
    Condition.PRONE: ConditionRule(
        description="Lying down. Attacks against it have advantage, its attacks have disadvantage.",
        grants_advantage_to_attackers=True,
        causes_attack_disadvantage=True,
    ),
    Condition.RESTRAINED: ConditionRule(
        description="Speed 0. Attacks against it have advantage, its attacks have disadvantage.",
        grants_advantage_to_attackers=True,
        causes_attack_disadvantage=True,
        prevents_movement=True,
    ),
    Condition.STUNNED: ConditionRule(
        description="Incapacitated, can't move. Fails STR and DEX saves.",
        grants_advantage_to_attackers=True,
        prevents_movement=True,
        prevents_actions=True,
        auto_fails_str_dex_saves=True,
    ),
    Condition.UNCONSCIOUS: ConditionRule(
        description="Incapacitated and unaware. Melee hits against it are critical.",
        grants_advantage_to_attackers=True,
        prevents_movement=True,
        prevents_actions=True,
        auto_fails_str_dex_saves=True,
        melee_crits_on_hit=True,
    ),
}
