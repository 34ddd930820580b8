"""
Constants and enumerations for the combat engine.

Defines the rule constants used by the engine (difficulty classes, critical
thresholds, special-ability saves) and the enumerations for ability scores
and combatant kinds.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class CombatantKind(NiceEnum):
    """Defines which side of the encounter a combatant fights for."""

    PLAYER = "PLAYER"
    ENEMY = "ENEMY"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this combatant kind."""
        return {
            CombatantKind.PLAYER: "👤",
            CombatantKind.ENEMY: "👹",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this combatant kind."""
        return {
            CombatantKind.PLAYER: "bold blue",
            CombatantKind.ENEMY: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies combatant kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class StatType(NiceEnum):
    """Defines the six stat types in D&D."""

    STRENGTH = "STRENGTH"
    DEXTERITY = "DEXTERITY"
    CONSTITUTION = "CONSTITUTION"
    INTELLIGENCE = "INTELLIGENCE"
    WISDOM = "WISDOM"
    CHARISMA = "CHARISMA"

    @property
    def short_name(self) -> str:
        """Returns the 3-letter abbreviation for the stat."""
        return {
            StatType.STRENGTH: "STR",
            StatType.DEXTERITY: "DEX",
            StatType.CONSTITUTION: "CON",
            StatType.INTELLIGENCE: "INT",
            StatType.WISDOM: "WIS",
            StatType.CHARISMA: "CHA",
        }.get(self, "UNK")


# Damage dice used when a wielded weapon does not declare its own.
DEFAULT_PLAYER_WEAPON = "1d8"

# Flat damage of an unarmed strike.
UNARMED_STRIKE_DAMAGE = 1

# Damage dice of an unarmed strike for martial artists.
MARTIAL_ARTS_DAMAGE = "1d4"

# DEX check a player must beat when a driver asks for a flee check.
PLAYER_FLEE_DC = 10

# DEX check a monster must beat to leave the encounter.
ENEMY_FLEE_DC = 12

DEFAULT_CRITICAL_THRESHOLD = 20
IMPROVED_CRITICAL_THRESHOLD = 19

# Defensive monsters try to flee at or below this share of their max HP.
DEFENSIVE_FLEE_HP_PERCENT = 25

# Saving throws rolled by the target of a monster's special ability, keyed by
# the lower-cased ability name.
SPECIAL_ABILITY_SAVES: dict[str, tuple[StatType, int]] = {
    "disarm": (StatType.DEXTERITY, 11),
    "adhesive": (StatType.STRENGTH, 13),
}

# Action keywords understood on the player's turn.
ATTACK_KEYWORDS = ("attack", "hit", "strike")
FLEE_KEYWORDS = ("flee", "run", "escape")
