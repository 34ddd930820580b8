"""
Demo driver for the combat engine.

Builds a sample hero and a pack of monsters, then plays the encounter to the
end: monsters act on their own and the hero attacks the weakest enemy,
or tries to flee once below a quarter of its hit points. Every
CombatResult is printed as it comes.

Run with:
    python -m skirmish.main [--seed N] [--debug]
"""

import argparse
import logging
from collections import Counter

from skirmish.combat import CombatResultType, CombatSystem
from skirmish.core import (
    IMPROVED_CRITICAL_THRESHOLD,
    PLAYER_FLEE_DC,
    StatType,
    cprint,
    crule,
    get_logger,
    make_bar,
    setup_logging,
)
from skirmish.core.dice import Dice
from skirmish.entities import CombatFeature, Monster, MonsterBehavior, PlayerCharacter
from skirmish.items import Armor, ArmorType, Weapon, WeaponProperty

logger = get_logger(__name__)

# Maximum number of engine steps before the demo gives up.
MAX_STEPS = 500

RESULT_STYLES = {
    CombatResultType.COMBAT_START: "bold green",
    CombatResultType.TURN_START: "bold blue",
    CombatResultType.ATTACK_HIT: "yellow",
    CombatResultType.ATTACK_MISS: "dim white",
    CombatResultType.SPECIAL_ABILITY: "magenta",
    CombatResultType.ENEMY_DEFEATED: "bold green",
    CombatResultType.PLAYER_DEFEATED: "bold red",
    CombatResultType.VICTORY: "bold green",
    CombatResultType.FLED: "bold yellow",
    CombatResultType.INFO: "cyan",
    CombatResultType.ERROR: "bold red",
}


def build_hero() -> PlayerCharacter:
    """Creates a level 3 fighter with a longsword, chain shirt and shield."""
    hero = PlayerCharacter(
        name="Aldric",
        max_hp=28,
        level=3,
        ability_scores={
            StatType.STRENGTH: 16,
            StatType.DEXTERITY: 13,
            StatType.CONSTITUTION: 14,
            StatType.INTELLIGENCE: 10,
            StatType.WISDOM: 12,
            StatType.CHARISMA: 8,
        },
        saving_throw_proficiencies={StatType.STRENGTH, StatType.CONSTITUTION},
        features=[
            CombatFeature(
                name="Improved Critical",
                critical_threshold=IMPROVED_CRITICAL_THRESHOLD,
            ),
            CombatFeature(name="Second Wind", actions=["second wind"]),
        ],
    )
    hero.inventory.equip(
        Weapon(name="Longsword", damage_dice="1d8", properties={WeaponProperty.LIGHT})
    )
    hero.inventory.equip(
        Armor(name="Chain Shirt", armor_type=ArmorType.MEDIUM, base_ac=13)
    )
    hero.inventory.equip(Armor(name="Shield", armor_type=ArmorType.SHIELD, base_ac=2))
    return hero


def build_monsters() -> list[Monster]:
    """Creates fresh copies of the demo monster templates."""
    goblin = Monster(
        monster_id="goblin",
        name="Goblin",
        armor_class=15,
        max_hp=7,
        attack_bonus=4,
        damage_dice="1d6+2",
        experience_value=50,
        behavior=MonsterBehavior.COWARDLY,
        ability_modifiers={StatType.DEXTERITY: 2},
    )
    mimic = Monster(
        monster_id="mimic",
        name="Mimic",
        armor_class=12,
        max_hp=58,
        attack_bonus=5,
        damage_dice="1d8+3",
        experience_value=450,
        behavior=MonsterBehavior.DEFENSIVE,
        special_ability="Adhesive",
        ability_modifiers={StatType.STRENGTH: 3, StatType.DEXTERITY: 1},
    )
    bandit = Monster(
        monster_id="bandit",
        name="Bandit Captain",
        armor_class=15,
        max_hp=32,
        attack_bonus=5,
        damage_dice="1d6+3",
        experience_value=450,
        behavior=MonsterBehavior.TACTICAL,
        special_ability="Disarm",
        ability_modifiers={StatType.DEXTERITY: 3},
    )
    monsters = [goblin.copy(), goblin.copy(), mimic.copy(), bandit.copy()]
    make_names_unique(monsters)
    return monsters


def make_names_unique(monsters: list[Monster]) -> None:
    """
    Ensures all monster names are unique by appending numbers.

    Example:
        Input: ["Goblin", "Goblin", "Mimic"]
        Output: ["Goblin (1)", "Goblin (2)", "Mimic"]

    """
    name_counts = Counter(monster.name for monster in monsters)
    seen: Counter[str] = Counter()
    for monster in monsters:
        base = monster.name
        if name_counts[base] > 1:
            seen[base] += 1
            monster.name = f"{base} ({seen[base]})"


def run_encounter(combat: CombatSystem, hero: PlayerCharacter, monsters: list[Monster]) -> None:
    """Plays an encounter to the end, printing every result."""
    result = combat.start(hero, monsters)
    cprint(result.message, style=RESULT_STYLES[result.type])
    for monster in monsters:
        cprint(f"  {monster.kind.emoji} {monster.name}: {monster.behavior.description}")

    for _ in range(MAX_STEPS):
        if result.ends_combat() or not combat.is_active():
            break
        result = combat.execute_turn()
        if result.type == CombatResultType.TURN_START:
            cprint(hero.kind.colorize(f"{hero.kind.emoji} {result.message}"))
            conditions = combat.status_effects.get_conditions(hero)
            cprint(
                f"  HP {make_bar(hero.current_hp, hero.max_hp, 20, 'green')} "
                f"{hero.current_hp}/{hero.max_hp}  "
                f"{combat.status_effects.get_status_display(hero)} "
                + "".join(condition.emoji for condition in conditions)
            )
            if hero.current_hp * 4 < hero.max_hp:
                result = combat.player_turn("flee")
            else:
                weakest = min(combat.living_enemies, key=lambda enemy: enemy.current_hp)
                result = combat.player_turn("attack", weakest.name)
        cprint(result.message, style=RESULT_STYLES[result.type])
    else:
        logger.warning("Demo stopped after %d steps without a winner", MAX_STEPS)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a demo encounter.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the dice.")
    parser.add_argument("--debug", action="store_true", help="Show engine debug logs.")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    crule(":crossed_swords:  Skirmish Demo", style="bold green")
    hero = build_hero()
    combat = CombatSystem(Dice(seed=args.seed), flee_dc=PLAYER_FLEE_DC)
    try:
        run_encounter(combat, hero, build_monsters())
        crule(
            f":crossed_swords:  Combat Finished ({combat.outcome})",
            style="bold green",
        )
        cprint(f"{hero.name} has {hero.experience} XP.")
    except KeyboardInterrupt:
        cprint("")
        crule(":crossed_swords:  Combat Interrupted", style="bold red")


if __name__ == "__main__":
    main()
