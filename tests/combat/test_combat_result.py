"""
Tests for combat results.
"""

import pytest
from pydantic import ValidationError

from skirmish.combat.combat_result import CombatResult, CombatResultType


def test_result_is_immutable():
    result = CombatResult.info("Nothing happens.")
    with pytest.raises(ValidationError):
        result.message = "Something happens."


def test_terminal_types():
    """
    Test that exactly victory, defeat and flight end the combat.
    """
    terminal = {t for t in CombatResultType if t.is_terminal}
    assert terminal == {
        CombatResultType.VICTORY,
        CombatResultType.PLAYER_DEFEATED,
        CombatResultType.FLED,
    }


def test_predicates():
    error = CombatResult.error("Not in combat.")
    assert error.is_error()
    assert not error.is_success()
    assert not error.ends_combat()

    fled = CombatResult.fled()
    assert fled.is_success()
    assert fled.ends_combat()
    assert str(fled) == "You fled from combat!"


def test_combat_start_lists_initiative(hero, goblin):
    result = CombatResult.combat_start([hero, goblin], [("Aldric", 17), ("Goblin", 9)])
    assert result.type == CombatResultType.COMBAT_START
    assert result.message == (
        "Combat begins!\n\nInitiative Rolls:\n  Aldric: 17\n  Goblin: 9"
    )
    assert result.turn_order == (hero, goblin)
    assert result.initiative_rolls == (("Aldric", 17), ("Goblin", 9))


def test_attack_hit_message_marks_bloodied(hero, goblin):
    goblin.take_damage(4)
    result = CombatResult.attack_hit(hero, goblin, 18, 13, 4, "[CRITICAL HIT!]")
    assert result.message == (
        "Aldric attacks Goblin! [Roll: 18 vs AC 13] HIT! [Damage: 4] (bloodied) "
        "[CRITICAL HIT!]"
    )
    assert result.attack_roll == 18
    assert result.target_ac == 13
    assert result.damage_roll == 4


def test_attack_miss_message(hero, goblin):
    result = CombatResult.attack_miss(hero, goblin, 9, 13)
    assert result.message == "Aldric attacks Goblin! [Roll: 9 vs AC 13] MISS!"
    assert result.damage_roll is None


def test_special_ability_keeps_hit_numbers(hero, goblin):
    """
    Test that a special ability result extends the triggering hit.
    """
    hit = CombatResult.attack_hit(goblin, hero, 15, 11, 3)
    result = CombatResult.special_ability(hit, "Disarm", "[Disarm: DEX save DC 11 - SAVED!]")
    assert result.type == CombatResultType.SPECIAL_ABILITY
    assert result.message.startswith(hit.message + "\n")
    assert result.message.endswith(
        "Goblin uses Disarm on Aldric! [Disarm: DEX save DC 11 - SAVED!]"
    )
    assert (result.attack_roll, result.target_ac, result.damage_roll) == (15, 11, 3)


def test_victory_and_defeat_messages(hero, goblin):
    victory = CombatResult.victory(50, "Goblin has been defeated!")
    assert victory.xp_gained == 50
    assert victory.message == "Goblin has been defeated!\nVictory! You gained 50 XP."

    defeat = CombatResult.player_defeated(hero)
    assert defeat.message == "Aldric has fallen..."
    assert defeat.defender is hero

    defeated = CombatResult.enemy_defeated(goblin)
    assert defeated.message == "Goblin has been defeated!"
