"""
Combat system.

Runs an encounter between the player character and a group of monsters. An
external driver starts the encounter and then repeatedly calls
execute_turn(), answering the player's turns with player_turn(), until a
result ends the combat. Every call returns a CombatResult; game-rule
problems such as acting out of turn come back as ERROR results.
"""

from typing import Optional

from catchery import log_debug, log_warning

from skirmish.core.constants import (
    ATTACK_KEYWORDS,
    ENEMY_FLEE_DC,
    FLEE_KEYWORDS,
    StatType,
)
from skirmish.core.dice import Dice
from skirmish.effects.status_manager import StatusEffectManager
from skirmish.entities.character import PlayerCharacter
from skirmish.entities.combatant import Combatant
from skirmish.entities.monster import Monster
from skirmish.items.item import Item

from .attack import AttackResolver, find_target
from .combat_result import CombatResult
from .encounter import EncounterOutcome, EncounterState, EncounterStatus
from .monster_ai import MonsterAction, decide_action
from .special_abilities import trigger_special_ability


class CombatSystem:
    """
    Owns one encounter at a time.

    Starting a new encounter discards everything left over from the previous
    one: status effects, turn order, aggro and dropped items.
    """

    def __init__(self, dice: Optional[Dice] = None, flee_dc: Optional[int] = None) -> None:
        """
        Args:
            dice (Optional[Dice]): The dice service, a fresh unseeded one if
                omitted.
            flee_dc (Optional[int]): DEX check the player must pass to get
                away after surviving the opportunity attacks. None means that
                surviving is enough.

        """
        self._dice = dice if dice is not None else Dice()
        self._flee_dc = flee_dc
        self._status_effects = StatusEffectManager(self._dice)
        self._resolver = AttackResolver(self._dice, self._status_effects)
        self._state = EncounterState(self._dice)
        self._pending_messages: list[str] = []
        self._turn_started: Optional[Combatant] = None

    # ============================================================================
    # ENCOUNTER LIFECYCLE
    # ============================================================================

    def start(
        self, player: Optional[PlayerCharacter], enemies: Optional[list[Monster]]
    ) -> CombatResult:
        """
        Starts a new encounter.

        Enemies are healed to full, status effects are cleared and initiative
        is rolled for everyone.

        Args:
            player (Optional[PlayerCharacter]): The player character.
            enemies (Optional[list[Monster]]): The monsters to fight.

        Returns:
            CombatResult: COMBAT_START with the initiative order, or ERROR if
            there is no player or no enemy.

        """
        if player is None:
            log_warning("Cannot start combat without a player", {"context": "start"})
            return CombatResult.error("No active player.")
        if not enemies:
            log_warning(
                "Cannot start combat without enemies",
                {"player": player.name, "context": "start"},
            )
            return CombatResult.error("No enemies to fight.")

        self._status_effects.reset()
        self._pending_messages = []
        self._turn_started = None
        for enemy in enemies:
            enemy.reset_hit_points()
        self._state.begin(player, list(enemies))

        rolls = self._state.tracker.roll(self._state.participants)
        log_debug(
            "Combat started",
            {"player": player.name, "enemies": [enemy.name for enemy in enemies]},
        )
        return CombatResult.combat_start(
            [combatant for combatant, _ in rolls],
            [(combatant.name, roll) for combatant, roll in rolls],
        )

    def end_combat(self) -> CombatResult:
        """
        Ends the current encounter early.

        Monsters already defeated still grant their experience, and dropped
        items go back to the player.

        Returns:
            CombatResult: VICTORY with the experience awarded, or ERROR if no
            encounter is running.

        """
        if not self._state.is_active():
            return CombatResult.error("Not in combat.")
        return self._victory()

    # ============================================================================
    # TURNS
    # ============================================================================

    def execute_turn(self) -> CombatResult:
        """
        Runs the turn of the current combatant.

        Turn-start effects are processed first. A combatant that cannot act
        loses its turn, a monster acts on its own, and the player gets a
        TURN_START result and is expected to answer with player_turn().

        Returns:
            CombatResult: The outcome of the step.

        """
        if not self._state.is_active():
            return CombatResult.error("Not in combat.")
        ended = self._check_end_conditions()
        if ended is not None:
            return ended

        tracker = self._state.tracker
        current = tracker.current_combatant()
        if current is None or not tracker.is_eligible(current):
            current = tracker.advance()
            if current is None:
                return self._check_end_conditions() or CombatResult.error(
                    "Nobody is left to act."
                )

        if current is self._turn_started and current is self._state.player:
            return CombatResult.turn_start(current)

        self._turn_started = current
        preamble = self._take_pending_messages()
        preamble.extend(self._status_effects.process_turn_start(current))

        if not self._status_effects.can_take_actions(current):
            return self._lose_turn(current, preamble)

        if isinstance(current, Monster):
            return self._run_enemy_turn(current, preamble)
        return CombatResult.turn_start(current, "\n".join(preamble))

    def player_turn(self, action: Optional[str], target: Optional[str] = None) -> CombatResult:
        """
        Performs the player's action.

        Args:
            action (Optional[str]): An action keyword: attack, hit or strike
                to attack, flee, run or escape to flee.
            target (Optional[str]): Name, or part of the name, of the enemy to
                attack. The first living enemy when omitted.

        Returns:
            CombatResult: The outcome of the action, or ERROR if the action
            cannot be performed.

        """
        if not self._state.is_active():
            return CombatResult.error("Not in combat.")
        player = self._state.player
        if self._state.tracker.current_combatant() is not player:
            return CombatResult.error("It's not your turn.")

        hint = ", ".join([ATTACK_KEYWORDS[0], FLEE_KEYWORDS[0]])
        if not action or not action.strip():
            return CombatResult.error(f"What do you want to do? ({hint})")
        if not self._status_effects.can_take_actions(player):
            return self._lose_turn(player, self._take_pending_messages())

        verb = action.strip().lower()
        if verb in ATTACK_KEYWORDS:
            return self._player_attack(player, target)
        if verb in FLEE_KEYWORDS:
            return self.flee()
        return CombatResult.error(f"Unknown action: {action}. Try: {hint}")

    def enemy_turn(self) -> CombatResult:
        """
        Runs the current monster's turn without turn-start processing.

        Returns:
            CombatResult: The outcome of the monster's action, or ERROR if the
            current combatant is not a monster.

        """
        if not self._state.is_active():
            return CombatResult.error("Not in combat.")
        current = self._state.tracker.current_combatant()
        if not isinstance(current, Monster):
            return CombatResult.error("It's not an enemy's turn.")
        preamble = self._take_pending_messages()
        if not self._status_effects.can_take_actions(current):
            return self._lose_turn(current, preamble)
        return self._run_enemy_turn(current, preamble)

    def flee(self) -> CombatResult:
        """
        The player tries to leave the encounter.

        Every living monster able to act makes one opportunity attack first.

        Returns:
            CombatResult: FLED if the player gets away, PLAYER_DEFEATED if an
            opportunity attack is fatal, INFO if the player is incapacitated
            or a configured flee check fails, ERROR if it is not the
            player's turn.

        """
        if not self._state.is_active():
            return CombatResult.error("Not in combat.")
        player = self._state.player
        if self._state.tracker.current_combatant() is not player:
            return CombatResult.error("It's not your turn.")
        if not self._status_effects.can_take_actions(player):
            return self._lose_turn(player, self._take_pending_messages())

        lines: list[str] = []
        for enemy in self._state.living_enemies:
            if not self._status_effects.can_take_actions(enemy):
                continue
            outcome = self._resolver.resolve_monster_attack(enemy, player, opportunity=True)
            if outcome.hit:
                self._state.record_attack(enemy, player)
            lines.append(outcome.to_result().message)
            if not player.is_alive():
                lines.append(f"{player.name} failed to flee!")
                return self._defeat("\n".join(lines))

        if self._flee_dc is not None and not player.roll_ability_check(
            self._dice, StatType.DEXTERITY, self._flee_dc
        ):
            lines.append(f"Failed to flee! [DEX check vs DC {self._flee_dc}]")
            self._advance_turn()
            return CombatResult.info("\n".join(lines), actor=player)

        self._finish(EncounterOutcome.FLED)
        return CombatResult.fled("\n".join(lines))

    # ============================================================================
    # ACTIONS
    # ============================================================================

    def _player_attack(
        self, player: PlayerCharacter, target_name: Optional[str]
    ) -> CombatResult:
        target = find_target(self._state.living_enemies, target_name)
        if target is None:
            names = ", ".join(enemy.name for enemy in self._state.living_enemies)
            return CombatResult.error(f"No enemy named '{target_name}'. Enemies: {names}")

        outcome = self._resolver.resolve_player_attack(player, target)
        if outcome.hit:
            self._state.record_attack(player, target)
        result = outcome.to_result()

        if not target.is_alive():
            if not self._state.living_enemies:
                return self._victory(
                    f"{result.message}\n{target.name} has been defeated!", result
                )
            self._advance_turn()
            return CombatResult.enemy_defeated(target, result)

        self._advance_turn()
        return result

    def _run_enemy_turn(self, monster: Monster, preamble: list[str]) -> CombatResult:
        lines = list(preamble)
        decision = decide_action(monster, self._state)

        if decision.action == MonsterAction.FLEE:
            dex = monster.ability_modifiers[StatType.DEXTERITY]
            if self._dice.check_against_dc(dex, ENEMY_FLEE_DC):
                self._state.depart(monster)
                lines.append(
                    f"{monster.name} flees from combat! "
                    f"[DEX check vs DC {ENEMY_FLEE_DC} - SUCCESS]"
                )
                if not self._state.living_enemies:
                    return self._victory("\n".join(lines))
                self._advance_turn()
                return CombatResult.info("\n".join(lines), actor=monster)
            lines.append(
                f"{monster.name} tries to flee but fails! "
                f"[DEX check vs DC {ENEMY_FLEE_DC} - FAILED]"
            )

        target = decision.target
        if target is None:
            lines.append(f"{monster.name} has no one to attack.")
            self._advance_turn()
            return CombatResult.info("\n".join(lines), actor=monster)

        outcome = self._resolver.resolve_monster_attack(monster, target)
        special = None
        if outcome.hit:
            self._state.record_attack(monster, target)
            special = trigger_special_ability(
                monster, target, self._state, self._status_effects, self._dice
            )
        result = outcome.to_result()
        if special is not None:
            result = CombatResult.special_ability(
                result, special.ability_name, special.annotation
            )
        lines.append(result.message)

        if target is self._state.player and not target.is_alive():
            return self._defeat("\n".join(lines))

        self._advance_turn()
        if len(lines) == 1:
            return result
        return result.model_copy(update={"message": "\n".join(lines)})

    # ============================================================================
    # TERMINATION
    # ============================================================================

    def _check_end_conditions(self) -> Optional[CombatResult]:
        """Ends the encounter if one side is out of the fight."""
        self._state.forget_dead_attackers()
        if not self._state.living_enemies:
            return self._victory()
        player = self._state.player
        if player is not None and not player.is_alive():
            return self._defeat()
        return None

    def _victory(
        self, details: str = "", last_blow: Optional[CombatResult] = None
    ) -> CombatResult:
        player = self._state.player
        xp = sum(enemy.experience_value for enemy in self._state.defeated_enemies)
        player.add_experience(xp)
        for item in self._state.take_all_dropped_items():
            player.inventory.add_item(item)
        self._finish(EncounterOutcome.VICTORY)
        return CombatResult.victory(xp, details, last_blow)

    def _defeat(self, details: str = "") -> CombatResult:
        self._finish(EncounterOutcome.DEFEAT)
        return CombatResult.player_defeated(self._state.player, details)

    def _finish(self, outcome: EncounterOutcome) -> None:
        self._state.finish(outcome)
        self._status_effects.reset()
        self._pending_messages = []
        self._turn_started = None
        log_debug("Combat over", {"outcome": str(outcome)})

    def _lose_turn(self, combatant: Combatant, preamble: list[str]) -> CombatResult:
        """Ends the turn of a combatant whose conditions prevent actions."""
        lines = [*preamble, f"{combatant.name} is incapacitated and cannot act!"]
        self._advance_turn()
        return CombatResult.info("\n".join(lines), actor=combatant)

    def _advance_turn(self) -> None:
        """Ends the current combatant's turn and moves to the next one."""
        tracker = self._state.tracker
        current = tracker.current_combatant()
        if current is not None and tracker.is_eligible(current):
            self._pending_messages.extend(self._status_effects.process_turn_end(current))
        self._turn_started = None
        tracker.advance()

    def _take_pending_messages(self) -> list[str]:
        messages, self._pending_messages = self._pending_messages, []
        return messages

    # ============================================================================
    # ACCESSORS
    # ============================================================================

    def is_active(self) -> bool:
        return self._state.is_active()

    @property
    def status(self) -> EncounterStatus:
        return self._state.status

    @property
    def outcome(self) -> Optional[EncounterOutcome]:
        return self._state.outcome

    @property
    def current_combatant(self) -> Optional[Combatant]:
        if not self._state.is_active():
            return None
        return self._state.tracker.current_combatant()

    @property
    def player(self) -> Optional[PlayerCharacter]:
        return self._state.player

    @property
    def participants(self) -> tuple[Combatant, ...]:
        return tuple(self._state.participants)

    @property
    def enemies(self) -> tuple[Monster, ...]:
        return tuple(self._state.enemies)

    @property
    def living_enemies(self) -> tuple[Monster, ...]:
        return tuple(self._state.living_enemies)

    @property
    def initiative_order(self) -> tuple[Combatant, ...]:
        return self._state.tracker.order

    @property
    def round_number(self) -> int:
        return self._state.tracker.round_number

    @property
    def current_turn_index(self) -> int:
        return self._state.tracker.current_index

    def get_initiative_roll(self, combatant: Combatant) -> Optional[int]:
        return self._state.tracker.get_roll(combatant)

    def get_last_attacker(self, combatant: Combatant) -> Optional[Combatant]:
        return self._state.get_last_attacker(combatant)

    @property
    def dropped_items(self) -> tuple[Item, ...]:
        return tuple(self._state.dropped_items)

    def has_dropped_items(self) -> bool:
        return bool(self._state.dropped_items)

    def pick_up_dropped_item(self, name: str) -> Optional[Item]:
        """
        Gives a dropped item back to the player.

        Args:
            name (str): Name, or part of the name, of the item.

        Returns:
            Optional[Item]: The item picked up, or None if nothing matches.

        """
        player = self._state.player
        if player is None or not name:
            return None
        item = self._state.take_dropped_item(name)
        if item is not None:
            player.inventory.add_item(item)
        return item

    @property
    def status_effects(self) -> StatusEffectManager:
        return self._status_effects

    def available_actions(self) -> list[str]:
        """Action keywords for the command layer, class feature actions included."""
        actions = [ATTACK_KEYWORDS[0], FLEE_KEYWORDS[0]]
        if self._state.player is not None:
            actions.extend(self._state.player.get_feature_actions())
        return actions
