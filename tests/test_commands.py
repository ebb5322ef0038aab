"""Tests for the command engine.

The ``rng`` fixture falls back to the top of every range, so unless a test
queues its own rolls the player hits for attack power + 2 (a critical),
goblins never miss and hit for 6, and trolls hit for 9.
"""

from conftest import ScriptedRandom

from dungeon.engine.commands import INVALID_COMMAND, get_exits, handle_command
from dungeon.engine.creatures import Monster, goblin
from dungeon.engine.items import ItemKind, key, potion, weapon
from dungeon.engine.state import EndReason, GameState, Phase


def _clear_monsters(state: GameState, room_id: str) -> None:
    state.world.room(room_id).monsters.clear()


# --- Basics ---


def test_look(state: GameState):
    result = handle_command(state, "look")
    assert "entrance of a dark, damp dungeon" in result
    assert "Wall Torch" in result
    assert "Possible directions: forward" in result


def test_commands_ignore_case(state: GameState):
    assert handle_command(state, "LOOK") == handle_command(state, "look")


def test_invalid_command_changes_nothing(state: GameState):
    assert handle_command(state, "dance wildly") == INVALID_COMMAND
    assert state.turns == 0
    assert state.current_room == "entrance"


def test_empty_input(state: GameState):
    assert handle_command(state, "   ") == "I beg your pardon?"


def test_help(state: GameState):
    result = handle_command(state, "help")
    assert "move [direction]" in result
    assert "flee" in result


def test_status(state: GameState):
    result = handle_command(state, "status")
    assert "Tester - Health: 100/100 - Attack: 10" in result
    assert "Inventory: No items" in result


def test_stats(state: GameState):
    result = handle_command(state, "stats")
    assert "=== PLAYER STATISTICS ===" in result
    assert "Rooms Explored: 1" in result


def test_exit(state: GameState):
    state.statistics.start_time_tracking()
    result = handle_command(state, "exit")
    assert "Thank you for playing" in result
    assert "=== PLAYER STATISTICS ===" in result
    assert state.phase == Phase.ENDED
    assert state.end_reason == EndReason.QUIT
    assert not state.statistics.is_tracking_time
    assert handle_command(state, "look") == "The game is over."


# --- Items ---


def test_take_by_name(state: GameState):
    result = handle_command(state, "take wall torch")
    assert "You picked up the Wall Torch." in result
    assert state.player.inventory.find("Wall Torch") is not None
    assert not state.room.has_items()
    assert state.statistics.items_collected == 1
    assert state.statistics.items_by_kind[ItemKind.TORCH] == 1


def test_take_only_item_without_name(state: GameState):
    handle_command(state, "take")
    assert state.player.inventory_contents() == "Wall Torch"
    assert handle_command(state, "take") == "There is nothing to take here."


def test_take_by_number(state: GameState):
    state.current_room = "library"
    assert "Take what?" in handle_command(state, "take")
    handle_command(state, "take 2")
    assert state.player.inventory_contents() == "Ancient Tome"
    assert "no item number 5" in handle_command(state, "take 5")


def test_take_missing_item(state: GameState):
    assert handle_command(state, "take sword") == "There is no sword here."


def test_take_stronger_weapon_equips(state: GameState):
    state.room.add_item(weapon("Great Axe", "Heavy", 11))
    result = handle_command(state, "take great axe")
    assert "You equipped the Great Axe (Damage: 11)." in result
    assert state.player.attack_power == 11


def test_take_equal_weapon_does_not_equip(state: GameState):
    state.current_room = "treasure_room"
    result = handle_command(state, "take golden sword")
    assert "equipped" not in result
    assert state.player.attack_power == 10


def test_discard_moves_item_into_room(state: GameState):
    handle_command(state, "take wall torch")
    assert handle_command(state, "discard WALL TORCH") == "You dropped the Wall Torch."
    assert state.player.inventory_contents() == "No items"
    assert [item.name for item in state.room.items] == ["Wall Torch"]
    assert handle_command(state, "discard wall torch") == "You don't have a wall torch."


def test_inventory(state: GameState):
    assert handle_command(state, "inventory") == "You're not carrying anything."
    state.player.pick_up(potion("Health Potion", "Red", 20))
    state.player.pick_up(weapon("Axe", "Sharp", 7))
    state.player.pick_up(key("Rusty Key", "Old", "chamber"))

    result = handle_command(state, "inventory")
    assert "Health Potion: Red (Heals: 20)" in result
    assert "Weapons: Axe" in result
    assert "Potions: Health Potion" in result
    assert "Keys: Rusty Key" in result

    handle_command(state, "inventory sort")
    assert state.player.inventory_contents() == "Axe, Health Potion, Rusty Key"


def test_use_potion(state: GameState):
    state.current_room = "library"
    handle_command(state, "take health potion")
    state.player.take_damage(50)

    result = handle_command(state, "use health potion")
    assert "restore 20 health" in result
    assert state.player.health == 70
    assert state.player.inventory.find("Health Potion") is None
    assert state.statistics.potions_used == 1


def test_use_torch(state: GameState):
    handle_command(state, "take wall torch")
    result = handle_command(state, "use wall torch")
    assert "illuminating the area" in result
    assert state.player.inventory.find("Wall Torch") is not None


def test_use_other_item(state: GameState):
    state.current_room = "library"
    handle_command(state, "take ancient tome")
    assert handle_command(state, "use ancient tome") == "You can't use the Ancient Tome."
    assert handle_command(state, "use crown") == "You don't have a crown."
    assert handle_command(state, "use") == "Use what?"


# --- Movement and locks ---


def test_move_unknown_direction(state: GameState):
    assert handle_command(state, "move sideways") == (
        "You cannot move sideways from here."
    )
    assert state.current_room == "entrance"


def test_exits_mark_locked_rooms(state: GameState):
    state.current_room = "secret_passage"
    assert get_exits(state) == ["forward (locked)", "back"]


def test_locked_room_blocks_movement(state: GameState):
    state.current_room = "secret_passage"
    result = handle_command(state, "move forward")
    assert "locked" in result
    assert state.current_room == "secret_passage"


def test_use_key_unlocks_adjacent_room(state: GameState):
    state.current_room = "secret_passage"
    state.player.pick_up(key("Golden Key", "A shiny golden key", "gold"))

    result = handle_command(state, "use golden key")
    assert result == "You unlock the way forward with the Golden Key."
    assert not state.world.room("treasure_room").locked

    handle_command(state, "move forward")
    assert state.current_room == "treasure_room"


def test_use_key_tries_every_key(state: GameState):
    state.current_room = "secret_passage"
    state.player.pick_up(key("Rusty Key", "An old, rusted key", "chamber"))
    state.player.pick_up(key("Golden Key", "A shiny golden key", "gold"))
    result = handle_command(state, "use rusty key")
    assert "with the Golden Key" in result


def test_use_wrong_key(state: GameState):
    state.current_room = "secret_passage"
    state.player.pick_up(key("Rusty Key", "An old, rusted key", "chamber"))
    assert handle_command(state, "use rusty key") == (
        "None of your keys fit any door here."
    )
    assert state.world.room("treasure_room").locked


def test_bare_direction_moves(state: GameState):
    _clear_monsters(state, "hallway")
    handle_command(state, "forward")
    assert state.current_room == "hallway"
    handle_command(state, "move RIGHT")
    assert state.current_room == "library"


def test_rooms_explored_counts_first_visits(state: GameState):
    _clear_monsters(state, "hallway")
    for command in ["forward", "right", "back", "right", "back", "back"]:
        handle_command(state, command)
    assert state.current_room == "entrance"
    assert state.statistics.rooms_explored == 3


def test_missing_destination_is_reported(state: GameState):
    # Bypass connect() to simulate a corrupted map.
    state.world.connections["entrance"]["down"] = "cellar"
    result = handle_command(state, "move down")
    assert "leads nowhere" in result
    assert state.current_room == "entrance"


def test_unexpected_errors_are_contained(state: GameState):
    state.current_room = "void"
    result = handle_command(state, "take anything")
    assert result.startswith("Something went wrong")
    state.current_room = "entrance"
    assert "Wall Torch" in handle_command(state, "look")


# --- Combat ---


def test_entering_monster_room_starts_combat(state: GameState):
    result = handle_command(state, "move forward")
    assert state.current_room == "hallway"
    assert state.phase == Phase.IN_COMBAT
    assert state.enemy.name == "Sneaky Goblin"
    assert "You are now in combat" in result


def test_combat_blocks_take_discard_and_move(state: GameState):
    handle_command(state, "forward")
    assert "while fighting Sneaky Goblin" in handle_command(state, "take rusty key")
    assert "while fighting" in handle_command(state, "discard anything")
    assert "blocks your way" in handle_command(state, "move back")
    assert state.current_room == "hallway"
    assert "Fighting: Sneaky Goblin" in handle_command(state, "status")


def test_potion_during_combat(state: GameState):
    handle_command(state, "forward")
    state.player.take_damage(30)
    state.player.pick_up(potion("Health Potion", "Red", 20))
    handle_command(state, "use health potion")
    assert state.player.health == 90
    assert state.in_combat


def test_attack_until_enemy_dies(state: GameState):
    handle_command(state, "forward")

    first = handle_command(state, "attack")
    assert "You hit Sneaky Goblin for 12 damage. A critical hit!" in first
    assert "Sneaky Goblin hits you for 6 damage." in first
    assert state.enemy.health == 3
    assert state.player.health == 94

    second = handle_command(state, "attack")
    assert "You defeated Sneaky Goblin!" in second
    assert "The room is clear." in second
    assert not state.in_combat
    assert not state.room.has_monsters()
    assert "Goblin Ear" in [item.name for item in state.room.items]

    stats = state.statistics
    assert stats.monsters_defeated == 1
    assert stats.monsters_by_kind["Goblin"] == 1
    assert stats.damage_dealt == 24
    assert stats.damage_taken == 6
    assert stats.critical_hits == 2
    assert stats.highest_hit == 12


def test_next_monster_steps_up(state: GameState):
    state.world.room("hallway").add_monster(Monster("Rat", 5, 1, kind="Rat"))
    handle_command(state, "forward")
    assert state.enemy.name == "Sneaky Goblin"
    state.enemy.health = 1

    result = handle_command(state, "attack")
    assert "Rat attacks!" in result
    assert state.in_combat
    assert state.enemy.name == "Rat"
    assert state.enemy_index == 0


def test_goblin_miss(state: GameState, rng: ScriptedRandom):
    handle_command(state, "forward")
    rng.ints = [0, 1]  # player +0, goblin misses
    result = handle_command(state, "attack")
    assert "Sneaky Goblin misses you!" in result
    assert state.enemy.health == 5
    assert state.player.health == 100


def test_player_death_ends_game(state: GameState, rng: ScriptedRandom):
    state.player.health = 5
    handle_command(state, "forward")
    rng.ints = [0, 2, 1]  # player +0, goblin hits, +1

    result = handle_command(state, "attack")
    assert "You have died! Game over." in result
    assert "=== PLAYER STATISTICS ===" in result
    assert state.phase == Phase.ENDED
    assert state.end_reason == EndReason.PLAYER_DIED
    assert not state.in_combat
    assert state.statistics.deaths == 1
    assert handle_command(state, "attack") == "The game is over."


def test_flee_success_runs_back(state: GameState, rng: ScriptedRandom):
    handle_command(state, "forward")
    rng.floats = [0.1]
    result = handle_command(state, "flee")
    assert "You escape from Sneaky Goblin" in result
    assert state.current_room == "entrance"
    assert state.phase == Phase.EXPLORING
    assert state.world.room("hallway").has_monsters()


def test_flee_failure_gives_free_hit(state: GameState):
    handle_command(state, "forward")
    result = handle_command(state, "flee")
    assert "blocks your escape" in result
    assert state.player.health == 94
    assert state.in_combat
    assert state.current_room == "hallway"


def test_flee_without_back_exit_stays(state: GameState, rng: ScriptedRandom):
    state.room.add_monster(goblin("Lurker"))
    state.enemy_index = 0
    rng.floats = [0.1]

    result = handle_command(state, "flee")
    assert "nowhere to run" in result
    assert state.current_room == "entrance"
    assert not state.in_combat

    # The monster is still here and can be engaged again.
    result = handle_command(state, "attack")
    assert "Lurker attacks!" in result
    assert state.in_combat
    assert state.enemy.health == 3


def test_nothing_to_fight(state: GameState):
    assert handle_command(state, "attack") == "There is nothing to attack here."
    assert handle_command(state, "flee") == "There is nothing to flee from."


def test_synonyms(state: GameState):
    assert handle_command(state, "l") == handle_command(state, "look")
    assert handle_command(state, "?") == handle_command(state, "help")
    handle_command(state, "get wall torch")
    assert "Wall Torch" in handle_command(state, "i")
    handle_command(state, "drop wall torch")
    assert state.room.has_items()
    handle_command(state, "q")
    assert state.end_reason == EndReason.QUIT
