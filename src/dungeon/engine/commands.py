"""Command dispatch and handler functions.

handle_command(state, raw_input) -> str is the main entry point.
It splits the input into a verb and an optional argument and dispatches to
a handler. All handlers mutate state in place and return descriptive text.

While the player is in combat, handlers that would walk away from the fight
or rummage around the room refuse to run.
"""

from collections.abc import Callable

from ..logging import get_logger
from .combat import flee_succeeds
from .creatures import Monster
from .items import Item, ItemKind
from .state import BACK_DIRECTION, EndReason, GameState
from .world import Room

logger = get_logger(__name__)

INVALID_COMMAND = "Invalid Command. Type 'help' for a list of commands."

HELP_TEXT = """Available commands:
look - Look around the current room
status - Check your health and inventory
inventory [sort] - List what you are carrying
stats - Show your statistics so far
take [name|number] - Pick up an item in the room
use [name] - Use an item (potion, torch or key)
discard [name] - Drop an item into the room
move [direction] - Move in the given direction
attack - Attack the monster you are fighting
flee - Try to run away from a fight
help - Display this help message
exit - Exit the game"""


def _current_room(state: GameState) -> Room:
    room = state.room
    if room is None:
        raise LookupError(f"Room {state.current_room!r} is missing from the map")
    return room


def _resolve_direction(state: GameState, direction: str) -> str | None:
    """Match a typed direction against the exits of the current room.

    Exact labels win; otherwise a single case-insensitive match is accepted.
    """
    exits = state.world.directions_from(state.current_room)
    if direction in exits:
        return direction
    matches = [d for d in exits if d.lower() == direction.lower()]
    return matches[0] if len(matches) == 1 else None


def _not_during_combat(state: GameState) -> str | None:
    enemy = state.enemy
    if enemy is None:
        return None
    return f"You can't do that while fighting {enemy.name}!"


def get_exits(state: GameState) -> list[str]:
    """Exit labels of the current room, marking locked destinations."""
    exits = []
    for direction in state.world.directions_from(state.current_room):
        dest_id = state.world.destination_of(state.current_room, direction)
        dest = state.world.room(dest_id) if dest_id else None
        if dest is not None and dest.locked:
            exits.append(f"{direction} (locked)")
        else:
            exits.append(direction)
    return exits


def get_room_description(state: GameState) -> str:
    """Everything the player sees on entering or looking around."""
    room = state.room
    if room is None:
        return "You are in a mysterious place."
    exits = get_exits(state)
    lines = [
        room.description,
        room.items_description(),
        room.monsters_description(),
        "Possible directions: " + (", ".join(exits) if exits else "none"),
    ]
    return "\n".join(lines)


# --- Combat ---


def _start_combat(state: GameState) -> str:
    """Square up against the strongest monster in the current room."""
    room = _current_room(state)
    state.enemy_index = room.strongest_monster_index()
    enemy = state.enemy
    if enemy is None:
        return ""
    logger.info(
        "combat_started",
        room=state.current_room,
        enemy=enemy.name,
        kind=enemy.kind,
    )
    return (
        f"{enemy.name} attacks! You are now in combat.\n"
        f"{enemy.describe()}\n"
        "Type 'attack' to fight or 'flee' to run."
    )


def _player_died(state: GameState) -> str:
    state.enemy_index = None
    state.end_reason = EndReason.PLAYER_DIED
    state.statistics.record_player_death()
    state.statistics.stop_time_tracking()
    logger.info("player_died", room=state.current_room, turns=state.turns)
    return "You have died! Game over.\n\n" + state.statistics.report()


def _enemy_strikes(state: GameState, enemy: Monster) -> str:
    """Let the enemy hit the player once."""
    player = state.player
    hit = enemy.roll(state.rng)
    if hit.missed:
        return f"{enemy.name} misses you!"

    player.take_damage(hit.damage)
    state.statistics.record_damage_taken(hit.damage)
    message = f"{enemy.name} hits you for {hit.damage} damage."
    if hit.critical:
        message += " A critical hit!"
    if not player.is_alive():
        return message + "\n" + _player_died(state)
    return message + f" Your health: {player.health}/{player.max_health}"


def _defeat_enemy(state: GameState) -> str:
    """Remove the dead enemy, leave its loot, and face the next one."""
    room = _current_room(state)
    enemy = room.remove_monster_at(state.enemy_index)
    state.enemy_index = None
    state.statistics.record_monster_defeated(enemy.kind)
    logger.info(
        "monster_defeated",
        room=state.current_room,
        enemy=enemy.name,
        kind=enemy.kind,
    )

    lines = [f"You defeated {enemy.name}!"]
    if enemy.dropped_item is not None:
        room.add_item(enemy.dropped_item)
        lines.append(f"{enemy.name} dropped the {enemy.dropped_item.name}.")
    if room.has_monsters():
        lines.append(_start_combat(state))
    else:
        lines.append("The room is clear.")
    return "\n".join(lines)


def _combat_round(state: GameState) -> str:
    """Player strikes first; a surviving enemy strikes back."""
    enemy = state.enemy
    hit = state.player.roll(state.rng)
    enemy.take_damage(hit.damage)
    state.statistics.record_damage_dealt(hit.damage, critical=hit.critical)

    message = f"You hit {enemy.name} for {hit.damage} damage."
    if hit.critical:
        message += " A critical hit!"
    if not enemy.is_alive():
        return message + "\n" + _defeat_enemy(state)
    return "\n".join(
        [
            message,
            f"{enemy.name} has {enemy.health} health left.",
            _enemy_strikes(state, enemy),
        ]
    )


def _cmd_attack(state: GameState, arg: str | None = None) -> str:
    """Handle ATTACK."""
    if state.in_combat:
        return _combat_round(state)
    # Monsters left behind after a flee can be engaged again.
    if _current_room(state).has_monsters():
        return _start_combat(state) + "\n\n" + _combat_round(state)
    return "There is nothing to attack here."


def _cmd_flee(state: GameState, arg: str | None = None) -> str:
    """Handle FLEE: a coin toss between escaping and a free hit."""
    enemy = state.enemy
    if enemy is None:
        return "There is nothing to flee from."

    if not flee_succeeds(state.rng):
        logger.debug("flee_failed", enemy=enemy.name)
        return (
            f"You try to flee, but {enemy.name} blocks your escape!\n"
            + _enemy_strikes(state, enemy)
        )

    state.enemy_index = None
    dest_id = state.world.destination_of(state.current_room, BACK_DIRECTION)
    dest = state.world.room(dest_id) if dest_id else None
    logger.info("player_fled", room=state.current_room, enemy=enemy.name)
    if dest is None or dest.locked:
        return f"You break away from {enemy.name}, but there is nowhere to run."
    _arrive(state, dest_id)
    return (
        f"You escape from {enemy.name} and run back.\n"
        + get_room_description(state)
    )


# --- Movement ---


def _arrive(state: GameState, room_id: str) -> None:
    state.current_room = room_id
    if room_id not in state.visited_rooms:
        state.visited_rooms.add(room_id)
        state.statistics.record_room_explored()
    logger.info("room_entered", room=room_id)


def _cmd_move(state: GameState, arg: str | None = None) -> str:
    """Handle MOVE commands."""
    if arg is None:
        exits = get_exits(state)
        return "Move where? Possible directions: " + (
            ", ".join(exits) if exits else "none"
        )
    enemy = state.enemy
    if enemy is not None:
        return f"{enemy.name} blocks your way! Attack or flee."

    direction = _resolve_direction(state, arg)
    if direction is None:
        return f"You cannot move {arg} from here."

    dest_id = state.world.destination_of(state.current_room, direction)
    dest = state.world.room(dest_id)
    if dest is None:
        logger.warning(
            "missing_room",
            origin=state.current_room,
            direction=direction,
            destination=dest_id,
        )
        return "That passage leads nowhere. You stay where you are."
    if dest.locked:
        return f"The way {direction} is locked. Perhaps a key would help."

    _arrive(state, dest_id)
    text = f"You move {direction}.\n" + get_room_description(state)
    if dest.has_monsters():
        text += "\n\n" + _start_combat(state)
    return text


# --- Items ---


def _pick_up(state: GameState, item: Item) -> str:
    equipped = state.player.pick_up(item)
    state.statistics.record_item_collected(item.kind)
    logger.info("item_collected", item=item.name, kind=item.kind)
    message = f"You picked up the {item.name}."
    if equipped:
        message += f"\nYou equipped the {item.name} (Damage: {item.damage})."
    return message


def _cmd_take(state: GameState, arg: str | None = None) -> str:
    """Handle TAKE by name or 1-based number."""
    refused = _not_during_combat(state)
    if refused:
        return refused

    room = _current_room(state)
    if not room.has_items():
        return "There is nothing to take here."

    if arg is None:
        if len(room.items) > 1:
            return "Take what?\n" + room.items_description()
        item = room.take_item_at(1)
    elif arg.isdigit():
        item = room.take_item_at(int(arg))
        if item is None:
            return f"There is no item number {arg} here."
    else:
        item = room.take_item(arg)
        if item is None:
            return f"There is no {arg} here."
    return _pick_up(state, item)


def _cmd_discard(state: GameState, arg: str | None = None) -> str:
    """Handle DISCARD: the item moves from the inventory into the room."""
    refused = _not_during_combat(state)
    if refused:
        return refused
    if arg is None:
        return "Discard what?"

    item = state.player.inventory.find(arg)
    if item is None:
        return f"You don't have a {arg}."
    state.player.inventory.remove(item)
    _current_room(state).add_item(item)
    logger.debug("item_discarded", item=item.name, room=state.current_room)
    return f"You dropped the {item.name}."


def _use_keys(state: GameState) -> str:
    """Try every carried key on every locked room next to this one."""
    keys = state.player.inventory.of_kind(ItemKind.KEY)
    opened = []
    for direction in state.world.directions_from(state.current_room):
        dest_id = state.world.destination_of(state.current_room, direction)
        dest = state.world.room(dest_id) if dest_id else None
        if dest is None or not dest.locked:
            continue
        for key in keys:
            if dest.unlock(key):
                logger.info("room_unlocked", room=dest_id, key=key.name)
                opened.append(f"You unlock the way {direction} with the {key.name}.")
                break
    if not opened:
        return "None of your keys fit any door here."
    return "\n".join(opened)


def _cmd_use(state: GameState, arg: str | None = None) -> str:
    """Handle USE for potions, torches and keys."""
    if arg is None:
        return "Use what?"
    player = state.player
    item = player.inventory.find(arg)
    if item is None:
        return f"You don't have a {arg}."

    if item.kind == ItemKind.KEY:
        return _use_keys(state)

    before = player.health
    if not player.use_item(item):
        return f"You can't use the {item.name}."
    if item.kind == ItemKind.POTION:
        state.statistics.record_potion_used()
        return (
            f"You drink the {item.name} and restore {player.health - before}"
            f" health. Current health: {player.health}"
        )
    return (
        f"You hold up the {item.name}, illuminating the area. "
        f"It will burn for {item.burn_time} more minutes."
    )


# --- Information ---


def _cmd_look(state: GameState, arg: str | None = None) -> str:
    """Handle LOOK."""
    return get_room_description(state)


def _cmd_status(state: GameState, arg: str | None = None) -> str:
    """Handle STATUS."""
    lines = [
        state.player.describe(),
        f"Inventory: {state.player.inventory_contents()}",
    ]
    enemy = state.enemy
    if enemy is not None:
        lines.append(f"Fighting: {enemy.describe()}")
    return "\n".join(lines)


def _cmd_inventory(state: GameState, arg: str | None = None) -> str:
    """Handle INVENTORY, optionally sorting it by name first."""
    inventory = state.player.inventory
    if arg is not None and arg.lower() == "sort":
        inventory.sort_by_name()
    if not len(inventory):
        return "You're not carrying anything."

    lines = ["You are carrying:", inventory.list_details()]
    groups = [
        ("Weapons", inventory.of_kind(ItemKind.WEAPON, ItemKind.TORCH)),
        ("Potions", inventory.of_kind(ItemKind.POTION)),
        ("Keys", inventory.of_kind(ItemKind.KEY)),
    ]
    for label, items in groups:
        if items:
            lines.append(f"{label}: " + ", ".join(item.name for item in items))
    return "\n".join(lines)


def _cmd_stats(state: GameState, arg: str | None = None) -> str:
    """Handle STATS."""
    return state.statistics.report()


def _cmd_help(state: GameState, arg: str | None = None) -> str:
    """Handle HELP."""
    return HELP_TEXT


def _cmd_exit(state: GameState, arg: str | None = None) -> str:
    """Handle EXIT."""
    state.enemy_index = None
    state.end_reason = EndReason.QUIT
    state.statistics.stop_time_tracking()
    logger.info("game_quit", room=state.current_room, turns=state.turns)
    return "Thank you for playing Dungeon Explorer!\n\n" + state.statistics.report()


_VERB_DISPATCH: dict[str, Callable[[GameState, str | None], str]] = {
    **dict.fromkeys(("look", "l"), _cmd_look),
    "status": _cmd_status,
    **dict.fromkeys(("inventory", "inv", "i"), _cmd_inventory),
    **dict.fromkeys(("stats", "statistics"), _cmd_stats),
    **dict.fromkeys(("take", "get"), _cmd_take),
    "use": _cmd_use,
    **dict.fromkeys(("discard", "drop"), _cmd_discard),
    **dict.fromkeys(("move", "go", "walk"), _cmd_move),
    **dict.fromkeys(("attack", "fight", "kill", "hit"), _cmd_attack),
    **dict.fromkeys(("flee", "run", "escape"), _cmd_flee),
    **dict.fromkeys(("help", "?"), _cmd_help),
    **dict.fromkeys(("exit", "quit", "q"), _cmd_exit),
}


def _dispatch_verb(state: GameState, verb: str, arg: str | None) -> str | None:
    """Dispatch to a handler, or treat a bare exit label as a move."""
    handler = _VERB_DISPATCH.get(verb.lower())
    if handler is not None:
        state.turns += 1
        return handler(state, arg)

    if arg is None and _resolve_direction(state, verb) is not None:
        state.turns += 1
        return _cmd_move(state, verb)

    return None


def handle_command(state: GameState, raw_input: str) -> str:
    """Process a command and return the response text."""
    if state.is_finished:
        return "The game is over."

    words = raw_input.strip().split(maxsplit=1)
    if not words:
        return "I beg your pardon?"

    verb = words[0]
    arg = words[1].strip() if len(words) > 1 else None

    try:
        return _dispatch_verb(state, verb, arg) or INVALID_COMMAND
    except Exception:
        logger.exception("command_failed", command=raw_input)
        return "Something went wrong while doing that. Try something else."
