"""Build a GameMap from a TOML dungeon description.

Layout of the file::

    [rooms.<room id>]
    description = "..."
    locked = false            # optional
    unlock_code = "gold"      # optional, needed when locked
    exits = { forward = "<room id>", back = "<room id>" }
    items = [ { kind = "weapon", name = "...", description = "...", damage = 8 } ]
    monsters = [ { kind = "goblin", name = "...", drop = { ... } } ]

Rooms are added first and connected afterwards, so exits may refer to rooms
declared further down the file.
"""

import tomllib
from pathlib import Path
from typing import Any

from .creatures import Monster, dragon, goblin, troll
from .items import Item, ItemKind, key, potion, torch, weapon
from .world import GameMap, Room


class DungeonDataError(ValueError):
    """The dungeon description is malformed."""


_MONSTER_FACTORIES = {"goblin": goblin, "troll": troll, "dragon": dragon}


def _require(table: dict[str, Any], name: str, where: str) -> Any:
    try:
        return table[name]
    except KeyError:
        raise DungeonDataError(f"{where}: missing {name!r}") from None


def _parse_item(data: dict[str, Any], where: str) -> Item:
    name = _require(data, "name", where)
    description = data.get("description", f"A {name}.")
    kind = data.get("kind", ItemKind.GENERIC)

    match kind:
        case ItemKind.GENERIC:
            return Item(name, description)
        case ItemKind.WEAPON:
            return weapon(name, description, _require(data, "damage", where))
        case ItemKind.POTION:
            return potion(name, description, _require(data, "heal", where))
        case ItemKind.KEY:
            return key(name, description, _require(data, "unlock_code", where))
        case ItemKind.TORCH:
            burn_time = _require(data, "burn_time", where)
            if "damage" in data:
                return torch(name, description, burn_time, data["damage"])
            return torch(name, description, burn_time)
        case _:
            raise DungeonDataError(f"{where}: unknown item kind {kind!r}")


def _parse_monster(data: dict[str, Any], where: str) -> Monster:
    name = _require(data, "name", where)
    kind = data.get("kind", "beast")
    if not isinstance(kind, str):
        raise DungeonDataError(f"{where}: monster kind must be a string")
    drop = data.get("drop")
    dropped_item = _parse_item(drop, f"{where} drop") if drop else None

    factory = _MONSTER_FACTORIES.get(kind.lower())
    if factory is not None:
        monster = factory(name, dropped_item)
    else:
        monster = Monster(
            name,
            _require(data, "health", where),
            _require(data, "attack", where),
            kind=kind,
            dropped_item=dropped_item,
        )

    if "health" in data:
        monster.health = monster.max_health = data["health"]
    if "attack" in data:
        monster.attack_power = data["attack"]
    return monster


def _parse_room(room_id: str, data: dict[str, Any]) -> Room:
    where = f"room {room_id!r}"
    room = Room(
        description=_require(data, "description", where),
        locked=data.get("locked", False),
        unlock_code=data.get("unlock_code"),
    )
    if room.locked and room.unlock_code is None:
        raise DungeonDataError(f"{where}: locked rooms need an unlock_code")
    for item_data in data.get("items", []):
        room.add_item(_parse_item(item_data, where))
    for monster_data in data.get("monsters", []):
        room.add_monster(_parse_monster(monster_data, where))
    return room


def build_world(data: dict[str, Any]) -> GameMap:
    """Build a map from already-parsed TOML data."""
    rooms = data.get("rooms")
    if not rooms:
        raise DungeonDataError("no rooms defined")

    world = GameMap()
    for room_id, room_data in rooms.items():
        if not world.add_room(room_id, _parse_room(room_id, room_data)):
            raise DungeonDataError(f"invalid room id {room_id!r}")

    for room_id, room_data in rooms.items():
        for direction, dest_id in room_data.get("exits", {}).items():
            if not world.connect(room_id, direction, dest_id):
                raise DungeonDataError(
                    f"room {room_id!r}: exit {direction!r} leads to "
                    f"unknown room {dest_id!r}"
                )
    return world


def load_world(path: Path) -> GameMap:
    """Parse a dungeon TOML file into a GameMap."""
    with path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise DungeonDataError(f"{path}: {exc}") from exc
    return build_world(data)
