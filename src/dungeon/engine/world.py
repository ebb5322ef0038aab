"""Rooms and the directed graph connecting them.

Directions are plain labels owned by the map. Nothing forces a connection
to have a way back: the map builder adds the reverse edge when travel should
go both ways.
"""

from dataclasses import dataclass, field

from .creatures import Monster
from .items import Item, ItemKind


@dataclass(eq=False)
class Room:
    """A location holding items and monsters, possibly behind a lock."""

    description: str
    locked: bool = False
    unlock_code: str | None = None
    items: list[Item] = field(default_factory=list)
    monsters: list[Monster] = field(default_factory=list)

    def add_item(self, item: Item) -> None:
        self.items.append(item)

    def has_items(self) -> bool:
        return bool(self.items)

    def take_item(self, name: str) -> Item | None:
        """Remove and return the first item with this name, ignoring case."""
        wanted = name.strip().lower()
        for i, item in enumerate(self.items):
            if item.name.lower() == wanted:
                return self.items.pop(i)
        return None

    def take_item_at(self, position: int) -> Item | None:
        """Remove and return the item at a 1-based position."""
        if 1 <= position <= len(self.items):
            return self.items.pop(position - 1)
        return None

    def add_monster(self, monster: Monster) -> None:
        self.monsters.append(monster)

    def has_monsters(self) -> bool:
        return bool(self.monsters)

    def remove_monster_at(self, index: int) -> Monster:
        return self.monsters.pop(index)

    def strongest_monster_index(self) -> int | None:
        """Index of the hardest hitter; the earliest one wins a tie."""
        if not self.monsters:
            return None
        return max(
            range(len(self.monsters)),
            key=lambda i: self.monsters[i].attack_power,
        )

    def strongest_monster(self) -> Monster | None:
        index = self.strongest_monster_index()
        return None if index is None else self.monsters[index]

    def unlock(self, key: Item) -> bool:
        """Open the lock with a matching key. Once open, it stays open."""
        if (
            self.locked
            and key.kind == ItemKind.KEY
            and key.unlock_code == self.unlock_code
        ):
            self.locked = False
            return True
        return False

    def items_description(self) -> str:
        if not self.items:
            return "There are no items in this room."
        lines = ["Items in this room:"]
        lines += [f"{i}. {item.details()}" for i, item in enumerate(self.items, 1)]
        return "\n".join(lines)

    def monsters_description(self) -> str:
        if not self.monsters:
            return "There are no monsters in this room."
        return "\n".join(
            f"{i}. {monster.describe()}"
            for i, monster in enumerate(self.monsters, 1)
        )


@dataclass
class GameMap:
    """Rooms by id plus labelled, one-way connections between them."""

    rooms: dict[str, Room] = field(default_factory=dict)
    connections: dict[str, dict[str, str]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.rooms)

    def add_room(self, room_id: str, room: Room) -> bool:
        if not room_id or room is None or room_id in self.rooms:
            return False
        self.rooms[room_id] = room
        self.connections[room_id] = {}
        return True

    def room(self, room_id: str) -> Room | None:
        return self.rooms.get(room_id)

    def room_ids(self) -> list[str]:
        return list(self.rooms)

    def connect(self, from_id: str, direction: str, to_id: str) -> bool:
        """Add (or replace) the exit ``direction`` from one room to another."""
        if not direction or from_id not in self.rooms or to_id not in self.rooms:
            return False
        self.connections[from_id][direction] = to_id
        return True

    def destination_of(self, room_id: str, direction: str) -> str | None:
        return self.connections.get(room_id, {}).get(direction)

    def directions_from(self, room_id: str) -> list[str]:
        return list(self.connections.get(room_id, {}))
