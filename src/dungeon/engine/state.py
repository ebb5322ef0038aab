"""Mutable per-game state.

One GameState is one play-through: the player, the dungeon it is mutating,
where the player stands and who they are fighting. Nothing here is global,
so any number of games can run side by side.
"""

import random
from dataclasses import dataclass, field
from enum import StrEnum

from .combat import RandomSource
from .creatures import PLAYER_BASE_HEALTH, Monster, Player, new_player
from .stats import Statistics
from .world import GameMap, Room

START_ROOM = "entrance"

# Fleeing goes through this exit of the current room.
BACK_DIRECTION = "back"


class Phase(StrEnum):
    EXPLORING = "exploring"
    IN_COMBAT = "in_combat"
    ENDED = "ended"


class EndReason(StrEnum):
    QUIT = "quit"
    PLAYER_DIED = "player_died"


@dataclass
class GameState:
    """All mutable per-game state."""

    player: Player
    world: GameMap
    current_room: str = START_ROOM

    # Position of the current enemy in the current room's monster list.
    enemy_index: int | None = None
    end_reason: EndReason | None = None

    turns: int = 0
    visited_rooms: set[str] = field(default_factory=set)
    statistics: Statistics = field(default_factory=Statistics)
    rng: RandomSource = field(default_factory=random.Random)

    @property
    def in_combat(self) -> bool:
        return self.enemy_index is not None

    @property
    def is_finished(self) -> bool:
        return self.end_reason is not None

    @property
    def phase(self) -> Phase:
        if self.is_finished:
            return Phase.ENDED
        if self.in_combat:
            return Phase.IN_COMBAT
        return Phase.EXPLORING

    @property
    def room(self) -> Room | None:
        return self.world.room(self.current_room)

    @property
    def enemy(self) -> Monster | None:
        room = self.room
        if self.enemy_index is None or room is None:
            return None
        return room.monsters[self.enemy_index]


def new_game_state(
    world: GameMap,
    player_name: str = "Adventurer",
    health: int = PLAYER_BASE_HEALTH,
    start_room: str = START_ROOM,
    rng: RandomSource | None = None,
    statistics: Statistics | None = None,
) -> GameState:
    """Create a fresh game with the player standing in ``start_room``."""
    if world.room(start_room) is None:
        raise ValueError(f"Unknown start room: {start_room!r}")

    state = GameState(
        player=new_player(player_name, health),
        world=world,
        current_room=start_room,
        rng=rng if rng is not None else random.Random(),
        statistics=statistics if statistics is not None else Statistics(),
    )
    state.visited_rooms.add(start_room)
    state.statistics.record_room_explored()
    return state
