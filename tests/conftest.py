"""Shared test fixtures for Dungeon Explorer."""

import pytest

from dungeon.app import _get_data_path
from dungeon.engine.loader import load_world
from dungeon.engine.state import GameState, new_game_state
from dungeon.engine.world import GameMap, Room


class ScriptedRandom:
    """Deterministic stand-in for random.Random.

    ``randint`` returns queued ints in order, then falls back to the upper
    bound (no goblin misses, no troll criticals, top variation).
    ``random`` returns queued floats, then 0.99 (every flee fails).
    """

    def __init__(self, ints: list[int] | None = None, floats: list[float] | None = None):
        self.ints = list(ints or [])
        self.floats = list(floats or [])

    def randint(self, a: int, b: int) -> int:
        if self.ints:
            value = self.ints.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return b

    def random(self) -> float:
        if self.floats:
            return self.floats.pop(0)
        return 0.99


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def world() -> GameMap:
    return load_world(_get_data_path())


@pytest.fixture
def state(world: GameMap, rng: ScriptedRandom) -> GameState:
    return new_game_state(world, player_name="Tester", rng=rng)


@pytest.fixture
def small_map() -> GameMap:
    """Three rooms in a row; the last one is locked with code 'gold'."""
    game_map = GameMap()
    game_map.add_room("a", Room("Room A"))
    game_map.add_room("b", Room("Room B"))
    game_map.add_room("c", Room("Room C", locked=True, unlock_code="gold"))
    game_map.connect("a", "east", "b")
    game_map.connect("b", "west", "a")
    game_map.connect("b", "north", "c")
    return game_map
