"""Session layer bridging the game engine and the console."""

from .engine.combat import RandomSource
from .engine.commands import (
    HELP_TEXT,
    get_exits,
    get_room_description,
    handle_command,
)
from .engine.state import GameState, new_game_state
from .engine.world import GameMap
from .logging import bind_game_context, clear_game_context, get_logger
from .transcript import Transcript

logger = get_logger(__name__)


class DungeonSession:
    """Wraps one GameState plus the optional transcript of the run."""

    def __init__(self, state: GameState, transcript: Transcript | None = None):
        self.state = state
        self.transcript = transcript

    @classmethod
    def start(
        cls,
        world: GameMap,
        player_name: str,
        health: int,
        start_room: str,
        rng: RandomSource | None = None,
        transcript: Transcript | None = None,
    ) -> "DungeonSession":
        """Create a fresh game and start the play clock."""
        state = new_game_state(
            world,
            player_name=player_name,
            health=health,
            start_room=start_room,
            rng=rng,
        )
        state.statistics.start_time_tracking()
        bind_game_context(player=player_name)
        logger.info("game_started", room=start_room, rooms=len(world))
        return cls(state, transcript)

    @property
    def is_finished(self) -> bool:
        return self.state.is_finished

    def emit(self, text: str) -> str:
        """Record text in the transcript and hand it back for display."""
        if self.transcript is not None:
            self.transcript.write(text)
        return text

    def intro(self) -> str:
        name = self.state.player.name
        text = "\n\n".join(
            [
                "Welcome to Dungeon Explorer!",
                f"Welcome, {name}! Your adventure begins at the dungeon entrance...",
                get_room_description(self.state),
                HELP_TEXT,
            ]
        )
        return self.emit(text)

    def process_command(self, raw_input: str) -> str:
        """Delegate to the engine and return response text."""
        if self.transcript is not None:
            self.transcript.write(f"> {raw_input}")
        return self.emit(handle_command(self.state, raw_input))

    def get_room_description(self) -> str:
        return get_room_description(self.state)

    def get_exits(self) -> list[str]:
        return get_exits(self.state)

    def close(self) -> None:
        """Stop the clock and release the transcript."""
        self.state.statistics.stop_time_tracking()
        if self.transcript is not None:
            self.transcript.close()
        logger.info(
            "game_closed",
            turns=self.state.turns,
            end_reason=self.state.end_reason,
        )
        clear_game_context()
