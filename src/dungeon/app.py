"""Application factory and console loop for Dungeon Explorer."""

import random
from collections.abc import Callable
from importlib import resources
from pathlib import Path

from .config import Config
from .engine.loader import load_world
from .logging import bind_game_context, get_logger
from .session import DungeonSession
from .transcript import Transcript, transcript_path

logger = get_logger(__name__)

DEFAULT_PLAYER_NAME = "Adventurer"
PROMPT = "\n> "


def _get_data_path() -> Path:
    """Locate dungeon.toml via importlib.resources (works when installed)."""
    return resources.files("dungeon.data").joinpath("dungeon.toml")


def create_session(
    config: Config | None = None, player_name: str | None = None
) -> DungeonSession:
    """Load the dungeon and start a new game."""
    config = config or Config.from_env()

    data_path = config.data_file or _get_data_path()
    world = load_world(data_path)
    logger.info("world_loaded", rooms=len(world), source=str(data_path))

    rng = random.Random(config.seed)
    bind_game_context(seed=config.seed)

    session = DungeonSession.start(
        world,
        player_name=player_name or config.player_name or DEFAULT_PLAYER_NAME,
        health=config.player_health,
        start_room=config.start_room,
        rng=rng,
    )

    # A failed start leaves no transcript behind.
    if config.transcript_dir:
        path = transcript_path(config.transcript_dir)
        session.transcript = Transcript(path).open()
        logger.info("transcript_opened", path=str(session.transcript.path))
    return session


def run_console(
    session: DungeonSession,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Read commands until the game ends. End of input counts as exit."""
    write(session.intro())
    while not session.is_finished:
        try:
            raw_input = read(PROMPT)
        except EOFError:
            raw_input = "exit"
        write(session.process_command(raw_input))
