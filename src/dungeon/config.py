"""Configuration for Dungeon Explorer."""

import os
from dataclasses import dataclass
from pathlib import Path

from .engine.creatures import PLAYER_BASE_HEALTH
from .engine.state import START_ROOM


@dataclass
class Config:
    """Application configuration."""

    player_name: str | None = None
    player_health: int = PLAYER_BASE_HEALTH
    start_room: str = START_ROOM
    seed: int | None = None
    data_file: Path | None = None
    transcript_dir: Path | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        seed = os.getenv("DUNGEON_SEED")
        data_file = os.getenv("DUNGEON_DATA_FILE")
        transcript_dir = os.getenv("DUNGEON_TRANSCRIPT_DIR")
        log_file = os.getenv("DUNGEON_LOG_FILE")

        return cls(
            player_name=os.getenv("DUNGEON_PLAYER_NAME") or None,
            player_health=int(
                os.getenv("DUNGEON_PLAYER_HEALTH", str(cls.player_health))
            ),
            start_room=os.getenv("DUNGEON_START_ROOM", cls.start_room),
            seed=int(seed) if seed else None,
            data_file=Path(data_file) if data_file else None,
            transcript_dir=Path(transcript_dir) if transcript_dir else None,
            log_level=os.getenv("DUNGEON_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("DUNGEON_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
        )
