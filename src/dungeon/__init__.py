"""Dungeon Explorer: a turn-based text dungeon crawl."""

from .app import create_session, run_console
from .config import Config
from .logging import configure_logging, get_logger

__all__ = ["main", "create_session", "run_console", "Config"]


def _ask_name() -> str | None:
    try:
        return input("Enter your name: ").strip() or None
    except EOFError:
        return None


def main() -> None:
    """Entry point for the console game."""
    logger = get_logger(__name__)

    try:
        config = Config.from_env()
        configure_logging(
            log_level=config.log_level,
            log_file=config.log_file,
            json_logs=config.json_logs,
        )
        logger.info(
            "application_starting",
            seed=config.seed,
            data_file=str(config.data_file) if config.data_file else None,
            log_level=config.log_level,
        )

        player_name = config.player_name or _ask_name()
        session = create_session(config, player_name)
        try:
            run_console(session)
        finally:
            session.close()
    except KeyboardInterrupt:
        print("\nGoodbye!")
    except Exception as exc:
        logger.exception("application_failed")
        print(f"An error occurred: {exc}")

    try:
        input("Press Enter to exit...")
    except EOFError:
        pass
