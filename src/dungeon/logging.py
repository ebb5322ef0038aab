"""Logging configuration for Dungeon Explorer.

Game text goes to stdout; diagnostics go to stderr or a log file so the two
never interleave on the player's screen.
"""

import sys
from pathlib import Path
from typing import Any

import structlog


def _level_to_int(level: str) -> int:
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 30)


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path | None = None,
    json_logs: bool = False,
) -> None:
    """Configure structured logging for the application."""
    if log_file:
        output_stream = open(log_file, "a")
    else:
        output_stream = sys.stderr

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
    ]

    if json_logs:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=output_stream.isatty())
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output_stream),
        cache_logger_on_first_use=True,
    )


def bind_game_context(**values: Any) -> None:
    """Attach values (player, seed, ...) to every later log line."""
    structlog.contextvars.bind_contextvars(**values)


def clear_game_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
