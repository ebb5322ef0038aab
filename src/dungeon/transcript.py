"""Plain-text copy of everything shown on the console during one run."""

import datetime as dt
from pathlib import Path
from typing import TextIO


def transcript_path(directory: Path, now: dt.datetime | None = None) -> Path:
    """Timestamped file name, e.g. ``dungeon_2024-05-01_13-45-10.txt``."""
    now = now or dt.datetime.now()
    return directory / f"dungeon_{now:%Y-%m-%d}_{now:%H-%M-%S}.txt"


class Transcript:
    """Mirror of console output, written once per run."""

    def __init__(self, path: Path):
        self.path = path
        self._file: TextIO | None = None

    def open(self) -> "Transcript":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", encoding="utf-8")
        self._file.write(f"Dungeon Explorer transcript - {dt.datetime.now():%c}\n")
        self._file.write("=" * 40 + "\n")
        self._file.flush()
        return self

    def write(self, text: str) -> None:
        if self._file is None:
            return
        self._file.write(text + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is None:
            return
        self._file.write(f"\nSession ended at {dt.datetime.now():%c}\n")
        self._file.close()
        self._file = None

    def __enter__(self) -> "Transcript":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
