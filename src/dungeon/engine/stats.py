"""Play statistics.

A write-only accumulator from the game's point of view: commands record
events, and only the ``stats`` command and the end-of-game report read it.
"""

import datetime as dt
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


@dataclass
class Statistics:
    clock: Callable[[], dt.datetime] = field(default=_utcnow, repr=False)

    monsters_defeated: int = 0
    monsters_by_kind: Counter[str] = field(default_factory=Counter)
    rooms_explored: int = 0
    items_collected: int = 0
    items_by_kind: Counter[str] = field(default_factory=Counter)
    damage_dealt: int = 0
    damage_taken: int = 0
    highest_hit: int = 0
    critical_hits: int = 0
    potions_used: int = 0
    deaths: int = 0

    # Time accumulated by finished start/stop cycles.
    total_play_time: dt.timedelta = dt.timedelta()
    _started_at: dt.datetime | None = field(default=None, repr=False)

    def reset(self) -> None:
        self.monsters_defeated = 0
        self.monsters_by_kind = Counter()
        self.rooms_explored = 0
        self.items_collected = 0
        self.items_by_kind = Counter()
        self.damage_dealt = 0
        self.damage_taken = 0
        self.highest_hit = 0
        self.critical_hits = 0
        self.potions_used = 0
        self.deaths = 0
        self.total_play_time = dt.timedelta()
        if self._started_at is not None:
            self._started_at = self.clock()

    @property
    def is_tracking_time(self) -> bool:
        return self._started_at is not None

    def start_time_tracking(self) -> None:
        if self._started_at is None:
            self._started_at = self.clock()

    def stop_time_tracking(self) -> None:
        if self._started_at is not None:
            self.total_play_time += self.clock() - self._started_at
            self._started_at = None

    @property
    def play_time(self) -> dt.timedelta:
        """Accumulated time, including the segment still running."""
        if self._started_at is None:
            return self.total_play_time
        return self.total_play_time + (self.clock() - self._started_at)

    def record_monster_defeated(self, kind: str) -> None:
        self.monsters_defeated += 1
        self.monsters_by_kind[kind] += 1

    def record_room_explored(self) -> None:
        self.rooms_explored += 1

    def record_item_collected(self, kind: str) -> None:
        self.items_collected += 1
        self.items_by_kind[kind] += 1

    def record_damage_dealt(self, damage: int, critical: bool = False) -> None:
        self.damage_dealt += damage
        self.highest_hit = max(self.highest_hit, damage)
        if critical:
            self.critical_hits += 1

    def record_damage_taken(self, damage: int) -> None:
        self.damage_taken += damage

    def record_potion_used(self) -> None:
        self.potions_used += 1

    def record_player_death(self) -> None:
        self.deaths += 1

    def report(self) -> str:
        seconds = int(self.play_time.total_seconds())
        hours, rest = divmod(seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        lines = [
            "=== PLAYER STATISTICS ===",
            "",
            f"Play Time: {hours:02d}:{minutes:02d}:{seconds:02d}",
            f"Monsters Defeated: {self.monsters_defeated}",
            f"Rooms Explored: {self.rooms_explored}",
            f"Items Collected: {self.items_collected}",
            f"Total Damage Dealt: {self.damage_dealt}",
            f"Total Damage Taken: {self.damage_taken}",
            f"Potions Used: {self.potions_used}",
            f"Highest Damage Dealt: {self.highest_hit}",
            f"Critical Hits: {self.critical_hits}",
            f"Deaths: {self.deaths}",
            "",
            "=== MONSTERS DEFEATED ===",
        ]
        lines += [f"{kind}: {n}" for kind, n in self.monsters_by_kind.items()]
        lines += ["", "=== ITEMS COLLECTED ==="]
        lines += [f"{kind}: {n}" for kind, n in self.items_by_kind.items()]
        return "\n".join(lines)
