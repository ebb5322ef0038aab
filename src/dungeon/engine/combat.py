"""Per-attack damage formulas.

Every function here is stateless: the caller passes the attacker's numbers
and the random source, and gets back a Hit. Passing a seeded
``random.Random`` (or any object with ``randint`` and ``random``) makes a
fight fully reproducible.
"""

from dataclasses import dataclass
from typing import Protocol

PLAYER_VARIATION = 2
MONSTER_VARIATION = 1
GOBLIN_MISS_ODDS = 4  # 1 in 4
TROLL_CRIT_ODDS = 3  # 1 in 3
DRAGON_BONUS = (3, 8)

FLEE_CHANCE = 0.5


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...


@dataclass(frozen=True)
class Hit:
    """The outcome of a single attack."""

    damage: int
    critical: bool = False

    @property
    def missed(self) -> bool:
        return self.damage == 0


def player_hit(attack_power: int, rng: RandomSource) -> Hit:
    """Attack power plus or minus two, never below one.

    Rolling the top of the range counts as a critical hit.
    """
    variation = rng.randint(-PLAYER_VARIATION, PLAYER_VARIATION)
    return Hit(
        damage=max(1, attack_power + variation),
        critical=variation == PLAYER_VARIATION,
    )


def _standard_monster_hit(attack_power: int, rng: RandomSource) -> Hit:
    variation = rng.randint(-MONSTER_VARIATION, MONSTER_VARIATION)
    return Hit(damage=max(1, attack_power + variation))


def monster_hit(kind: str, attack_power: int, rng: RandomSource) -> Hit:
    """Damage for one monster attack, by monster kind."""
    match kind.lower():
        case "goblin":
            if rng.randint(1, GOBLIN_MISS_ODDS) == 1:
                return Hit(damage=0)
        case "troll":
            if rng.randint(1, TROLL_CRIT_ODDS) == 1:
                return Hit(damage=attack_power * 2, critical=True)
        case "dragon":
            low, high = DRAGON_BONUS
            return Hit(damage=attack_power + rng.randint(low, high))
    return _standard_monster_hit(attack_power, rng)


def flee_succeeds(rng: RandomSource) -> bool:
    return rng.random() < FLEE_CHANCE
