"""Players and monsters.

Both share health bookkeeping; each computes its attack differently (see
``combat``).
"""

from dataclasses import dataclass, field

from .combat import Hit, RandomSource, monster_hit, player_hit
from .inventory import Inventory
from .items import Item, ItemKind

PLAYER_BASE_ATTACK = 10
PLAYER_BASE_HEALTH = 100


@dataclass(eq=False)
class Creature:
    name: str
    health: int
    attack_power: int
    max_health: int = 0

    def __post_init__(self) -> None:
        if not self.max_health:
            self.max_health = self.health

    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, damage: int) -> None:
        if damage > 0:
            self.health = max(0, self.health - damage)

    def heal(self, amount: int) -> int:
        """Restore health up to the maximum. Returns the amount restored."""
        if amount <= 0 or not self.is_alive():
            return 0
        before = self.health
        self.health = min(self.max_health, self.health + amount)
        return self.health - before

    def roll(self, rng: RandomSource) -> Hit:
        raise NotImplementedError

    def attack(self, rng: RandomSource) -> int:
        return self.roll(rng).damage

    def describe(self) -> str:
        raise NotImplementedError


@dataclass(eq=False)
class Player(Creature):
    attack_power: int = PLAYER_BASE_ATTACK
    inventory: Inventory = field(default_factory=Inventory)

    def roll(self, rng: RandomSource) -> Hit:
        return player_hit(self.attack_power, rng)

    def describe(self) -> str:
        return (
            f"{self.name} - Health: {self.health}/{self.max_health}"
            f" - Attack: {self.attack_power}"
        )

    def pick_up(self, item: Item) -> bool:
        """Add item to the inventory. Returns True if it was equipped.

        A weapon is equipped only when it hits strictly harder than the
        current attack power, so picking things up never weakens the player.
        """
        self.inventory.add(item)
        if item.is_weapon and item.damage > self.attack_power:
            self.attack_power = item.damage
            return True
        return False

    def use_item(self, item: Item) -> bool:
        """Apply an item from the inventory. Returns False if it has no use."""
        match item.kind:
            case ItemKind.POTION:
                self.heal(item.heal_amount)
                self.inventory.remove(item)
                return True
            case ItemKind.TORCH:
                return True
            case _:
                return False

    def inventory_contents(self) -> str:
        return self.inventory.list_items()


@dataclass(eq=False)
class Monster(Creature):
    kind: str = "beast"
    dropped_item: Item | None = None

    def roll(self, rng: RandomSource) -> Hit:
        return monster_hit(self.kind, self.attack_power, rng)

    def describe(self) -> str:
        return (
            f"{self.name} ({self.kind}) - Health: {self.health}"
            f" - Attack: {self.attack_power}"
        )


def new_player(name: str, health: int = PLAYER_BASE_HEALTH) -> Player:
    return Player(name=name, health=health)


def goblin(name: str, dropped_item: Item | None = None) -> Monster:
    return Monster(name, 15, 5, kind="Goblin", dropped_item=dropped_item)


def troll(name: str, dropped_item: Item | None = None) -> Monster:
    return Monster(name, 30, 8, kind="Troll", dropped_item=dropped_item)


def dragon(name: str, dropped_item: Item | None = None) -> Monster:
    return Monster(name, 100, 12, kind="Dragon", dropped_item=dropped_item)
