"""Immutable item values.

An item is created once and then only moves between containers (a room's
item list or a player's inventory). The kind decides which of the optional
fields are meaningful.
"""

from dataclasses import dataclass
from enum import StrEnum

# Torches double as a weak weapon.
TORCH_DAMAGE = 3


class ItemKind(StrEnum):
    GENERIC = "generic"
    WEAPON = "weapon"
    POTION = "potion"
    KEY = "key"
    TORCH = "torch"


@dataclass(frozen=True)
class Item:
    """A collectible thing."""

    name: str
    description: str
    kind: ItemKind = ItemKind.GENERIC
    damage: int = 0
    heal_amount: int = 0
    unlock_code: str | None = None
    burn_time: int = 0

    @property
    def is_weapon(self) -> bool:
        """Weapons and torches can be wielded."""
        return self.kind in (ItemKind.WEAPON, ItemKind.TORCH)

    def details(self) -> str:
        """One-line description including the kind-specific numbers."""
        base = f"{self.name}: {self.description}"
        match self.kind:
            case ItemKind.WEAPON:
                return f"{base} (Damage: {self.damage})"
            case ItemKind.POTION:
                return f"{base} (Heals: {self.heal_amount})"
            case ItemKind.KEY:
                return f"{base} (Key for: {self.unlock_code})"
            case ItemKind.TORCH:
                return (
                    f"{base} (Damage: {self.damage}, "
                    f"Burn Time: {self.burn_time} minutes)"
                )
            case _:
                return base


def weapon(name: str, description: str, damage: int) -> Item:
    return Item(name, description, ItemKind.WEAPON, damage=damage)


def potion(name: str, description: str, heal_amount: int) -> Item:
    return Item(name, description, ItemKind.POTION, heal_amount=heal_amount)


def key(name: str, description: str, unlock_code: str) -> Item:
    return Item(name, description, ItemKind.KEY, unlock_code=unlock_code)


def torch(
    name: str, description: str, burn_time: int, damage: int = TORCH_DAMAGE
) -> Item:
    return Item(
        name, description, ItemKind.TORCH, damage=damage, burn_time=burn_time
    )
