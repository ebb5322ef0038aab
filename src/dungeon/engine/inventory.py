"""The player's ordered bag of items."""

from collections.abc import Iterator

from .items import Item, ItemKind


class Inventory:
    """Items in pickup order. Same-named items may coexist."""

    def __init__(self, items: list[Item] | None = None):
        self._items: list[Item] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    def add(self, item: Item) -> None:
        self._items.append(item)

    def remove(self, item: Item) -> bool:
        """Remove this exact item object."""
        for i, held in enumerate(self._items):
            if held is item:
                del self._items[i]
                return True
        return False

    def find(self, name: str) -> Item | None:
        """First item whose name matches, ignoring case."""
        wanted = name.strip().lower()
        for item in self._items:
            if item.name.lower() == wanted:
                return item
        return None

    def remove_by_name(self, name: str) -> bool:
        item = self.find(name)
        if item is None:
            return False
        return self.remove(item)

    def of_kind(self, *kinds: ItemKind) -> list[Item]:
        return [item for item in self._items if item.kind in kinds]

    def sort_by_name(self) -> None:
        # Ordinal, case-sensitive; sorted() is stable for equal names.
        self._items = sorted(self._items, key=lambda item: item.name)

    def list_items(self) -> str:
        if not self._items:
            return "No items"
        return ", ".join(item.name for item in self._items)

    def list_details(self) -> str:
        if not self._items:
            return "No items"
        return "\n".join(item.details() for item in self._items)
