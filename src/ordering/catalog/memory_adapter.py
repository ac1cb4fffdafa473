"""In-memory menu catalog for development and testing.

Menu items are registered at runtime with ``add()``; ``set_price()`` and
``remove()`` simulate edits made by restaurant administrators while carts and
orders are live. Every batch lookup is recorded in ``lookups``.
"""

from collections.abc import Iterable

from ordering.catalog.port import MenuCatalog, MenuItem


class InMemoryMenuCatalog(MenuCatalog):
    def __init__(self) -> None:
        self._items: dict[str, MenuItem] = {}
        self.lookups: list[list[str]] = []

    def add(self, item_id: str, price: float, name: str = "") -> MenuItem:
        item = MenuItem(id=str(item_id), price=float(price), name=name)
        self._items[item.id] = item
        return item

    def set_price(self, item_id: str, price: float) -> None:
        current = self._items[str(item_id)]
        self._items[current.id] = MenuItem(id=current.id, price=float(price), name=current.name)

    def remove(self, item_id: str) -> None:
        self._items.pop(str(item_id), None)

    def find_by_id(self, item_id: str) -> MenuItem | None:
        return self._items.get(str(item_id))

    def find_many_by_id(self, item_ids: Iterable[str]) -> list[MenuItem]:
        requested = [str(item_id) for item_id in item_ids]
        self.lookups.append(requested)
        return [self._items[item_id] for item_id in requested if item_id in self._items]
