"""Menu catalog port (abstract interface).

The ordering core never owns menu data. It asks the catalog whether menu
items exist and what they cost right now; restaurants, categories and menu
management live behind this interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class MenuItem:
    """A priced menu entry as seen by the ordering core."""

    id: str
    price: float
    name: str = ""


class MenuCatalog(ABC):
    """Read-only lookup of menu items by identifier."""

    @abstractmethod
    def find_by_id(self, item_id: str) -> MenuItem | None:
        """Return the menu item, or None when it does not exist."""
        ...

    @abstractmethod
    def find_many_by_id(self, item_ids: Iterable[str]) -> list[MenuItem]:
        """Return the subset of ``item_ids`` that exist, in a single lookup."""
        ...

    def prices_for(self, item_ids: Iterable[str]) -> dict[str, float]:
        """Map each existing item id to its current price."""
        return {item.id: item.price for item in self.find_many_by_id(item_ids)}
