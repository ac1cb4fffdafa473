"""User profile port — the delivery address fallback used at checkout."""

from abc import ABC, abstractmethod


class ProfileDirectory(ABC):
    @abstractmethod
    def get_address(self, owner_id: str) -> str | None:
        """Return the owner's saved address, or None when there is none."""
        ...
