from ordering.profiles.port import ProfileDirectory


class InMemoryProfileDirectory(ProfileDirectory):
    """Saved addresses keyed by owner id."""

    def __init__(self) -> None:
        self._addresses: dict[str, str] = {}

    def set_address(self, owner_id: str, address: str | None) -> None:
        if address is None:
            self._addresses.pop(str(owner_id), None)
        else:
            self._addresses[str(owner_id)] = address

    def get_address(self, owner_id: str) -> str | None:
        return self._addresses.get(str(owner_id))
