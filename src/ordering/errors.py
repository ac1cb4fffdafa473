"""Domain exceptions that Protean's own taxonomy does not name.

``ValidationError`` (invalid argument) and ``ObjectNotFoundError`` (not found)
come straight from Protean; the classes here add the ownership and
state-machine failures, and a not-found error that carries the missing ids.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError


class InvalidStateError(InvalidOperationError):
    """The operation is not allowed in the aggregate's current state."""


class ForbiddenError(InvalidOperationError):
    """The caller does not own the resource it is acting on."""


class MenuItemsNotFound(ObjectNotFoundError):
    """One or more menu items are absent from the catalog."""

    def __init__(self, missing_ids):
        self.missing = [str(item_id) for item_id in missing_ids]
        super().__init__({"menu_item_id": [f"Menu items not found: {', '.join(self.missing)}"]})
