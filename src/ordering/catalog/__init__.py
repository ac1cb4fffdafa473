"""Menu catalog factory.

Provides get_catalog() / set_catalog() to swap implementations; the
in-memory catalog is the default for development and tests.
"""

from ordering.catalog.port import MenuCatalog, MenuItem

_current_catalog: MenuCatalog | None = None


def get_catalog() -> MenuCatalog:
    """Return the current menu catalog. Defaults to InMemoryMenuCatalog."""
    global _current_catalog
    if _current_catalog is None:
        # Imported here: the domain traverses the adapter module on init
        from ordering.catalog.memory_adapter import InMemoryMenuCatalog

        _current_catalog = InMemoryMenuCatalog()
    return _current_catalog


def set_catalog(catalog: MenuCatalog) -> None:
    """Override the active menu catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the default catalog."""
    global _current_catalog
    _current_catalog = None


__all__ = ["MenuCatalog", "MenuItem", "get_catalog", "reset_catalog", "set_catalog"]
