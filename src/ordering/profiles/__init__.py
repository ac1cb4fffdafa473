"""Profile directory factory, mirroring ``ordering.catalog``."""

from ordering.profiles.port import ProfileDirectory

_current_directory: ProfileDirectory | None = None


def get_profiles() -> ProfileDirectory:
    """Return the current profile directory. Defaults to InMemoryProfileDirectory."""
    global _current_directory
    if _current_directory is None:
        from ordering.profiles.memory_adapter import InMemoryProfileDirectory

        _current_directory = InMemoryProfileDirectory()
    return _current_directory


def set_profiles(directory: ProfileDirectory) -> None:
    global _current_directory
    _current_directory = directory


def reset_profiles() -> None:
    global _current_directory
    _current_directory = None


__all__ = ["ProfileDirectory", "get_profiles", "reset_profiles", "set_profiles"]
