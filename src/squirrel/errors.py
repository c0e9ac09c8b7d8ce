"""Exception types raised by the squirrel cache."""


class SquirrelError(Exception):
    """Base class for every error the cache raises."""


class ConfigurationError(SquirrelError, ValueError):
    """Raised at construction time for a missing cache dir or an invalid TTL."""


class PersistenceError(SquirrelError, RuntimeError):
    """Raised when an item cannot be saved, read back, or unserialized."""

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key
