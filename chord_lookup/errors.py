"""Exceptions raised by chord-lookup."""


class LoadError(ValueError):
    """A chord dataset entry could not be parsed, or the store ended up empty."""


class InvalidQuery(ValueError):
    """A query string is empty or blank."""


class IndexCorruptedError(RuntimeError):
    """A store index no longer agrees with itself."""
