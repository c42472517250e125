"""
Exceptions raised by contentmodel.

Persistence failures are *not* exceptions: the store's own failure value
(``None``/``False``) is handed back to the caller untouched.
"""


class ContentModelError(Exception):
    """Base class for contentmodel errors."""


class UnsupportedFinderError(ContentModelError, AttributeError):
    """A dynamic ``find…By…`` name could not be parsed."""

    def __init__(self, model: str, name: str):
        super().__init__(f"{model} has no attribute or finder named {name!r}")
        self.model = model
        self.name = name


class StoreNotConfiguredError(ContentModelError, RuntimeError):
    """An instance tried to persist itself without a bound store."""
