"""Stockroom-specific failures.

Field-level validation failures use ``protean.exceptions.ValidationError`` and
missing entities use ``protean.exceptions.ObjectNotFoundError``; the classes
below cover the remaining cases.
"""


class StockroomError(Exception):
    """Base class for errors raised by the stockroom context."""

    def __init__(self, messages, **kwargs):
        self.messages = messages
        super().__init__(messages, **kwargs)


class ConflictError(StockroomError):
    """A write collided with a storage-level uniqueness rule."""


class DuplicateCategoryName(ConflictError):
    def __init__(self, name):
        super().__init__({"name": [f"A category named '{name}' already exists"]})
        self.name = name


class OperationCancelled(StockroomError):
    """The caller abandoned the request before it finished."""


class CurrencyMismatchError(StockroomError):
    """Arithmetic was attempted between amounts in different currencies."""


class InsufficientStockError(StockroomError):
    """A stock decrement would leave a negative quantity."""
