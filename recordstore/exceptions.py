"""Exceptions raised by recordstore.

Soft failures (a duplicate ``add``, a query matching nothing) are reported
through return values. Exceptions are reserved for usage errors.
"""


class RecordStoreError(Exception):
    """Base class for recordstore errors."""
    pass


class InvalidIndexKeyError(RecordStoreError, ValueError):
    """An index key could not be parsed back into index field values."""
    pass


class UnencodableValueError(RecordStoreError, TypeError):
    """A value has no canonical encoding."""
    pass


class StoreConfigError(RecordStoreError):
    """Error parsing or validating a store definition."""
    pass
