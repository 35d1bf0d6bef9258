"""Base abstraction for value matchers.

A matcher stands in for a literal value inside a query. The query evaluator
recognises matchers by type and hands them the record's actual field value
instead of comparing for equality.
"""

from abc import ABC, abstractmethod
from typing import Any


class Matcher(ABC):
    """Immutable predicate evaluated against a single field value.

    Implementations must be total: ``is_match`` returns a bool for any
    input and never raises. ``None`` is treated as "no value" and, unless
    the matcher is specifically about presence, does not match.
    """

    @abstractmethod
    def is_match(self, actual: Any) -> bool:
        """Return True if actual satisfies this matcher.

        Args:
            actual: The record's value for the queried field, or None
                if the record has no such field.
        """
        pass
