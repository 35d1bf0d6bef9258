"""Query evaluation.

A query is a mapping of field name to one of:

- a ``Matcher``: the record's field value must satisfy it
- a structured value (a dict keyed by strings): a nested query, matched
  recursively against the record's field, which must not be None
- anything else: the record's field must be strictly equal to it

Fields not named in the query are ignored, so an empty query matches every
record.

Example:
    from recordstore.query import filter_by
    from recordstore.matching import greater_than

    adults = filter_by({'age': greater_than(17)}, *people)
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from .codec import is_structured, strict_equals
from .matching.protocols import Matcher

Query = Dict[str, Any]


def get_field(record: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute from any other object.

    Returns None when the field is missing.
    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def matches(query: Query, record: Any) -> bool:
    """Return True if record satisfies every field of query.

    Args:
        query: Mapping of field names to literals, nested queries or matchers.
        record: A mapping or plain object to test.
    """
    for name, expected in query.items():
        actual = get_field(record, name)
        if isinstance(expected, Matcher):
            if not expected.is_match(actual):
                return False
        elif is_structured(expected):
            if actual is None or not matches(expected, actual):
                return False
        elif not strict_equals(expected, actual):
            return False
    return True


def filter_by(query: Optional[Query], *records: Any) -> List[Any]:
    """Filter records by query without storing them anywhere.

    Useful where no uniqueness constraint applies or for objects the store
    is not meant to hold, such as class instances. The original objects are
    returned, not copies.

    Args:
        query: The query to apply, or None to keep every record.
        *records: Mappings or objects to filter.

    Returns:
        The records matching query, in their original order.
    """
    if query is None:
        return list(records)
    return [r for r in records if matches(query, r)]
