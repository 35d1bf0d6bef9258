"""Value matchers used in place of literals inside queries.

Each matcher is an immutable predicate with a single ``is_match(actual)``
operation:

- between(min, max), greater_than(min), less_than(max): numeric ranges,
  falling back to string length or collection size
- containing(expected): substring, membership or nested containment
- matching(pattern): regular expression search
- starting_with(start), ending_with(end): prefix/suffix or first/last element
- having_value(): any value except None
- not_(matcher): negation

Example:
    from recordstore.matching import between, containing

    store.select({'age': between(18, 30), 'tags': containing('admin')})
"""

from .protocols import Matcher
from .matchers import (
    Between,
    GreaterThan,
    LessThan,
    Containing,
    Matching,
    StartingWith,
    EndingWith,
    HavingValue,
    Not,
    between,
    greater_than,
    less_than,
    containing,
    matching,
    starting_with,
    ending_with,
    having_value,
    not_,
)

__all__ = [
    # Base
    'Matcher',
    # Matcher types
    'Between',
    'GreaterThan',
    'LessThan',
    'Containing',
    'Matching',
    'StartingWith',
    'EndingWith',
    'HavingValue',
    'Not',
    # Factories
    'between',
    'greater_than',
    'less_than',
    'containing',
    'matching',
    'starting_with',
    'ending_with',
    'having_value',
    'not_',
]
