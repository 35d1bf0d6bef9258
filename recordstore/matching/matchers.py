"""Concrete value matchers.

The matcher set is fixed:

- Between / GreaterThan / LessThan: numeric comparison with a coercion
  ladder (number, numeric string, bool -> 0/1, then string length, then
  collection size)
- Containing: substring, membership or nested-value containment
- Matching: regular expression search
- StartingWith / EndingWith: text prefix/suffix or first/last element
- HavingValue: presence test
- Not: negation of another matcher

Example:
    from recordstore.matching import between, not_, matching

    store.select({'age': between(18, 65), 'name': not_(matching('^admin'))})
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from ..codec import (
    items_of,
    is_map_like,
    is_number,
    is_scalar,
    is_sequence,
    is_set_like,
    is_structured,
    strict_equals,
    to_text,
)
from .protocols import Matcher

Number = Union[int, float]

INFINITY = math.inf


def _as_number(actual: Any) -> Optional[Number]:
    """Coerce actual to a number the way a numeric comparison would.

    Bools count as 0/1 and strings are parsed when they hold a number.
    Returns None when no numeric reading exists (including NaN).
    """
    if isinstance(actual, bool):
        return int(actual)
    if is_number(actual):
        return None if math.isnan(actual) else actual
    if isinstance(actual, str):
        try:
            number = float(actual)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def _is_collection(actual: Any) -> bool:
    return is_sequence(actual) or is_set_like(actual) or is_map_like(actual)


def _measure(actual: Any) -> Optional[Number]:
    """Return the value compared by range matchers, or None if unsupported."""
    number = _as_number(actual)
    if number is not None:
        return number
    if isinstance(actual, str) or _is_collection(actual):
        return len(actual)
    return None


def _includes(values: List[Any], expected: Any) -> bool:
    return any(strict_equals(v, expected) for v in values)


@dataclass(frozen=True)
class Between(Matcher):
    """Inclusive range check on the measured value of actual."""
    min: Number = -INFINITY
    max: Number = INFINITY

    def is_match(self, actual: Any) -> bool:
        if actual is None:
            return False
        measured = _measure(actual)
        return measured is not None and self.min <= measured <= self.max


@dataclass(frozen=True)
class GreaterThan(Matcher):
    """Strict lower bound on the measured value of actual."""
    min: Number = -INFINITY

    def is_match(self, actual: Any) -> bool:
        if actual is None:
            return False
        measured = _measure(actual)
        return measured is not None and self.min < measured


@dataclass(frozen=True)
class LessThan(Matcher):
    """Strict upper bound on the measured value of actual."""
    max: Number = INFINITY

    def is_match(self, actual: Any) -> bool:
        if actual is None:
            return False
        measured = _measure(actual)
        return measured is not None and measured < self.max


@dataclass(frozen=True)
class Containing(Matcher):
    """Check that actual contains expected.

    Rules, by the type of actual:
    - number (with a numeric expected): actual - expected >= 0
    - string: expected's text form is a substring; a sequence expected
      requires every element to be a substring
    - sequence, set or map-like: expected is an element (value); a sequence
      expected requires every element to be present
    - structured value: some field, at any depth, equals expected
    """
    expected: Any = ''

    def is_match(self, actual: Any) -> bool:
        expected = self.expected
        if actual is None:
            return False
        if is_number(actual) and is_number(expected):
            return actual - expected >= 0
        if isinstance(actual, str):
            if is_scalar(expected):
                return to_text(expected) in actual
            if is_sequence(expected):
                return all(to_text(e) in actual for e in expected)
            return False
        if _is_collection(actual):
            values = items_of(actual)
            if is_sequence(expected):
                return all(_includes(values, e) for e in expected)
            return _includes(values, expected)
        if is_structured(actual):
            return self._nested_contains(actual)
        return False

    def _nested_contains(self, value: Any) -> bool:
        for item in items_of(value):
            if strict_equals(item, self.expected):
                return True
            if (is_structured(item) or is_sequence(item)) and self._nested_contains(item):
                return True
        return False


@dataclass(frozen=True)
class Matching(Matcher):
    """Regular expression search on scalars; every element of collections."""
    pattern: re.Pattern = field(default_factory=lambda: re.compile('.*'))

    def __post_init__(self):
        if isinstance(self.pattern, str):
            object.__setattr__(self, 'pattern', re.compile(self.pattern))

    def is_match(self, actual: Any) -> bool:
        if actual is None:
            return False
        if is_scalar(actual):
            return self.pattern.search(to_text(actual)) is not None
        if _is_collection(actual):
            return all(self.is_match(a) for a in items_of(actual))
        return False


@dataclass(frozen=True)
class StartingWith(Matcher):
    """Text prefix for scalars; strict first-element equality for collections."""
    start: Any = ''

    def is_match(self, actual: Any) -> bool:
        if actual is None:
            return False
        if is_scalar(actual):
            return to_text(actual).startswith(to_text(self.start))
        if _is_collection(actual):
            values = items_of(actual)
            return len(values) > 0 and strict_equals(values[0], self.start)
        return False


@dataclass(frozen=True)
class EndingWith(Matcher):
    """Text suffix for scalars; strict last-element equality for collections."""
    end: Any = ''

    def is_match(self, actual: Any) -> bool:
        if actual is None:
            return False
        if is_scalar(actual):
            return to_text(actual).endswith(to_text(self.end))
        if _is_collection(actual):
            values = items_of(actual)
            return len(values) > 0 and strict_equals(values[-1], self.end)
        return False


@dataclass(frozen=True)
class HavingValue(Matcher):
    """Match any value other than None (0, False and '' included)."""

    def is_match(self, actual: Any) -> bool:
        return actual is not None


@dataclass(frozen=True)
class Not(Matcher):
    """Invert another matcher."""
    inner: Matcher

    def is_match(self, actual: Any) -> bool:
        return not self.inner.is_match(actual)


def between(min: Optional[Number] = None, max: Optional[Number] = None) -> Between:
    """Match values whose measure lies in [min, max] (open-ended when None)."""
    return Between(
        -INFINITY if min is None else min,
        INFINITY if max is None else max,
    )


def greater_than(min: Optional[Number] = None) -> GreaterThan:
    """Match values whose measure is strictly greater than min."""
    return GreaterThan(-INFINITY if min is None else min)


def less_than(max: Optional[Number] = None) -> LessThan:
    """Match values whose measure is strictly less than max."""
    return LessThan(INFINITY if max is None else max)


def containing(expected: Any = None) -> Containing:
    """Match values containing expected (defaults to '')."""
    return Containing('' if expected is None else expected)


def matching(pattern: Union[str, re.Pattern, None] = None) -> Matching:
    """Match values the pattern finds a match in (defaults to match-all)."""
    if pattern is None:
        return Matching()
    return Matching(pattern)


def starting_with(start: Any = None) -> StartingWith:
    return StartingWith('' if start is None else start)


def ending_with(end: Any = None) -> EndingWith:
    return EndingWith('' if end is None else end)


def having_value() -> HavingValue:
    return HavingValue()


def not_(inner: Matcher) -> Not:
    """Negate inner."""
    return Not(inner)
