"""Canonical encoding, decoding and deep copying of record values.

Records are plain Python values. This module classifies them into the
variants the store understands:

- structured value: a ``dict`` whose keys are all strings (a JSON object)
- map-like: any other ``Mapping`` (e.g. ``{1: 'a'}``)
- set-like: ``set`` or ``frozenset``
- sequence: ``list`` or ``tuple``
- scalar: ``None``, ``bool``, ``int``, ``float``, ``str``

The canonical encoding is compact JSON with sorted object keys. Map-like and
set-like values, which JSON cannot represent, are wrapped as::

    {"dataType": "Map", "value": [[key, value], ...]}
    {"dataType": "Set", "value": [element, ...]}

and revived by ``decode``. The same encoding backs key derivation and result
ordering, so it must stay stable.
"""

import copy
import json
from collections.abc import Mapping
from typing import Any, Dict, List

from .exceptions import UnencodableValueError

MAP_TYPE = 'Map'
SET_TYPE = 'Set'

SCALAR_TYPES = (str, int, float, bool)


def is_structured(value: Any) -> bool:
    """Return True if value is a dict keyed only by strings."""
    return isinstance(value, dict) and all(isinstance(k, str) for k in value)


def is_map_like(value: Any) -> bool:
    """Return True for mappings that are not structured values."""
    return isinstance(value, Mapping) and not is_structured(value)


def is_set_like(value: Any) -> bool:
    return isinstance(value, (set, frozenset))


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_number(value: Any) -> bool:
    """Return True for int and float values, excluding bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_text(value: Any) -> str:
    """Return the text form of a scalar used for string comparisons."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def strict_equals(a: Any, b: Any) -> bool:
    """Structural equality that never equates a bool with a number.

    ``strict_equals(True, 1)`` is False while ``True == 1`` is True.
    The rule applies recursively inside sequences and mappings.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_sequence(a) and is_sequence(b):
        return len(a) == len(b) and all(
            strict_equals(x, y) for x, y in zip(a, b)
        )
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(strict_equals(a[k], b[k]) for k in a)
    return a == b


def to_jsonable(value: Any) -> Any:
    """Convert a record value into plain JSON-compatible data.

    Raises:
        UnencodableValueError: If value (or anything nested in it) is not
            one of the supported variants.
    """
    if isinstance(value, float) and value.is_integer():
        # 1.0 and 1 are equal values and must share one encoding
        return int(value)
    if value is None or isinstance(value, SCALAR_TYPES):
        return value
    if is_structured(value):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, Mapping):
        return {
            'dataType': MAP_TYPE,
            'value': [[to_jsonable(k), to_jsonable(v)] for k, v in value.items()],
        }
    if is_set_like(value):
        elements = [to_jsonable(e) for e in value]
        # Set iteration order is arbitrary; sort so equal sets encode equally
        elements.sort(key=_dumps)
        return {'dataType': SET_TYPE, 'value': elements}
    if is_sequence(value):
        return [to_jsonable(v) for v in value]
    raise UnencodableValueError(
        f"Cannot encode value of type {type(value).__name__}: {value!r}"
    )


def encode(value: Any) -> str:
    """Return the canonical string encoding of value."""
    return _dumps(to_jsonable(value))


def decode(text: str) -> Any:
    """Parse a canonical encoding, reviving Map and Set values.

    Raises:
        ValueError: If text is not valid JSON.
    """
    return json.loads(text, object_hook=_revive)


def clone(value: Any) -> Any:
    """Return an independent deep copy of value.

    Containers are rebuilt recursively; map-like values are copied into a
    plain ``dict``. Anything else falls back to ``copy.deepcopy``.
    """
    if value is None or isinstance(value, SCALAR_TYPES):
        return value
    if isinstance(value, dict):
        return {k: clone(v) for k, v in value.items()}
    if isinstance(value, list):
        return [clone(v) for v in value]
    if isinstance(value, tuple):
        return tuple(clone(v) for v in value)
    if isinstance(value, frozenset):
        return frozenset(value)
    if isinstance(value, set):
        return set(value)
    if isinstance(value, Mapping):
        return {k: clone(v) for k, v in value.items()}
    return copy.deepcopy(value)


def _dumps(data: Any) -> str:
    return json.dumps(data, sort_keys=True, separators=(',', ':'), ensure_ascii=False)


def _revive(obj: Dict[str, Any]) -> Any:
    """json object_hook turning wrapped Map/Set payloads back into values."""
    data_type = obj.get('dataType')
    if data_type in (MAP_TYPE, SET_TYPE) and isinstance(obj.get('value'), list):
        if data_type == MAP_TYPE:
            return {_hashable(k): v for k, v in obj['value']}
        return {_hashable(e) for e in obj['value']}
    return obj


def _hashable(value: Any) -> Any:
    """Turn decoded lists into tuples so they can be used as keys."""
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    return value


def items_of(value: Any) -> List[Any]:
    """Return the elements of a sequence or set, or the values of a mapping."""
    if isinstance(value, Mapping):
        return list(value.values())
    return list(value)
