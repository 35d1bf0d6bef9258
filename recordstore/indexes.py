"""Index keys and the keyed record table.

- IndexKeyCodec: derives a record's unique key from its index fields and
  parses keys back into partial records
- RecordTable: O(1) key -> record storage with uniqueness on insert

Keys are the canonical encodings of the index field values, in configured
order, joined by the delimiter:

    codec = IndexKeyCodec(['name', 'age'], delimiter=':')
    codec.derive_key({'name': 'bob', 'age': 30})  # '"bob":30'

Without index fields the whole record's encoding is the key, which turns the
store into a set of distinct records.

Parsing splits on the delimiter, so an encoded value that itself contains
the delimiter cannot be parsed back unambiguously. No escaping is applied;
choose a delimiter that cannot appear in the encoded values.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .codec import decode, encode
from .exceptions import InvalidIndexKeyError
from .matching.protocols import Matcher
from .query import get_field

DEFAULT_DELIMITER = '-'


class IndexKeyCodec:
    """Converts between records and index keys.

    Example:
        codec = IndexKeyCodec(['username'])
        key = codec.derive_key({'username': 'bob', 'age': 30})  # '"bob"'
        codec.parse_key(key)  # {'username': 'bob'}
    """

    def __init__(self, index_fields: Sequence[str] = (), delimiter: str = DEFAULT_DELIMITER):
        """Initialize codec.

        Args:
            index_fields: Ordered field names whose values form the key.
            delimiter: Separator placed between encoded field values.
        """
        self._fields: Tuple[str, ...] = tuple(index_fields)
        self._delimiter = delimiter

    @property
    def index_fields(self) -> List[str]:
        """A copy of the configured index field names."""
        return list(self._fields)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def has_index_values(self, partial: Any) -> bool:
        """Check that partial holds a usable value for every index field.

        A value is usable when it is neither None nor a Matcher. With no
        index fields configured, any partial other than None qualifies.
        """
        if partial is None:
            return False
        for name in self._fields:
            value = get_field(partial, name)
            if value is None or isinstance(value, Matcher):
                return False
        return True

    def derive_key(self, partial: Any) -> Optional[str]:
        """Return the index key for partial, or None if none can be derived.

        Raises:
            UnencodableValueError: If an index value cannot be encoded.
        """
        if not self.has_index_values(partial):
            return None
        if not self._fields:
            return encode(partial)
        return self._delimiter.join(
            encode(get_field(partial, name)) for name in self._fields
        )

    def parse_key(self, key: str) -> Dict[str, Any]:
        """Parse a key produced by derive_key into a partial record.

        Args:
            key: An index key.

        Returns:
            Mapping of each index field to its decoded value.

        Raises:
            InvalidIndexKeyError: If the number of segments does not match
                the number of index fields, or a segment cannot be decoded.
        """
        segments = key.split(self._delimiter)
        if len(segments) != len(self._fields):
            raise InvalidIndexKeyError(
                f"Invalid index key {key!r}: expected {len(self._fields)} "
                f"segment(s) separated by {self._delimiter!r}, got {len(segments)}"
            )
        parsed: Dict[str, Any] = {}
        for name, segment in zip(self._fields, segments):
            try:
                parsed[name] = decode(segment)
            except (ValueError, TypeError) as e:
                raise InvalidIndexKeyError(
                    f"Invalid index key {key!r}: cannot decode {name!r} "
                    f"from {segment!r}: {e}"
                ) from e
        return parsed


class RecordTable:
    """O(1) key -> record storage.

    items() follows insertion order of the keys.
    """

    def __init__(self):
        self._by_key: Dict[str, Any] = {}

    def insert(self, key: str, record: Any) -> bool:
        """Store record under key unless the key is taken.

        Returns:
            True if stored, False if key was already present.
        """
        if key in self._by_key:
            return False
        self._by_key[key] = record
        return True

    def put(self, key: str, record: Any) -> None:
        """Store record under key, replacing any existing record."""
        self._by_key[key] = record

    def find(self, key: str) -> Optional[Any]:
        return self._by_key.get(key)

    def remove(self, key: str) -> Optional[Any]:
        """Remove and return the record under key, or None."""
        return self._by_key.pop(key, None)

    def items(self) -> List[Tuple[str, Any]]:
        """Snapshot of (key, record) pairs."""
        return list(self._by_key.items())

    def clear(self) -> List[Any]:
        """Remove every record and return them."""
        records = list(self._by_key.values())
        self._by_key.clear()
        return records

    def __len__(self) -> int:
        """Return number of stored records."""
        return len(self._by_key)
