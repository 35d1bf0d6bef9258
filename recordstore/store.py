"""In-memory record store indexed by configurable fields.

RecordStore keeps schema-less records in a keyed table and enforces that no
two records share the same index key. Queries resolve in one of two ways:

1. Key lookup (O(1)) when the query gives a literal value for every index
   field
2. Full scan through the query evaluator (O(n)) otherwise

Records leaving the store through ``select`` are deep copies, and records
entering through ``add``/``update`` are copied too, so callers never share
state with the table. ``select_raw`` is the one exception.

The store does no locking; serialize access to a shared instance.

Example:
    store = RecordStore(index_fields=['username'])
    store.add({'username': 'bob', 'age': 30})    # True
    store.add({'username': 'bob', 'age': 99})    # False, key taken
    store.select({'username': 'bob'}).first['age']  # 30
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .codec import clone, is_structured
from .indexes import DEFAULT_DELIMITER, IndexKeyCodec, RecordTable
from .matching.protocols import Matcher
from .query import Query, get_field, matches
from .records import Records

if TYPE_CHECKING:
    from .config import StoreOptions

logger = logging.getLogger(__name__)


class RecordStore:
    """Table of unique records keyed by their index field values.

    Attributes are read-only after construction; only the stored data
    changes through the public methods.
    """

    def __init__(
        self,
        index_fields: Optional[Sequence[str]] = None,
        records: Optional[Iterable[Dict[str, Any]]] = None,
        delimiter: str = DEFAULT_DELIMITER,
    ):
        """Initialize store.

        Args:
            index_fields: Ordered field names forming each record's unique
                key. When empty, the whole record is the key.
            records: Records to add on creation. Duplicates are skipped the
                same way ``add`` skips them.
            delimiter: Separator between encoded values in index keys.
        """
        self._codec = IndexKeyCodec(index_fields or (), delimiter)
        self._table = RecordTable()
        for record in records or ():
            self.add(record)

    @classmethod
    def from_options(cls, options: 'StoreOptions') -> 'RecordStore':
        """Create a store from a StoreOptions definition."""
        return cls(
            index_fields=options.index_fields,
            records=options.records,
            delimiter=options.delimiter,
        )

    @property
    def index_fields(self) -> List[str]:
        """A copy of the index field names; changing it does not affect the store."""
        return self._codec.index_fields

    @property
    def delimiter(self) -> str:
        return self._codec.delimiter

    def add(self, record: Dict[str, Any]) -> bool:
        """Add a copy of record if no stored record has the same key.

        Args:
            record: The record to add.

        Returns:
            True if added. False if an index field is missing or another
            record already uses the key; the store is unchanged then.
        """
        key = self._codec.derive_key(record)
        if key is None:
            logger.debug("Rejected record without index values: %r", record)
            return False
        if not self._table.insert(key, clone(record)):
            logger.debug("Rejected duplicate key %s", key)
            return False
        return True

    def get(self, partial: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return a copy of the record whose key matches partial, or None."""
        key = self._codec.derive_key(partial)
        if key is None:
            return None
        record = self._table.find(key)
        return None if record is None else clone(record)

    def select(self, query: Optional[Query] = None) -> Records:
        """Return copies of all records matching query.

        Args:
            query: Mapping of field names to literal values, nested queries
                or matchers. None selects every record.

        Returns:
            Records holding independent copies, in table order.
        """
        return Records(
            [clone(record) for _, record in self._find(query)],
            index_fields=self._codec.index_fields,
            delimiter=self._codec.delimiter,
        )

    def select_raw(self, query: Optional[Query] = None) -> List[Dict[str, Any]]:
        """Return the stored record objects matching query, without copying.

        Mutating the returned records changes the store directly, including
        its index fields, which can leave records filed under stale keys.
        Use only for read-heavy code that cannot afford copies.
        """
        return [record for _, record in self._find(query)]

    def size(self, query: Optional[Query] = None) -> int:
        """Return the number of records select(query) would return."""
        return len(self.select(query))

    def update(self, updates: Dict[str, Any], query: Optional[Query] = None) -> int:
        """Merge updates into matching records.

        Targets are chosen as follows:
        - query omitted and updates has every index value: the single
          record stored under updates' key
        - otherwise: every record matching ``query`` (or ``updates`` when
          no query is given), found by scanning

        Fields present in updates overwrite, others are kept. The key is
        re-derived from the merged record; if it changed, the record moves
        to the new key. Moving onto a key held by another record replaces
        that record (last write wins). Choose index fields so that updates
        cannot collide if this is not wanted.

        Args:
            updates: Field values to write.
            query: Optional query selecting the records to update.

        Returns:
            Number of records updated.
        """
        if updates is None:
            return 0

        targets: List[Tuple[str, Dict[str, Any]]]
        if query is None and self._codec.has_index_values(updates):
            key = self._codec.derive_key(updates)
            record = self._table.find(key)
            targets = [] if record is None else [(key, record)]
        else:
            targets = self._scan(updates if query is None else query)

        count = 0
        for old_key, record in targets:
            merged = dict(record)
            merged.update(clone(updates))
            new_key = self._codec.derive_key(merged)
            if new_key is None:
                logger.debug("Skipped update of %s: merged record has no key", old_key)
                continue
            if new_key != old_key:
                logger.debug("Update moved record from %s to %s", old_key, new_key)
                # An earlier update in this batch may already own old_key
                if self._table.find(old_key) is record:
                    self._table.remove(old_key)
            self._table.put(new_key, merged)
            count += 1
        return count

    def delete(self, query: Optional[Query]) -> List[Dict[str, Any]]:
        """Remove all records matching query.

        Always resolved by scanning. The removed record objects are handed
        to the caller as they are; the store keeps no reference to them.

        Returns:
            The removed records, or an empty list if none matched.
        """
        removed = []
        for key, record in self._scan(query):
            self._table.remove(key)
            removed.append(record)
        logger.debug("Deleted %d record(s)", len(removed))
        return removed

    def clear(self) -> List[Dict[str, Any]]:
        """Remove every record and return them."""
        removed = self._table.clear()
        logger.debug("Cleared %d record(s)", len(removed))
        return removed

    def get_index(self, partial: Dict[str, Any]) -> Optional[str]:
        """Return the index key for partial, or None if an index value is missing."""
        return self._codec.derive_key(partial)

    def parse_index(self, key: str) -> Dict[str, Any]:
        """Parse an index key into its index field values.

        Raises:
            InvalidIndexKeyError: If key does not fit the index fields.
        """
        return self._codec.parse_key(key)

    def has_index_values(self, partial: Dict[str, Any]) -> bool:
        """Check that partial has a non-None, non-matcher value per index field."""
        return self._codec.has_index_values(partial)

    def __len__(self) -> int:
        return len(self._table)

    def _find(self, query: Optional[Query]) -> List[Tuple[str, Dict[str, Any]]]:
        """Resolve query to (key, record) pairs, by key lookup when possible."""
        if query is not None and self._is_key_query(query):
            key = self._codec.derive_key(query)
            record = self._table.find(key)
            logger.debug("Resolved query by key %s", key)
            if record is not None and matches(query, record):
                return [(key, record)]
            return []
        return self._scan(query)

    def _scan(self, query: Optional[Query]) -> List[Tuple[str, Dict[str, Any]]]:
        """Resolve query by testing every record."""
        items = self._table.items()
        if query is None:
            return items
        return [(key, record) for key, record in items if matches(query, record)]

    def _is_key_query(self, query: Query) -> bool:
        """Check that query pins every index field to a literal value.

        Nested queries are partial matches, so they cannot be turned into
        a key either.
        """
        if not self._codec.index_fields:
            return False
        for name in self._codec.index_fields:
            value = get_field(query, name)
            if value is None or isinstance(value, Matcher) or is_structured(value):
                return False
        return True
