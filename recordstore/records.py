"""Result sets returned by RecordStore.select.

Records is a plain list with a few extras: ``first``/``last``, in-place
ordering by canonical encoding, and re-querying of its own contents. It can
also be built directly to sort or filter records that never were in a store.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from .codec import encode
from .indexes import DEFAULT_DELIMITER
from .query import Query, get_field

# Sorts after any canonical encoding, so missing values end up last
MISSING_SORT_VALUE = '香' * 6


class SortOrder(str, Enum):
    """Direction for Records.order_by."""
    ASC = 'asc'
    DESC = 'desc'


class Records(list):
    """Ordered collection of records from a select.

    Example:
        results = store.select({'active': True})
        results.order_by('desc', 'age').first
        results.select({'name': starting_with('a')})
    """

    def __init__(
        self,
        records: Iterable[Dict[str, Any]] = (),
        index_fields: Sequence[str] = (),
        delimiter: str = DEFAULT_DELIMITER,
    ):
        """Initialize collection.

        Args:
            records: The records to hold.
            index_fields: Index fields used when re-querying via select.
            delimiter: Key delimiter used when re-querying via select.
        """
        super().__init__(records)
        self._index_fields = list(index_fields)
        self._delimiter = delimiter

    @property
    def first(self) -> Optional[Dict[str, Any]]:
        """The first record, or None if empty."""
        return self[0] if self else None

    @property
    def last(self) -> Optional[Dict[str, Any]]:
        """The last record, or None if empty."""
        return self[-1] if self else None

    def order_by(self, order: Union[SortOrder, str] = SortOrder.ASC, *keys: str) -> 'Records':
        """Sort the records in place.

        Each record is reduced to one comparison string: the canonical
        encodings of the given keys concatenated in the order passed, or
        the whole record's encoding when no keys are given. Missing or None
        values sort after everything else in ascending order and before
        everything else in descending order. The sort is stable.

        Args:
            order: 'asc' or 'desc' (or a SortOrder).
            *keys: Field names to order by, most significant first.

        Returns:
            This collection, for chaining.

        Raises:
            ValueError: If order is not a known direction.
        """
        order = SortOrder(order)

        def sort_key(record: Any) -> str:
            if not keys:
                return MISSING_SORT_VALUE if record is None else encode(record)
            parts = []
            for key in keys:
                value = get_field(record, key)
                parts.append(MISSING_SORT_VALUE if value is None else encode(value))
            return ''.join(parts)

        self.sort(key=sort_key, reverse=order is SortOrder.DESC)
        return self

    def select(self, query: Optional[Query] = None) -> 'Records':
        """Query this collection as if it were a store.

        Behaves exactly like a fresh RecordStore with the same index fields
        and delimiter, seeded with these records, so records sharing a key
        collapse to the first one.

        Returns:
            A new Records instance; this one is left untouched.
        """
        from .store import RecordStore

        store = RecordStore(
            index_fields=self._index_fields,
            records=self,
            delimiter=self._delimiter,
        )
        return store.select(query)
