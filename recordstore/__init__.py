"""Schema-less in-memory record store.

Records are plain dicts indexed by one or more fields. Queries match fields
against literal values, nested queries or matchers, and results come back
as independent copies that can be ordered and re-queried.

Example:
    from recordstore import RecordStore, between

    store = RecordStore(index_fields=['username'])
    store.add({'username': 'bob', 'age': 30})
    store.add({'username': 'eve', 'age': 25})

    store.select({'age': between(20, 29)}).first   # eve
    store.select().order_by('desc', 'age').first   # bob
"""

from .exceptions import (
    RecordStoreError,
    InvalidIndexKeyError,
    UnencodableValueError,
    StoreConfigError,
)
from .matching import (
    Matcher,
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
from .query import filter_by, matches
from .indexes import IndexKeyCodec
from .records import Records, SortOrder
from .store import RecordStore
from .config import StoreOptions, load_store, parse_store_file, parse_store_string

__all__ = [
    # Store
    'RecordStore',
    'Records',
    'SortOrder',
    'IndexKeyCodec',
    # Queries
    'filter_by',
    'matches',
    # Matchers
    'Matcher',
    'between',
    'greater_than',
    'less_than',
    'containing',
    'matching',
    'starting_with',
    'ending_with',
    'having_value',
    'not_',
    # Configuration
    'StoreOptions',
    'load_store',
    'parse_store_file',
    'parse_store_string',
    # Errors
    'RecordStoreError',
    'InvalidIndexKeyError',
    'UnencodableValueError',
    'StoreConfigError',
]
