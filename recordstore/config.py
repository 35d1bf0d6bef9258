"""Store definitions and their YAML form.

A store can be described in YAML and loaded in one call:

    index_fields: [username]
    delimiter: ":"
    records:
      - {username: bob, age: 30}
      - {username: eve, age: 25}

Usage:
    from recordstore.config import load_store
    store = load_store('users.yaml')
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union, TYPE_CHECKING

import yaml

from .exceptions import StoreConfigError
from .indexes import DEFAULT_DELIMITER

if TYPE_CHECKING:
    from .store import RecordStore


@dataclass
class StoreOptions:
    """Construction options for a RecordStore.

    Attributes:
        index_fields: Ordered field names whose values form each record's key.
        records: Records to add when the store is created.
        delimiter: Separator between encoded values in index keys.
    """
    index_fields: List[str] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)
    delimiter: str = DEFAULT_DELIMITER


def parse_store_file(path: Union[str, Path]) -> StoreOptions:
    """Parse and validate a YAML store definition file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated StoreOptions

    Raises:
        StoreConfigError: If the file is invalid or has malformed fields
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Store definition not found: {path}")

    with open(path) as f:
        return parse_store_string(f.read())


def parse_store_string(content: str) -> StoreOptions:
    """Parse a YAML store definition from a string.

    Args:
        content: YAML content as string

    Returns:
        Validated StoreOptions
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise StoreConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise StoreConfigError("YAML root must be a mapping")

    return _validate_store_data(data)


def load_store(path: Union[str, Path]) -> 'RecordStore':
    """Build a RecordStore from a YAML store definition file."""
    from .store import RecordStore

    return RecordStore.from_options(parse_store_file(path))


def _validate_store_data(data: Dict[str, Any]) -> StoreOptions:
    """Validate parsed YAML data structure.

    Raises:
        StoreConfigError: If validation fails
    """
    unknown = set(data) - {'index_fields', 'records', 'delimiter'}
    if unknown:
        raise StoreConfigError(f"Unknown field(s): {', '.join(sorted(unknown))}")

    index_fields = data.get('index_fields', [])
    if not isinstance(index_fields, list):
        raise StoreConfigError("'index_fields' must be a list")
    for i, name in enumerate(index_fields):
        if not isinstance(name, str):
            raise StoreConfigError(f"Index field {i} must be a string")

    delimiter = data.get('delimiter', DEFAULT_DELIMITER)
    if not isinstance(delimiter, str) or not delimiter:
        raise StoreConfigError("'delimiter' must be a non-empty string")

    records = data.get('records', [])
    if not isinstance(records, list):
        raise StoreConfigError("'records' must be a list")
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise StoreConfigError(f"Record {i} must be a mapping")

    return StoreOptions(
        index_fields=index_fields,
        records=records,
        delimiter=delimiter,
    )
