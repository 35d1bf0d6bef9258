"""Tests for query evaluation."""

from recordstore.matching import between, having_value, not_, starting_with
from recordstore.query import filter_by, get_field, matches


class Account:
    """Plain class with read-only properties, not meant for a store."""

    def __init__(self, name, active, level):
        self._name = name
        self._active = active
        self._level = level

    @property
    def name(self):
        return self._name

    @property
    def active(self):
        return self._active

    @property
    def level(self):
        return self._level

    def describe(self):
        return f"{self._name}:{self._level}"


class TestGetField:
    """Tests for get_field()."""

    def test_mapping(self):
        """Test mappings are read by key."""
        assert get_field({'a': 1}, 'a') == 1
        assert get_field({'a': 1}, 'b') is None

    def test_object(self):
        """Test objects are read by attribute."""
        assert get_field(Account('x', True, 1), 'name') == 'x'
        assert get_field(Account('x', True, 1), 'missing') is None


class TestMatches:
    """Tests for matches()."""

    def test_empty_query_matches_all(self):
        """Test an empty query matches any record."""
        assert matches({}, {'a': 1}) is True
        assert matches({}, {}) is True

    def test_literal_equality(self):
        """Test literal values need strict equality."""
        record = {'name': 'bob', 'active': True, 'age': 1}
        assert matches({'name': 'bob'}, record) is True
        assert matches({'name': 'bob', 'active': True}, record) is True
        assert matches({'active': 1}, record) is False
        assert matches({'age': True}, record) is False

    def test_missing_field(self):
        """Test a literal does not match a missing field."""
        assert matches({'name': 'bob'}, {'age': 1}) is False
        assert matches({'name': None}, {'age': 1}) is True

    def test_matcher(self):
        """Test matchers receive the field value."""
        record = {'age': 30}
        assert matches({'age': between(18, 65)}, record) is True
        assert matches({'age': between(40, 65)}, record) is False
        assert matches({'email': not_(having_value())}, record) is True

    def test_nested_query(self):
        """Test nested queries match partially and recursively."""
        record = {'name': 'a', 'address': {'city': 'Paris', 'zip': '75001'}}
        assert matches({'address': {'city': 'Paris'}}, record) is True
        assert matches({'address': {'city': starting_with('Pa')}}, record) is True
        assert matches({'address': {'city': 'Lyon'}}, record) is False

    def test_nested_query_on_missing_field(self):
        """Test a nested query never matches a None field."""
        assert matches({'address': {}}, {'address': None}) is False
        assert matches({'address': {}}, {}) is False

    def test_list_literal_compared_whole(self):
        """Test list values are compared structurally, not partially."""
        record = {'tags': ['a', 'b']}
        assert matches({'tags': ['a', 'b']}, record) is True
        assert matches({'tags': ['a']}, record) is False


class TestFilterBy:
    """Tests for filter_by()."""

    def test_filters_class_objects(self):
        """Test plain objects are filtered by attribute."""
        accounts = [
            Account('foo', True, 1),
            Account('foo', False, 2),
            Account('foo', False, 1),
            Account('foo', True, 2),
            Account('bar', True, 1),
            Account('bar', False, 2),
        ]
        results = filter_by({'name': 'foo', 'active': True}, *accounts)

        assert len(results) == 2
        assert results[0] is accounts[0]
        assert results[0].describe() == 'foo:1'

    def test_none_query_returns_all(self):
        """Test None keeps every record."""
        records = [{'a': 1}, {'a': 2}]
        assert filter_by(None, *records) == records

    def test_no_records(self):
        """Test filtering nothing returns an empty list."""
        assert filter_by({'a': 1}) == []
