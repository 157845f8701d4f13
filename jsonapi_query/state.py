"""
Per-chain query state.

A QueryState collects what a chain of builder calls asks for (includes,
sort keys, sparse fieldsets, filters, limit/offset and pagination) and
validates each argument as it arrives. It knows nothing about URLs; see
serialize.py for how it is written out.

Usage:
    state = QueryState('posts')
    state.add_include('comments.author').add_sort('published_at', 'desc')
    state.add_filter('likes-above', 100, group='popular')
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidArgument, InvalidFieldsSpec, InvalidSortDirection

# Filter keys that limit/offset are written under
LIMIT_KEY = 'limit'
OFFSET_KEY = 'offset'


class SortDirection(str, Enum):
    ASC = 'asc'
    DESC = 'desc'

    @classmethod
    def parse(cls, direction) -> 'SortDirection':
        """Turn 'asc'/'desc' (or a SortDirection) into a SortDirection."""
        if isinstance(direction, cls):
            return direction
        for member in cls:
            if direction == member.value:
                return member
        raise InvalidSortDirection(direction)


@dataclass(frozen=True)
class FieldList:
    """Field names of the primary resource."""
    names: tuple


@dataclass(frozen=True)
class GroupedFields:
    """Field names keyed by resource type."""
    by_type: tuple  # ((type, (name, ...)), ...)


def parse_fields(spec):
    """
    Resolve a select() argument into FieldList or GroupedFields.

    Accepts a list/tuple of field names, or a mapping of resource type to
    such a list. Anything else raises InvalidFieldsSpec.
    """
    if isinstance(spec, (FieldList, GroupedFields)):
        return spec
    if _is_name_list(spec):
        return FieldList(tuple(spec))
    if isinstance(spec, Mapping):
        if all(isinstance(k, str) and k and _is_name_list(v) for k, v in spec.items()):
            return GroupedFields(tuple((k, tuple(v)) for k, v in spec.items()))
    raise InvalidFieldsSpec(spec)


def _is_name_list(value) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(n, str) for n in value)


class QueryState:
    """Accumulated query intent for one chain, bound to a primary resource type."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        self.includes = []
        self.sort_keys = []
        self.fields = {}
        # key -> None (presence) | value | {key: None | value} for groups
        self.filters = {}
        self.pagination = None

    @property
    def limit(self):
        return self._reserved(LIMIT_KEY)

    @property
    def offset(self):
        return self._reserved(OFFSET_KEY)

    def add_include(self, path: str) -> 'QueryState':
        _require_name(path, 'include path')
        self.includes.append(path)
        return self

    def add_sort(self, field: str, direction='asc') -> 'QueryState':
        direction = SortDirection.parse(direction)
        _require_name(field, 'sort field')
        self.sort_keys.append((field, direction))
        return self

    def set_fields(self, spec) -> 'QueryState':
        """Merge a sparse fieldset into the state (see parse_fields)."""
        spec = parse_fields(spec)
        if isinstance(spec, FieldList):
            by_type = ((self.resource_type, spec.names),)
        else:
            by_type = spec.by_type

        for resource_type, names in by_type:
            current = self.fields.setdefault(resource_type, [])
            for name in names:
                if name not in current:
                    current.append(name)
        return self

    def add_filter(self, key: str, value=None, group: str = None) -> 'QueryState':
        """
        Record a filter.

        value=None makes a presence filter (`filter[key]`). With a group, the
        filter is nested under it (`filter[group][key]=value`). A key keeps its
        first position; a repeated key takes the latest value.
        """
        _require_name(key, 'filter key')
        if isinstance(value, Mapping):
            raise InvalidArgument(f'JsonApiQuery: filter "{key}" value must be a scalar or a list')

        if group is None:
            if isinstance(self.filters.get(key), dict):
                raise InvalidArgument(f'JsonApiQuery: "{key}" is already used as a filter group')
            self.filters[key] = value
            return self

        _require_name(group, 'filter group')
        if group in self.filters and not isinstance(self.filters[group], dict):
            raise InvalidArgument(f'JsonApiQuery: "{group}" is already used as a filter key')
        self.filters.setdefault(group, {})[key] = value
        return self

    def set_limit(self, n: int) -> 'QueryState':
        return self.add_filter(LIMIT_KEY, _require_count(n, 'limit'))

    def set_offset(self, n: int) -> 'QueryState':
        return self.add_filter(OFFSET_KEY, _require_count(n, 'offset'))

    def set_pagination(self, size: int, number: int) -> 'QueryState':
        self.pagination = (_require_count(size, 'page size'), _require_count(number, 'page number'))
        return self

    def is_empty(self) -> bool:
        return not (self.includes or self.sort_keys or self.fields or self.filters or self.pagination)

    def _reserved(self, key):
        value = self.filters.get(key)
        return None if isinstance(value, dict) else value

    def __repr__(self):
        return (
            f'QueryState({self.resource_type!r}, includes={self.includes!r}, '
            f'sort_keys={self.sort_keys!r}, fields={self.fields!r}, '
            f'filters={self.filters!r}, pagination={self.pagination!r})'
        )


def _require_name(value, what):
    if not value or not isinstance(value, str):
        raise InvalidArgument(f'JsonApiQuery: {what} is required and must be a string')


def _require_count(value, what):
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise InvalidArgument(f'JsonApiQuery: {what} must be a non-negative integer, got {value!r}')
    return value
