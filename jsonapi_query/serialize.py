"""
Query string serialization.

Writes a QueryState out in JSON:API bracket notation. Parameter groups are
always emitted in the same order:

    include -> page[size]&page[number] -> sort -> fields[type] -> filter[...]

Groups with nothing in them are left out, so an empty state gives ''.
Values are written as given; nothing is URL-escaped.
"""

from .state import QueryState, SortDirection


def to_query_string(state: QueryState) -> str:
    """Serialize a QueryState into a query string (no leading '?')."""
    params = []
    params.extend(_include(state))
    params.extend(_page(state))
    params.extend(_sort(state))
    params.extend(_fields(state))
    params.extend(_filters(state))
    return '&'.join(params)


def build_url(base_url: str, resource_type: str, state: QueryState = None, id=None) -> str:
    """
    Build the request URL for a collection or a single resource.

    Collection: {base}/{type}/
    Single:     {base}/{type}/{id}
    """
    url = f"{base_url.rstrip('/')}/{resource_type}/"
    if id is not None:
        url += str(id)

    query = to_query_string(state) if state is not None else ''
    return f'{url}?{query}' if query else url


def format_value(value) -> str:
    """Render a filter value: booleans lowercase, lists comma-joined."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ','.join(format_value(v) for v in value)
    return str(value)


def _include(state):
    if state.includes:
        yield 'include=' + ','.join(state.includes)


def _page(state):
    if state.pagination is not None:
        size, number = state.pagination
        yield f'page[size]={size}'
        yield f'page[number]={number}'


def _sort(state):
    if state.sort_keys:
        tokens = []
        for field, direction in state.sort_keys:
            tokens.append('-' + field if direction is SortDirection.DESC else field)
        yield 'sort=' + ','.join(tokens)


def _fields(state):
    for resource_type, names in state.fields.items():
        if names:
            yield f'fields[{resource_type}]=' + ','.join(names)


def _filters(state):
    for key, value in state.filters.items():
        if isinstance(value, dict):
            for inner_key, inner_value in value.items():
                yield _filter_param(f'filter[{key}][{inner_key}]', inner_value)
        else:
            yield _filter_param(f'filter[{key}]', value)


def _filter_param(name, value):
    if value is None:
        return name
    return f'{name}={format_value(value)}'
