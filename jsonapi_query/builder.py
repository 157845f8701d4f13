"""
Fluent JSON:API query builder.

Chain methods record query intent; a terminal coroutine (all, get, find,
paginate) turns it into one GET request and awaits the transport.

Usage:
    class Post(Model):
        resource_type = 'posts'
        base_url = 'https://example.com/api'

    post = Post()
    doc = await post.with_(['author', 'comments.author']).order_by_desc('published_at').all()
    doc = await post.where('published-before', '2018-01-01').paginate(10, 2)

Each chain gets its own QueryState. It is created by the first chain call and
dropped by the terminal call before the request goes out, so two queries run
one after another on the same instance never share state. Running two chains
concurrently on one instance is not supported.
"""

import logging

from .errors import InvalidArgument
from .request import Request
from .serialize import build_url
from .state import QueryState, SortDirection
from .transport import HttpTransport

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class QueryBuilder:
    """
    Fluent query builder for one JSON:API resource type.

    Args:
        resource_type: Endpoint name, e.g. 'posts'
        base_url: API root, e.g. 'https://example.com/api'
        transport: Optional async (Request) -> document callable.
                   Defaults to HttpTransport().
    """

    def __init__(self, resource_type: str, base_url: str, transport=None):
        if not resource_type or not isinstance(resource_type, str):
            raise InvalidArgument('JsonApiQuery: resource_type is required and must be a string')
        if not base_url or not isinstance(base_url, str):
            raise InvalidArgument('JsonApiQuery: base_url is required and must be a string')

        self.resource_type = resource_type
        self.base_url = base_url
        self.transport = transport
        self._state = None

    # -- chain methods -------------------------------------------------

    def with_(self, paths):
        """Include related resources. Accepts one path or a list of paths."""
        if isinstance(paths, str):
            paths = [paths]

        def add(state):
            for path in _as_list(paths, 'include paths'):
                state.add_include(path)

        return self._chain(add)

    include = with_

    def order_by(self, field: str, direction='asc'):
        return self._chain(lambda state: state.add_sort(field, direction))

    def order_by_desc(self, field: str):
        return self._chain(lambda state: state.add_sort(field, SortDirection.DESC))

    def select(self, fields):
        """Sparse fieldsets: a list for this resource, or {type: [fields]}."""
        return self._chain(lambda state: state.set_fields(fields))

    def filter(self, key: str, group: str = None):
        """Presence filter: filter[key] or filter[group][key]."""
        return self._chain(lambda state: state.add_filter(key, None, group))

    def where(self, key: str, value, group: str = None):
        return self._chain(lambda state: state.add_filter(key, value, group))

    def limit(self, n: int):
        return self._chain(lambda state: state.set_limit(n))

    def offset(self, n: int):
        return self._chain(lambda state: state.set_offset(n))

    # -- terminal methods ----------------------------------------------

    async def all(self):
        """Fetch the collection."""
        return await self._dispatch(self._take_state())

    async def get(self):
        """Fetch the collection; same request as all()."""
        return await self._dispatch(self._take_state())

    async def find(self, id):
        """Fetch a single resource by id."""
        if id is None or id == '':
            self._state = None
            raise InvalidArgument('JsonApiQuery: id is required')
        return await self._dispatch(self._take_state(), id)

    async def paginate(self, size: int = DEFAULT_PAGE_SIZE, number: int = 1):
        """Fetch one page of the collection."""
        state = self._take_state()
        state.set_pagination(size, number)
        return await self._dispatch(state)

    async def request(self, request: Request):
        """Send a request through the transport. Override to intercept."""
        if self.transport is None:
            self.transport = HttpTransport()
        return await self.transport(request)

    # -- inspection ----------------------------------------------------

    def to_request(self, id=None) -> Request:
        """Build the request for the current chain without sending or resetting it."""
        return Request(self.to_url(id))

    def to_url(self, id=None) -> str:
        state = self._state if self._state is not None else QueryState(self.resource_type)
        return build_url(self.base_url, self.resource_type, state, id)

    # -- internals -----------------------------------------------------

    def _chain(self, mutate):
        if self._state is None:
            self._state = QueryState(self.resource_type)
        try:
            mutate(self._state)
        except InvalidArgument:
            self._state = None
            raise
        return self

    def _take_state(self) -> QueryState:
        state = self._state if self._state is not None else QueryState(self.resource_type)
        self._state = None
        return state

    async def _dispatch(self, state: QueryState, id=None):
        request = Request(build_url(self.base_url, self.resource_type, state, id))
        logger.debug('%s %s', request.method, request.url)
        return await self.request(request)


class Model(QueryBuilder):
    """
    Query builder configured through class attributes.

    Subclasses set resource_type and base_url; override request() to plug in
    a different transport.
    """

    resource_type = None
    base_url = None

    def __init__(self, transport=None):
        super().__init__(self.resource_type, self.base_url, transport)


def _as_list(values, what):
    if not isinstance(values, (list, tuple)):
        raise InvalidArgument(f'JsonApiQuery: {what} must be a string or a list of strings')
    return values
