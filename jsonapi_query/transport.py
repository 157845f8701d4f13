"""
HTTP transport for query builders.

A transport is any async callable taking a Request and returning the parsed
response document. HttpTransport is the aiohttp-backed one used when a
builder is not given its own.

Usage:
    async with aiohttp.ClientSession() as session:
        posts = Post(transport=HttpTransport(session))
        doc = await posts.with_('author').find(1)
"""

import logging

import aiohttp

from .request import Request

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Send Requests over HTTP with aiohttp.

    Args:
        session: Optional aiohttp.ClientSession or compatible object whose
                 get() returns an async context manager. When omitted, a
                 session is opened for each request and closed after it.
        timeout: Optional aiohttp.ClientTimeout or total seconds, only used
                 for sessions this transport opens itself.

    Errors from aiohttp (connection failures, non-2xx statuses raised by
    raise_for_status) are not caught here.
    """

    def __init__(self, session=None, timeout=None):
        self._session = session
        if timeout is not None and not isinstance(timeout, aiohttp.ClientTimeout):
            timeout = aiohttp.ClientTimeout(total=timeout)
        self._timeout = timeout

    async def __call__(self, request: Request):
        return await self.send(request)

    async def send(self, request: Request):
        """Dispatch one request and return the decoded JSON body."""
        if self._session is not None:
            return await _send(self._session, request)

        # aiohttp < 3.9 only applies its default timeout when none is passed
        kwargs = {'timeout': self._timeout} if self._timeout is not None else {}
        async with aiohttp.ClientSession(**kwargs) as session:
            return await _send(session, request)


async def _send(session, request):
    if request.method != 'GET':
        raise ValueError(f'JsonApiQuery: unsupported method {request.method!r}')

    async with session.get(request.url, headers=dict(request.headers)) as resp:
        logger.debug('GET %s -> %s', request.url, resp.status)
        resp.raise_for_status()
        # JSON:API responses are application/vnd.api+json, not application/json
        return await resp.json(content_type=None)
