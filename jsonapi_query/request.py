"""Request descriptor handed to the transport."""

from dataclasses import dataclass, field
from types import MappingProxyType

MEDIA_TYPE = 'application/vnd.api+json'


def default_headers() -> dict:
    return {'Accept': MEDIA_TYPE}


@dataclass(frozen=True)
class Request:
    """
    The (method, url, headers) triple for one terminal call.

    Built once and never changed; the transport reads it and returns the
    parsed response document. GET requests carry no body. Headers are
    exposed as a read-only mapping.
    """

    url: str
    method: str = 'GET'
    headers: dict = field(default_factory=default_headers)

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

    def __hash__(self):
        return hash((self.url, self.method, tuple(sorted(self.headers.items()))))

    def as_dict(self) -> dict:
        return {
            'method': self.method,
            'url': self.url,
            'headers': dict(self.headers),
        }
