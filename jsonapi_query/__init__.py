"""
jsonapi-query: fluent JSON:API query builder.

Usage:
    from jsonapi_query import Model

    class Post(Model):
        resource_type = 'posts'
        base_url = 'https://example.com/api'

    doc = await Post().with_(['tags', 'author']).paginate(4, 1)
    # GET https://example.com/api/posts/?include=tags,author&page[size]=4&page[number]=1
"""

__version__ = '0.1.0'

from .errors import InvalidArgument, InvalidSortDirection, InvalidFieldsSpec
from .state import QueryState, SortDirection, FieldList, GroupedFields, parse_fields
from .serialize import to_query_string, build_url, format_value
from .request import Request, MEDIA_TYPE
from .builder import QueryBuilder, Model, DEFAULT_PAGE_SIZE
from .transport import HttpTransport

__all__ = [
    'InvalidArgument', 'InvalidSortDirection', 'InvalidFieldsSpec',
    'QueryState', 'SortDirection', 'FieldList', 'GroupedFields', 'parse_fields',
    'to_query_string', 'build_url', 'format_value',
    'Request', 'MEDIA_TYPE',
    'QueryBuilder', 'Model', 'DEFAULT_PAGE_SIZE',
    'HttpTransport',
    '__version__',
]
