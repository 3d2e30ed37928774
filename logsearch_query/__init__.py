"""
logsearch-query: filter clause builder for log search queries.

Translates string-based search request parameters (equals, contains, membership,
range, free-text tokens, include/exclude field maps) into escaped Solr filter
queries.
"""

from __future__ import annotations

from .builder import FilterBuilder, split_value_as_list
from .clauses import ClauseMode, FilterClause
from .config import LOG_MESSAGE_FIELD, FilterConfig
from .escaping import escape_query_chars, put_wildcard_by_type
from .exceptions import FieldMapPayloadError, LogSearchQueryError
from .payloads import FieldValueEntry, parse_field_value_maps
from .schema import InMemorySchemaLookup, LogType, SchemaLookup
from .sink import FilterQuery, QuerySink
from .tokenizer import tokenize
from .wildcards import Classification, MatchMode, classify

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Builder
    "FilterBuilder",
    "FilterConfig",
    "LOG_MESSAGE_FIELD",
    "split_value_as_list",
    # Clauses and sinks
    "ClauseMode",
    "FilterClause",
    "FilterQuery",
    "QuerySink",
    # Schema
    "InMemorySchemaLookup",
    "LogType",
    "SchemaLookup",
    # Parsing and escaping
    "Classification",
    "FieldValueEntry",
    "MatchMode",
    "classify",
    "escape_query_chars",
    "parse_field_value_maps",
    "put_wildcard_by_type",
    "tokenize",
    # Errors
    "FieldMapPayloadError",
    "LogSearchQueryError",
]
