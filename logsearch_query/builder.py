"""
Filter builder for log search queries.

Turns string-based request parameters into filter clauses on a query sink.
Every `add_*` method takes the sink first, appends zero or more clauses and
returns the same sink, so calls can be chained. Empty input is skipped
silently.

Example:
    from logsearch_query import FilterBuilder, FilterQuery

    builder = FilterBuilder(schema=schema_lookup)
    query = FilterQuery()
    builder.add_equals(query, "type", "hdfs_namenode")
    builder.add_range(query, "logtime", "2017-01-01T00:00:00Z", None)
    builder.add_free_text(query, 'disk "out of space" *timeout*')
    builder.add_exclude_field_map(query, '[{"level": "DEBUG"}]')

    query.filter_queries()
    # ['type:hdfs_namenode',
    #  'logtime:[2017-01-01T00:00:00Z TO *]',
    #  'log_message:disk',
    #  'log_message:out\\ of\\ space',
    #  'log_message:*timeout*',
    #  '-level:DEBUG']
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from .clauses import ClauseMode, FilterClause
from .config import FilterConfig
from .escaping import escape_query_chars, put_wildcard_by_type
from .payloads import FieldValueEntry, iter_field_value_entries
from .schema import LogType, SchemaLookup
from .sink import QuerySink
from .tokenizer import tokenize
from .wildcards import MatchMode, classify

logger = logging.getLogger(__name__)

SinkT = TypeVar("SinkT", bound=QuerySink)

_CLAUSE_MODES = {
    MatchMode.EXACT: ClauseMode.EQUALS,
    MatchMode.CONTAINS: ClauseMode.CONTAINS,
    MatchMode.STARTS_WITH: ClauseMode.STARTS_WITH,
    MatchMode.ENDS_WITH: ClauseMode.ENDS_WITH,
}


def split_value_as_list(value: str | None, separator: str = ",") -> list[str] | None:
    """
    Split `value` on `separator`, omitting empty segments.

    Returns None (not an empty list) when `value` is empty, so callers can tell
    "nothing supplied" apart from "supplied but only separators".
    """
    if not value:
        return None
    return [part for part in value.split(separator) if part]


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


class FilterBuilder:
    """
    Builds filter clauses for one log category.

    Args:
        schema: Field type lookup used to escape structured field-map values.
            Without one, every structured field is treated as unknown.
        log_type: Log category whose schema applies
        config: Field names and sentinels, see `FilterConfig`
    """

    def __init__(
        self,
        schema: SchemaLookup | None = None,
        *,
        log_type: LogType = LogType.SERVICE,
        config: FilterConfig | None = None,
    ):
        self._schema = schema
        self._log_type = log_type
        self._config = config or FilterConfig()

    @property
    def log_type(self) -> LogType:
        return self._log_type

    @property
    def config(self) -> FilterConfig:
        return self._config

    # =========================================================================
    # Single-value filters
    # =========================================================================

    def add_equals(self, sink: SinkT, field: str, value: str | None, negate: bool = False) -> SinkT:
        """Field equals value (escaped literal)."""
        if _has_text(value):
            self._add_clause(sink, field, ClauseMode.EQUALS, [escape_query_chars(value)], negate)
        return sink

    def add_contains(
        self, sink: SinkT, field: str, value: str | None, negate: bool = False
    ) -> SinkT:
        """Field contains value as a substring (escaped literal)."""
        if _has_text(value):
            self._add_clause(sink, field, ClauseMode.CONTAINS, [escape_query_chars(value)], negate)
        return sink

    # =========================================================================
    # Membership filters
    # =========================================================================

    def add_membership(
        self,
        sink: SinkT,
        field: str,
        values: Sequence[str] | None,
        negate: bool = False,
    ) -> SinkT:
        """Field value is one of `values`. Order and duplicates are kept."""
        present = [value for value in values or () if _has_text(value)]
        if present:
            escaped = [escape_query_chars(value) for value in present]
            self._add_clause(sink, field, ClauseMode.MEMBERSHIP, escaped, negate)
        return sink

    def add_membership_if_enabled(
        self, sink: SinkT, value: str | None, field: str, condition: bool
    ) -> SinkT:
        """
        Membership filter from a comma-separated value, applied only when enabled.

        An explicitly empty `value` ("") is different from an absent one (None):
        it filters to the sentinel value (`-1`) so that nothing valid matches,
        while None adds no filter at all.
        """
        if value is None or not condition:
            return sink
        if value == "":
            values = [self._config.empty_membership_sentinel]
        else:
            values = split_value_as_list(value, self._config.list_separator) or []
        return self.add_membership(sink, field, values)

    def add_list_filter(
        self, sink: SinkT, field: str, value: str | None, negate: bool = False
    ) -> SinkT:
        """Membership filter from a comma-separated request parameter."""
        values = split_value_as_list(value, self._config.list_separator)
        return self.add_membership(sink, field, values, negate)

    # =========================================================================
    # Range filter
    # =========================================================================

    def add_range(
        self,
        sink: SinkT,
        field: str,
        from_: str | None = None,
        to: str | None = None,
        negate: bool = False,
    ) -> SinkT:
        """
        Inclusive range filter. A missing or blank bound is open (`*`).

        Bounds are used verbatim: they are range syntax (dates, date math,
        numbers), not free text.
        """
        open_bound = self._config.open_range_bound
        bounds = [
            from_ if _has_text(from_) else open_bound,
            to if _has_text(to) else open_bound,
        ]
        self._add_clause(sink, field, ClauseMode.RANGE, bounds, negate)
        return sink

    # =========================================================================
    # Field-map filters
    # =========================================================================

    def add_include_field_map(self, sink: SinkT, payload: str | None) -> SinkT:
        """Require every field/value pair in a serialized field-map payload."""
        return self._add_field_map(sink, payload, negate=False)

    def add_exclude_field_map(
        self, sink: SinkT, payload: str | None, negate: bool = True
    ) -> SinkT:
        """Exclude every field/value pair in a serialized field-map payload."""
        return self._add_field_map(sink, payload, negate=negate)

    def _add_field_map(self, sink: SinkT, payload: str | None, negate: bool) -> SinkT:
        if not payload or not payload.strip():
            return sink
        # Decode everything first: a malformed payload must not leave partial filters
        entries = list(iter_field_value_entries(payload))
        log_message_field = self._config.log_message_field.lower()
        for entry in entries:
            if entry.field.lower() == log_message_field:
                self.add_free_text(sink, entry.value, negate)
            else:
                self._add_structured_field(sink, entry, negate)
        return sink

    def _add_structured_field(self, sink: QuerySink, entry: FieldValueEntry, negate: bool) -> None:
        if not _has_text(entry.value):
            return
        escaped = self._escape_by_field_type(entry)
        if escaped is None:
            logger.warning(
                f"Skipping value {entry.value!r} for field '{entry.field}': "
                "not valid for the field's numeric type"
            )
            return
        self._add_clause(sink, entry.field, ClauseMode.EQUALS, [escaped], negate)

    def _escape_by_field_type(self, entry: FieldValueEntry) -> str | None:
        if self._schema is None:
            return escape_query_chars(entry.value)
        field_type = self._schema.field_type(self._log_type, entry.field)
        if field_type is None:
            logger.debug(f"Field '{entry.field}' not in {self._log_type.value} schema")
            return escape_query_chars(entry.value)
        metadata = self._schema.field_type_metadata(self._log_type, field_type)
        return put_wildcard_by_type(entry.value, field_type, metadata)

    # =========================================================================
    # Free-text (log message) filter
    # =========================================================================

    def add_free_text(self, sink: SinkT, text: str | None, negate: bool = False) -> SinkT:
        """
        One clause per token of `text` against the log message field.

        Quoted phrases stay one token. `*` at the start and/or end of a token
        selects suffix, prefix or substring matching.
        Tokens made only of `*` markers (`**`) add nothing.
        """
        field = self._config.log_message_field
        for raw_token in tokenize(text):
            token = raw_token.strip()
            if not token:
                continue
            classification = classify(token)
            if not classification.literal:
                logger.debug(f"Skipping wildcard-only token {token!r}")
                continue
            mode = _CLAUSE_MODES[classification.mode]
            logger.debug(f"Token {token!r} -> {mode.value}")
            self._add_clause(sink, field, mode, [classification.escaped], negate)
        return sink

    # =========================================================================
    # Helpers
    # =========================================================================

    def split_value_as_list(
        self, value: str | None, separator: str | None = None
    ) -> list[str] | None:
        return split_value_as_list(value, separator or self._config.list_separator)

    @staticmethod
    def _add_clause(
        sink: QuerySink, field: str, mode: ClauseMode, values: Sequence[str], negate: bool
    ) -> None:
        sink.add_filter_clause(FilterClause(field, mode, tuple(values), negate))
