"""
Query sinks: where the builder puts the clauses it creates.

`QuerySink` is the only contract the builder relies on. `FilterQuery` is the
default implementation; it keeps clauses in insertion order and renders them as
Solr request parameters.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from .clauses import FilterClause

MATCH_ALL_QUERY = "*:*"


@runtime_checkable
class QuerySink(Protocol):
    """Append-only accumulator of filter clauses."""

    def add_filter_clause(self, clause: FilterClause) -> None: ...


class FilterQuery:
    """
    A Solr query under construction.

    Not thread-safe: build one instance per request.

    Example:
        query = FilterQuery()
        builder.add_equals(query, "level", "ERROR")
        query.to_params()  # {"q": "*:*", "fq": ["level:ERROR"]}
    """

    def __init__(self, query: str = MATCH_ALL_QUERY) -> None:
        self.query = query
        self._clauses: list[FilterClause] = []

    def add_filter_clause(self, clause: FilterClause) -> None:
        self._clauses.append(clause)

    @property
    def clauses(self) -> tuple[FilterClause, ...]:
        return tuple(self._clauses)

    def filter_queries(self) -> list[str]:
        """Rendered `fq` strings, one per clause, in insertion order."""
        return [clause.to_query_string() for clause in self._clauses]

    def to_params(self) -> dict[str, Any]:
        """Request parameters for the Solr select handler."""
        return {"q": self.query, "fq": self.filter_queries()}

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[FilterClause]:
        return iter(self._clauses)

    def __repr__(self) -> str:
        return f"FilterQuery(q={self.query!r}, fq={self.filter_queries()!r})"
