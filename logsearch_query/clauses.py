"""
Filter clauses appended to a log search query.

A clause is one independent Solr filter query (`fq`). Values stored on a clause
are already escaped; rendering only adds the operator syntax.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ClauseMode(Enum):
    """Match semantics of a filter clause."""

    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    MEMBERSHIP = "membership"
    RANGE = "range"


@dataclass(frozen=True, slots=True)
class FilterClause:
    """One filter constraint on a single field."""

    field: str
    mode: ClauseMode
    values: tuple[str, ...]
    negate: bool = False

    def __post_init__(self) -> None:
        if self.mode is ClauseMode.RANGE and len(self.values) != 2:
            raise ValueError("A range clause needs exactly two bounds (from, to)")
        if self.mode is ClauseMode.MEMBERSHIP and not self.values:
            raise ValueError("A membership clause needs at least one value")
        if self.mode is not ClauseMode.MEMBERSHIP and self.mode is not ClauseMode.RANGE:
            if len(self.values) != 1:
                raise ValueError(f"A {self.mode.value} clause takes exactly one value")

    @property
    def value(self) -> str:
        """The single value of a non-membership, non-range clause."""
        return self.values[0]

    def _render_condition(self) -> str:
        if self.mode is ClauseMode.EQUALS:
            return self.value
        if self.mode is ClauseMode.CONTAINS:
            return f"*{self.value}*"
        if self.mode is ClauseMode.STARTS_WITH:
            return f"{self.value}*"
        if self.mode is ClauseMode.ENDS_WITH:
            return f"*{self.value}"
        if self.mode is ClauseMode.RANGE:
            lower, upper = self.values
            return f"[{lower} TO {upper}]"
        # Membership
        if len(self.values) == 1:
            return self.values[0]
        return f"({' OR '.join(self.values)})"

    def to_query_string(self) -> str:
        """Render the clause as a Solr filter query string."""
        prefix = "-" if self.negate else ""
        return f"{prefix}{self.field}:{self._render_condition()}"

    def __str__(self) -> str:
        return self.to_query_string()
