"""Tests for filter clauses and the FilterQuery sink."""

from __future__ import annotations

import pytest

from logsearch_query.clauses import ClauseMode, FilterClause
from logsearch_query.sink import FilterQuery, QuerySink


@pytest.mark.parametrize(
    ("clause", "expected"),
    [
        (FilterClause("level", ClauseMode.EQUALS, ("ERROR",)), "level:ERROR"),
        (FilterClause("log_message", ClauseMode.CONTAINS, ("err",)), "log_message:*err*"),
        (FilterClause("log_message", ClauseMode.STARTS_WITH, ("fail",)), "log_message:fail*"),
        (FilterClause("log_message", ClauseMode.ENDS_WITH, ("ed",)), "log_message:*ed"),
        (FilterClause("host", ClauseMode.MEMBERSHIP, ("a",)), "host:a"),
        (FilterClause("host", ClauseMode.MEMBERSHIP, ("a", "b", "a")), "host:(a OR b OR a)"),
        (FilterClause("logtime", ClauseMode.RANGE, ("*", "2020")), "logtime:[* TO 2020]"),
        (FilterClause("level", ClauseMode.EQUALS, ("DEBUG",), negate=True), "-level:DEBUG"),
    ],
)
def test_to_query_string(clause: FilterClause, expected: str) -> None:
    assert clause.to_query_string() == expected
    assert str(clause) == expected


def test_clause_is_immutable() -> None:
    clause = FilterClause("level", ClauseMode.EQUALS, ("ERROR",))
    with pytest.raises(AttributeError):
        clause.negate = True  # type: ignore[misc]


def test_clause_value_count_is_checked() -> None:
    with pytest.raises(ValueError):
        FilterClause("logtime", ClauseMode.RANGE, ("2020",))
    with pytest.raises(ValueError):
        FilterClause("host", ClauseMode.MEMBERSHIP, ())
    with pytest.raises(ValueError):
        FilterClause("level", ClauseMode.EQUALS, ("a", "b"))


class TestFilterQuery:
    def test_is_a_query_sink(self) -> None:
        assert isinstance(FilterQuery(), QuerySink)

    def test_keeps_insertion_order(self) -> None:
        query = FilterQuery()
        query.add_filter_clause(FilterClause("b", ClauseMode.EQUALS, ("2",)))
        query.add_filter_clause(FilterClause("a", ClauseMode.EQUALS, ("1",)))
        assert query.filter_queries() == ["b:2", "a:1"]
        assert [clause.field for clause in query] == ["b", "a"]
        assert len(query) == 2

    def test_to_params(self) -> None:
        query = FilterQuery()
        query.add_filter_clause(FilterClause("level", ClauseMode.EQUALS, ("ERROR",)))
        assert query.to_params() == {"q": "*:*", "fq": ["level:ERROR"]}

    def test_empty(self) -> None:
        query = FilterQuery("type:hdfs")
        assert query.clauses == ()
        assert query.to_params() == {"q": "type:hdfs", "fq": []}
