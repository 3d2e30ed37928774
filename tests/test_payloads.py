"""Tests for field-map payload decoding."""

from __future__ import annotations

import pytest

from logsearch_query.exceptions import FieldMapPayloadError, LogSearchQueryError
from logsearch_query.payloads import (
    FieldValueEntry,
    iter_field_value_entries,
    parse_field_value_maps,
)


def test_parse_list_of_maps() -> None:
    payload = '[{"level": "ERROR"}, {"host": "h1", "type": "hdfs"}]'
    assert parse_field_value_maps(payload) == [
        {"level": "ERROR"},
        {"host": "h1", "type": "hdfs"},
    ]


def test_numbers_are_used_as_text() -> None:
    assert parse_field_value_maps('[{"port": 8080}]') == [{"port": "8080"}]


def test_null_values_are_kept_as_none() -> None:
    assert list(iter_field_value_entries('[{"level": null, "host": "h1"}]')) == [
        FieldValueEntry("level", None),
        FieldValueEntry("host", "h1"),
    ]


def test_entries_in_map_order() -> None:
    entries = list(iter_field_value_entries(b'[{"a": "1", "b": "2"}, {"c": "3"}]'))
    assert entries == [
        FieldValueEntry("a", "1"),
        FieldValueEntry("b", "2"),
        FieldValueEntry("c", "3"),
    ]


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '{"level": "ERROR"}',
        '[{"level": ["ERROR"]}]',
        "[1, 2]",
    ],
)
def test_malformed_payload_raises(payload: str) -> None:
    with pytest.raises(FieldMapPayloadError) as exc_info:
        parse_field_value_maps(payload)
    err = exc_info.value
    assert isinstance(err, LogSearchQueryError)
    assert isinstance(err, ValueError)
    assert err.payload == payload
    assert err.details is not None
    assert err.details["errors"]
