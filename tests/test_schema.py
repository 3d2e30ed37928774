"""Tests for the in-memory schema lookup."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logsearch_query.schema import InMemorySchemaLookup, LogType

SOLR_SCHEMA_RESPONSE = {
    "responseHeader": {"status": 0},
    "schema": {
        "name": "hadoop-logs",
        "fields": [
            {"name": "host", "type": "key_lower_case", "indexed": True},
            {"name": "seq_num", "type": "tlong"},
        ],
        "fieldTypes": [
            {
                "name": "key_lower_case",
                "class": "solr.TextField",
                "positionIncrementGap": "100",
                "analyzer": {"tokenizer": {"class": "solr.KeywordTokenizerFactory"}},
            },
            {"name": "tlong", "class": "solr.TrieLongField"},
        ],
    },
}


def test_register_and_lookup() -> None:
    schema = InMemorySchemaLookup()
    schema.register_field(LogType.SERVICE, "level", "string")
    schema.register_field_type(LogType.SERVICE, "string", {"class": "solr.StrField"})
    assert schema.field_type(LogType.SERVICE, "level") == "string"
    assert schema.field_type_metadata(LogType.SERVICE, "string") == {"class": "solr.StrField"}


def test_lookup_is_per_log_type() -> None:
    schema = InMemorySchemaLookup()
    schema.register_field(LogType.AUDIT, "reqUser", "key_lower_case")
    assert schema.field_type(LogType.AUDIT, "reqUser") == "key_lower_case"
    assert schema.field_type(LogType.SERVICE, "reqUser") is None
    assert schema.field_type_metadata(LogType.SERVICE, "key_lower_case") is None


def test_from_solr_schema() -> None:
    schema = InMemorySchemaLookup.from_solr_schema(LogType.SERVICE, SOLR_SCHEMA_RESPONSE)
    assert schema.field_type(LogType.SERVICE, "host") == "key_lower_case"
    assert schema.field_type(LogType.SERVICE, "seq_num") == "tlong"
    assert schema.field_type_metadata(LogType.SERVICE, "key_lower_case") == {
        "class": "solr.TextField",
        "positionIncrementGap": "100",
        "analyzer": {"tokenizer": {"class": "solr.KeywordTokenizerFactory"}},
    }
    assert schema.field_type_metadata(LogType.SERVICE, "tlong") == {"class": "solr.TrieLongField"}


def test_from_bare_schema_object() -> None:
    schema = InMemorySchemaLookup.from_solr_schema(LogType.AUDIT, SOLR_SCHEMA_RESPONSE["schema"])
    assert schema.field_type(LogType.AUDIT, "host") == "key_lower_case"


def test_malformed_schema_raises() -> None:
    with pytest.raises(ValidationError):
        InMemorySchemaLookup.from_solr_schema(
            LogType.SERVICE, {"fields": [{"name": "host"}]}
        )
