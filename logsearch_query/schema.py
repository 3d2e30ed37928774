"""
Schema field type lookup.

The builder consults a `SchemaLookup` to find the declared type of structured
fields before escaping their values. Lookups are keyed by `LogType`, since each
log category lives in its own collection with its own schema.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class LogType(Enum):
    """Log category (one Solr collection per category)."""

    SERVICE = "service"
    AUDIT = "audit"


FieldTypeMetadata = Mapping[str, Any] | str


class SchemaLookup(Protocol):
    """Read-only access to schema field metadata."""

    def field_type(self, log_type: LogType, field: str) -> str | None:
        """Declared type name of `field`, or None when the field is unknown."""
        ...

    def field_type_metadata(self, log_type: LogType, field_type: str) -> FieldTypeMetadata | None:
        """Definition of `field_type` (`class`, `analyzer`, ...), or None."""
        ...


# =============================================================================
# Solr schema API models
# =============================================================================


class _SchemaModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )


class SchemaField(_SchemaModel):
    name: str
    type: str


class SchemaFieldType(_SchemaModel):
    name: str
    class_name: str = Field(alias="class")
    analyzer: dict[str, Any] | None = None

    def metadata(self) -> dict[str, Any]:
        """Field type definition in the shape the escaper expects."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"name"})


class SolrSchema(_SchemaModel):
    schema_fields: list[SchemaField] = Field(default_factory=list, alias="fields")
    field_types: list[SchemaFieldType] = Field(default_factory=list, alias="fieldTypes")


class InMemorySchemaLookup:
    """
    Dict-backed `SchemaLookup`.

    Example:
        schema = InMemorySchemaLookup()
        schema.register_field_type(LogType.SERVICE, "key_lower_case", {
            "class": "solr.TextField",
            "analyzer": {"tokenizer": {"class": "solr.KeywordTokenizerFactory"}},
        })
        schema.register_field(LogType.SERVICE, "host", "key_lower_case")
    """

    def __init__(self) -> None:
        self._field_types: dict[LogType, dict[str, str]] = {}
        self._type_metadata: dict[LogType, dict[str, FieldTypeMetadata]] = {}

    def register_field(self, log_type: LogType, field: str, field_type: str) -> None:
        self._field_types.setdefault(log_type, {})[field] = field_type

    def register_field_type(
        self, log_type: LogType, field_type: str, metadata: FieldTypeMetadata
    ) -> None:
        self._type_metadata.setdefault(log_type, {})[field_type] = metadata

    def field_type(self, log_type: LogType, field: str) -> str | None:
        return self._field_types.get(log_type, {}).get(field)

    def field_type_metadata(self, log_type: LogType, field_type: str) -> FieldTypeMetadata | None:
        return self._type_metadata.get(log_type, {}).get(field_type)

    def load_solr_schema(self, log_type: LogType, schema: Mapping[str, Any]) -> None:
        """
        Register fields and field types from a Solr schema API response.

        Accepts either the full response (`{"schema": {...}}`) or the inner
        schema object with `fields` and `fieldTypes` arrays.

        Raises:
            pydantic.ValidationError: If the schema document is malformed
        """
        body = schema.get("schema", schema)
        parsed = SolrSchema.model_validate(body)
        for field_type in parsed.field_types:
            self.register_field_type(log_type, field_type.name, field_type.metadata())
        for field in parsed.schema_fields:
            self.register_field(log_type, field.name, field.type)

    @classmethod
    def from_solr_schema(cls, log_type: LogType, schema: Mapping[str, Any]) -> InMemorySchemaLookup:
        lookup = cls()
        lookup.load_solr_schema(log_type, schema)
        return lookup
