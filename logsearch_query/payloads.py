"""
Decoding of serialized field/value maps.

Include/exclude filters arrive as JSON text holding a list of objects, each
mapping field names to values:

    [{"level": "ERROR"}, {"host": "c6401.ambari.apache.org", "log_message": "*timeout*"}]
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from pydantic import ConfigDict, TypeAdapter, ValidationError

from .exceptions import FieldMapPayloadError

# Numbers are used as their text. A null value is kept as None and skipped later
_FIELD_MAP_LIST = TypeAdapter(
    list[dict[str, str | None]], config=ConfigDict(coerce_numbers_to_str=True)
)


class FieldValueEntry(NamedTuple):
    field: str
    value: str | None


def parse_field_value_maps(payload: str | bytes) -> list[dict[str, str | None]]:
    """
    Decode a field-map payload.

    Raises:
        FieldMapPayloadError: If the payload is not a JSON list of string maps
    """
    try:
        return _FIELD_MAP_LIST.validate_json(payload)
    except ValidationError as e:
        raise FieldMapPayloadError(
            f"Invalid field value map payload: {e.error_count()} error(s)",
            payload=payload if isinstance(payload, str) else payload.decode("utf-8", "replace"),
            details={"errors": e.errors(include_url=False)},
        ) from e


def iter_field_value_entries(payload: str | bytes) -> Iterator[FieldValueEntry]:
    """Yield every (field, value) pair of a field-map payload, map by map."""
    for field_map in parse_field_value_maps(payload):
        for field, value in field_map.items():
            yield FieldValueEntry(field, value)
