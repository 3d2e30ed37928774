"""
Escaping of user-supplied values for Solr filter queries.

Two entry points:

- `escape_query_chars` neutralizes every character reserved by the Solr query
  syntax. It is used for free-text tokens and for plain equals/contains filters.
- `put_wildcard_by_type` escapes structured field values according to the field
  type declared in the collection schema (numeric, tokenized text, keyword).
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

# Characters with meaning in the Solr/Lucene query syntax
_QUERY_SYNTAX_CHARS = frozenset('\\+-!():^[]"{}~*?|&;/')

# Same set as the keyword escaping in the schema layer, minus `*` (kept as wildcard)
_KEYWORD_SPECIAL_RE = re.compile(r'([\]\[+&|!(){}^"~=/$@%?:.\\])')
_WILDCARD_RUN_RE = re.compile(r"\*{2,}")

_NUMBER_FIELD_CLASSES: dict[str, Callable[[str], int | float]] = {
    "trieintfield": int,
    "trielongfield": int,
    "intpointfield": int,
    "longpointfield": int,
    "triefloatfield": float,
    "triedoublefield": float,
    "floatpointfield": float,
    "doublepointfield": float,
}

STANDARD_TOKENIZER = "StandardTokenizerFactory"
KEYWORD_TOKENIZER = "KeywordTokenizerFactory"
PATH_HIERARCHY_TOKENIZER = "PathHierarchyTokenizerFactory"


def escape_query_chars(value: str | None) -> str:
    """
    Escape a raw value so Solr treats it as a literal.

    Handles:
    - Query syntax characters (prefixed with a backslash)
    - Whitespace (prefixed with a backslash, so phrases stay one term)
    - Bare newlines (an escaped carriage return is inserted before them)
    """
    if not value:
        return ""
    result: list[str] = []
    prev = ""
    for ch in value:
        if ch == "\n" and prev != "\r":
            result.append("\\\r")
        if ch in _QUERY_SYNTAX_CHARS or ch.isspace():
            result.append("\\")
        result.append(ch)
        prev = ch
    return "".join(result)


def _strip_solr_prefix(class_name: str) -> str:
    return class_name.removeprefix("solr.").lower()


def _parse_metadata(field_type_metadata: Mapping[str, Any] | str | None) -> dict[str, Any]:
    """Normalize field type metadata (schema mapping or its JSON text) to a dict."""
    if not field_type_metadata:
        return {}
    if isinstance(field_type_metadata, Mapping):
        return dict(field_type_metadata)
    try:
        parsed = json.loads(field_type_metadata)
    except json.JSONDecodeError:
        logger.debug(f"Ignoring field type metadata that is not JSON: {field_type_metadata!r}")
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _tokenizer_class(metadata: Mapping[str, Any]) -> str | None:
    analyzer = metadata.get("analyzer")
    if not isinstance(analyzer, Mapping):
        return None
    tokenizer = analyzer.get("tokenizer")
    if not isinstance(tokenizer, Mapping):
        return None
    class_name = tokenizer.get("class")
    if not class_name:
        return None
    return _strip_solr_prefix(str(class_name))


def _number_parser(metadata: Mapping[str, Any]) -> Callable[[str], int | float] | None:
    class_name = metadata.get("class")
    if not class_name:
        return None
    return _NUMBER_FIELD_CLASSES.get(_strip_solr_prefix(str(class_name)))


def _escape_number(value: str, parse_number: Callable[[str], int | float]) -> str | None:
    text = value.replace("*", "").strip()
    if not text:
        return None
    try:
        number = parse_number(text)
    except ValueError:
        return None
    return str(number).replace("-", "\\-")


def _escape_for_standard_tokenizer(value: str) -> str:
    # User wildcards stay active on tokenized text fields
    return escape_query_chars(value.strip()).replace("\\*", "*")


def _escape_keyword(value: str) -> str:
    result = _KEYWORD_SPECIAL_RE.sub(r"\\\1", value.strip())
    for control in ("\n", "\t", "\r"):
        result = result.replace(control, "*")
    result = result.replace(" ", "\\ ")
    return _WILDCARD_RUN_RE.sub("*", result)


def put_wildcard_by_type(
    value: str,
    field_type: str | None,
    field_type_metadata: Mapping[str, Any] | str | None,
) -> str | None:
    """
    Escape a structured field value according to its schema field type.

    Args:
        value: Raw value from the request
        field_type: Schema field type name (None when the field is unknown)
        field_type_metadata: Schema field type definition (`class`, `analyzer`),
            either as a mapping or as its JSON text

    Returns:
        The escaped value, or None when the value cannot be represented in a
        numeric field (e.g. "abc" for an int field).
    """
    if not field_type or not field_type.strip():
        return escape_query_chars(value)

    metadata = _parse_metadata(field_type_metadata)
    parse_number = _number_parser(metadata)
    if parse_number is not None:
        return _escape_number(value, parse_number)

    tokenizer = _tokenizer_class(metadata)
    if tokenizer == STANDARD_TOKENIZER.lower():
        return _escape_for_standard_tokenizer(value)
    if tokenizer == KEYWORD_TOKENIZER.lower() or field_type.lower() == "string":
        return _escape_keyword(value)
    # PathHierarchyTokenizerFactory and unrecognized types get plain literal escaping
    return escape_query_chars(value)
