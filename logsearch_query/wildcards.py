"""Wildcard classification of free-text tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .escaping import escape_query_chars

WILDCARD = "*"


class MatchMode(Enum):
    """How a free-text token is matched against the log message."""

    EXACT = "exact"  # token (or quoted phrase) as-is
    CONTAINS = "contains"  # *token*
    ENDS_WITH = "ends_with"  # *token
    STARTS_WITH = "starts_with"  # token*


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying one token."""

    mode: MatchMode
    literal: str

    @property
    def escaped(self) -> str:
        return escape_query_chars(self.literal)


def classify(token: str) -> Classification:
    """
    Decide how a token is matched, based on leading/trailing `*`.

    Rules are checked in order and the first match wins:

    1. Phrase (contains a space), no `*` at either end, a lone `*`, or
       empty -> EXACT
    2. `*` at both ends -> CONTAINS
    3. `*` only at the start -> ENDS_WITH
    4. `*` only at the end -> STARTS_WITH
    """
    starts = token.startswith(WILDCARD)
    ends = token.endswith(WILDCARD)

    if " " in token or token in ("", WILDCARD) or (not starts and not ends):
        return Classification(MatchMode.EXACT, token)
    if starts and ends:
        return Classification(MatchMode.CONTAINS, token[1:-1])
    if starts:
        return Classification(MatchMode.ENDS_WITH, token[1:])
    return Classification(MatchMode.STARTS_WITH, token[:-1])
