"""
Filter builder configuration.

The defaults mirror the conventions of the log search service schema.
"""

from __future__ import annotations

from dataclasses import dataclass

LOG_MESSAGE_FIELD = "log_message"


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Settings shared by every filter built through a `FilterBuilder`."""

    # Field whose values go through token-level wildcard parsing
    log_message_field: str = LOG_MESSAGE_FIELD
    list_separator: str = ","
    # Stands in for an explicitly empty membership list ("match nothing valid")
    empty_membership_sentinel: str = "-1"
    open_range_bound: str = "*"
