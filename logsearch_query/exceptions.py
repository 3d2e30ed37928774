"""
Exceptions raised by logsearch-query.

Absent input is never an error: the builder skips it silently. Only payloads that
cannot be decoded surface as exceptions.
"""

from __future__ import annotations

from typing import Any


class LogSearchQueryError(Exception):
    """Base class for all logsearch-query errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class FieldMapPayloadError(LogSearchQueryError, ValueError):
    """A serialized field/value map could not be decoded."""

    def __init__(
        self,
        message: str,
        *,
        payload: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.payload = payload
