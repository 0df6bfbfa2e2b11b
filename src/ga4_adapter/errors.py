"""Error types raised by the adapter.

Each error carries an HTTP-style status code so a host protocol can map it onto
its own envelope without inspecting messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional

if TYPE_CHECKING:
    from ga4_adapter.contracts.outcome import Message


class ConnectorError(Exception):
    """Base error for the GA4 query adapter."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TranslationError(ConnectorError):
    """Raised when a query cannot be translated; nothing was sent upstream."""

    status_code = 400

    def __init__(
        self,
        message: str,
        errors: Optional[list[Message]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.errors = list(errors or [])
        merged = dict(details or {})
        if self.errors:
            merged.setdefault("errors", [e.model_dump() for e in self.errors])
        super().__init__(message, merged)

    @classmethod
    def from_messages(cls, messages: Iterable[Message]) -> "TranslationError":
        errors = list(messages)
        summary = "; ".join(e.message for e in errors) or "unknown translation error"
        return cls(f"Query translation failed: {summary}", errors=errors)


class UnsupportedDateFormatError(TranslationError):
    """Raised when a date-range bound is not in a recognised format."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Unsupported date format: {value}",
            details={
                "value": value,
                "supported_formats": ["YYYY-MM-DD", "YYYY-MM-DDTHH:MM:SS", "MM/DD/YYYY"],
            },
        )
        self.value = value


class UpstreamError(ConnectorError):
    """Raised when the GA4 report call fails (bad gateway)."""

    status_code = 502


class UnprocessableResponseError(ConnectorError):
    """Raised when GA4 returns no rows or rows with fewer columns than requested."""

    status_code = 422
