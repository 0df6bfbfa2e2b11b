from __future__ import annotations
"""Result envelope carrying a value alongside accumulated soft errors."""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from ga4_adapter.errors import TranslationError

T = TypeVar("T")


class Message(BaseModel):
    """A translation error or warning."""

    code: str = Field(..., description="Machine-readable error/warning code")
    message: str = Field(..., description="Human-readable message")
    context: dict[str, Any] = Field(
        default_factory=dict, description="Additional context for debugging"
    )

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class Outcome(BaseModel, Generic[T]):
    """Value plus the errors collected while producing it.

    A not-ok outcome may still carry partial data; callers must go through
    `unwrap()` before acting on it.
    """

    ok: bool = Field(..., description="Whether no errors were collected")
    data: Optional[T] = Field(default=None)
    errors: list[Message] = Field(default_factory=list)
    warnings: list[Message] = Field(default_factory=list)

    @classmethod
    def success(
        cls,
        data: T,
        warnings: Optional[list[Message]] = None,
    ) -> "Outcome[T]":
        return cls(ok=True, data=data, warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        errors: list[Message],
        warnings: Optional[list[Message]] = None,
    ) -> "Outcome[T]":
        return cls(ok=False, data=None, errors=errors, warnings=warnings or [])

    @classmethod
    def collect(
        cls,
        data: T,
        errors: list[Message],
        warnings: Optional[list[Message]] = None,
    ) -> "Outcome[T]":
        return cls(ok=not errors, data=data, errors=list(errors), warnings=warnings or [])

    def unwrap(self) -> T:
        """Return the data, or raise `TranslationError` with every collected error."""
        if not self.ok:
            raise TranslationError.from_messages(self.errors)
        return self.data  # type: ignore[return-value]


def err(code: str, message: str, **context: Any) -> Message:
    """Helper to create an error message."""
    return Message(code=code, message=message, context=context)
