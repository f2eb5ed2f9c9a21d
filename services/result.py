"""
What command handlers and the price service hand back instead of raising.

A handler returning a failed Result is reported to the after hook the same
way as a handler that raised, without a traceback in the log.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from services.error_codes import HANDLER_ERROR

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str = HANDLER_ERROR) -> "Result[T]":
        """Failed result; code is one of services.error_codes."""
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def __str__(self) -> str:
        if self.success:
            return f"ok({self.value!r})" if self.value is not None else "ok"
        return f"[{self.error_code}] {self.error}"
