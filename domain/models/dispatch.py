"""
Dispatch outcomes and errors reported to the dispatch observer.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from services import error_codes
from services.error_codes import HANDLER_ERROR, RATE_LIMITED


class DispatchOutcome(str, enum.Enum):
    NOT_A_COMMAND = "not_a_command"
    SUPPRESSED = "suppressed"
    UNKNOWN_COMMAND = error_codes.UNKNOWN_COMMAND
    RATE_LIMITED = error_codes.RATE_LIMITED
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchError:
    """
    Why a command did not run (or did not run cleanly).

    code is one of services.error_codes. is_first_try, retry_after and queued are
    only meaningful for RATE_LIMITED; queued means the call holds a waiter slot
    and will run by itself once the window resets. exception is set when a
    handler raised.
    """

    code: str
    message: str = ""
    is_first_try: bool = False
    retry_after: float = 0.0
    queued: bool = False
    exception: BaseException | None = None

    @property
    def retry_after_seconds(self) -> int:
        return int(math.ceil(max(0.0, self.retry_after)))

    @classmethod
    def rate_limited(cls, *, is_first_try: bool, retry_after: float, queued: bool = False) -> "DispatchError":
        return cls(
            code=RATE_LIMITED,
            message=f"Rate limited for {retry_after:.1f}s",
            is_first_try=is_first_try,
            retry_after=retry_after,
            queued=queued,
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> "DispatchError":
        return cls(code=HANDLER_ERROR, message=f"{type(exc).__name__}: {exc}", exception=exc)

    @classmethod
    def from_failure(cls, error: str | None, code: str | None = None) -> "DispatchError":
        return cls(code=code or HANDLER_ERROR, message=error or "Command failed")

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}" if self.message else self.code
