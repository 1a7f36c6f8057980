"""Type definitions and result dataclasses for consistent operation results."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CalcState:
    """The two calculator registers."""

    current: float = 0.0
    memory: float = 0.0


class FailureKind(str, enum.Enum):
    """Categories of recoverable command failures."""

    PARSE_ERROR = "PARSE_ERROR"
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    DIVIDE_BY_ZERO = "DIVIDE_BY_ZERO"
    DOMAIN_ERROR = "DOMAIN_ERROR"
    OVERFLOW = "OVERFLOW"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"

    def __str__(self) -> str:
        return self.value


@dataclass
class OpResult:
    """Result of applying one command to a calculator state.

    On failure ``state`` is the state the command was given, untouched.
    """

    ok: bool
    state: CalcState
    error: str | None = None
    code: FailureKind | None = None

    @classmethod
    def success(cls, state: CalcState) -> OpResult:
        return cls(ok=True, state=state)

    @classmethod
    def failure(cls, state: CalcState, code: FailureKind, error: str) -> OpResult:
        return cls(ok=False, state=state, error=error, code=code)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.error is not None:
            result_dict["error"] = self.error
        if self.code is not None:
            result_dict["code"] = self.code.value
        result_dict["current"] = self.state.current
        result_dict["memory"] = self.state.memory
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"OpResult(ok=False, code={self.code!s}, error={self.error!r})"
        return (
            f"OpResult(ok=True, current={self.state.current!r}, "
            f"memory={self.state.memory!r})"
        )
