"""Operation outcomes that keep the failure cause instead of collapsing it."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):  # noqa: UP046
    """Success with a value, or failure with a cause."""

    value: T | None = None
    error: str | None = None
    status: int | None = None
    """HTTP status of a rejected request, ``None`` when the backend was unreachable."""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, status: int | None = None) -> "Outcome[T]":
        return cls(error=error, status=status)

    def unwrap_or(self, default: T) -> T:
        """Return the value, or ``default`` for a failure."""

        if self.ok:
            return self.value
        return default


class ChangePhase(StrEnum):
    WRITE = "write"
    APPLY = "apply"


@dataclass(frozen=True)
class ChangeOutcome:
    """Result of a (write, apply) pair."""

    failed_phase: ChangePhase | None = None
    error: str | None = None
    status: int | None = None

    @property
    def ok(self) -> bool:
        return self.failed_phase is None

    @classmethod
    def failed(cls, phase: ChangePhase, outcome: Outcome) -> "ChangeOutcome":
        return cls(failed_phase=phase, error=outcome.error, status=outcome.status)
