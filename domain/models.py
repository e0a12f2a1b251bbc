from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ValidationErrorKind(str, Enum):
    # more kinds may exist later; consumers must not assume this set is closed
    INVALID_FORMAT = "email"


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUPERSEDED = "superseded"
    COMPLETED = "completed"


class ValidationIssue(BaseModel):
    subject: str
    kind: ValidationErrorKind = ValidationErrorKind.INVALID_FORMAT


class ValidationResult(BaseModel):
    errors: tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


VALID = ValidationResult()


@dataclass(frozen=True)
class ClassifiedSet:
    valid: tuple[str, ...] = ()
    invalid: tuple[str, ...] = ()


@dataclass
class SubmissionOutcome:
    subject: str
    success: bool
    remote_state: Optional[str] = None
    error: Optional[Exception] = None


class RejectedInvite(BaseModel):
    subject: str
    detail: str


class InviteSummary(BaseModel):
    success_count: int = 0
    invalid_rejected: list[RejectedInvite] = []
    other_errored: list[str] = []

    @property
    def failures_delayed(self) -> bool:
        """Failure notices wait behind the success notice whenever anything was sent."""
        return self.success_count > 0


@dataclass
class FieldErrors:
    """Per-property error messages bound to the form, in insertion order."""

    messages: dict[str, list[str]] = field(default_factory=dict)

    def add(self, prop: str, message: str) -> None:
        self.messages.setdefault(prop, []).append(message)

    def remove(self, prop: str) -> None:
        self.messages.pop(prop, None)

    def clear(self) -> None:
        self.messages.clear()

    def get(self, prop: str) -> list[str]:
        return list(self.messages.get(prop, []))

    def first(self, prop: str) -> str | None:
        items = self.messages.get(prop)
        return items[0] if items else None

    def __len__(self) -> int:
        return sum(len(v) for v in self.messages.values())
