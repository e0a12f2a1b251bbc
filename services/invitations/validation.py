from __future__ import annotations

from collections.abc import Sequence

from domain.errors import NO_USERS_MESSAGE
from domain.models import VALID, FieldErrors, ValidationErrorKind, ValidationIssue, ValidationResult

USERS_FIELD = "users"


def evaluate(invalid: Sequence[str]) -> ValidationResult:
    """One InvalidFormat issue per invalid candidate, in candidate order."""
    if not invalid:
        return VALID
    return ValidationResult(errors=tuple(ValidationIssue(subject=c) for c in invalid))


def issue_message(issue: ValidationIssue) -> str:
    if issue.kind is ValidationErrorKind.INVALID_FORMAT:
        return f"{issue.subject} is not a valid email."
    return f"{issue.subject} is invalid."


class ValidationState:
    """Error bag plus the set of fields that may show a validation result."""

    def __init__(self) -> None:
        self.errors = FieldErrors()
        self.has_validated: set[str] = set()

    def validate(self, invalid: Sequence[str], prop: str = USERS_FIELD) -> bool:
        self.errors.clear()
        self.has_validated.add(prop)

        result = evaluate(invalid)
        for issue in result.errors:
            self.errors.add(prop, issue_message(issue))
        return result.ok

    def record_empty(self, prop: str = USERS_FIELD) -> None:
        self.errors.add(prop, NO_USERS_MESSAGE)

    def clear_stale_empty(self, candidate_count: int, prop: str = USERS_FIELD) -> bool:
        """Drop a lone "no users" error once the input has candidates again."""
        messages = self.errors.get(prop)
        if candidate_count > 0 and len(messages) == 1 and is_no_users_message(messages[0]):
            self.errors.remove(prop)
            return True
        return False


def is_no_users_message(message: str | None) -> bool:
    return bool(message) and "no users" in message.lower()
