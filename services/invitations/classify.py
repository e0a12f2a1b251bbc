from __future__ import annotations

from collections.abc import Callable, Iterable

from email_validator import EmailNotValidError, validate_email

from domain.models import ClassifiedSet


def is_valid_email_address(value: str) -> bool:
    """Syntax-only check; no DNS or deliverability lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def classify(
    candidates: Iterable[str],
    is_valid: Callable[[str], bool] = is_valid_email_address,
    excluded: str | None = None,
) -> ClassifiedSet:
    """Partition candidates into valid / invalid.

    A candidate equal to ``excluded`` (the acting owner) lands in neither list:
    the owner cannot invite themselves, and that is not reported as an error.
    """
    valid: list[str] = []
    invalid: list[str] = []
    for candidate in dict.fromkeys(candidates):
        if excluded is not None and candidate == excluded:
            continue
        (valid if is_valid(candidate) else invalid).append(candidate)
    return ClassifiedSet(valid=tuple(valid), invalid=tuple(invalid))
