from __future__ import annotations

from services.invitations.validation import is_no_users_message


def _plural(n: int, one: str, many: str) -> str:
    return one if n == 1 else many


def button_text(first_error: str | None, valid_count: int, invalid_count: int) -> str:
    if is_no_users_message(first_error):
        return first_error  # type: ignore[return-value]

    if invalid_count > 0:
        noun = _plural(invalid_count, "email address", "email addresses")
        return f"{invalid_count} invalid {noun}"

    if valid_count > 0:
        return f"Invite {valid_count} {_plural(valid_count, 'user', 'users')}"
    return "Invite some users"


def button_class(result_ok: bool, candidate_count: int) -> str:
    return "gh-btn-green" if result_ok and candidate_count > 0 else "gh-btn-minor"
