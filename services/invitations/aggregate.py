from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from domain.models import InviteSummary, RejectedInvite, SubmissionOutcome
from domain.value_objects import NotifyOptions

logger = logging.getLogger(__name__)

KEY_PREFIX = "signup.send-invitations"


class Notifier(Protocol):
    def notify(self, message: str, options: NotifyOptions) -> None: ...


def _rejection_detail(error: Exception) -> str:
    return getattr(error, "detail", None) or str(error)


def aggregate(
    outcomes: Sequence[SubmissionOutcome],
    is_rejection_error: Callable[[Exception], bool],
) -> InviteSummary:
    """Reduce per-item outcomes to success count, rejected items and other failures."""
    summary = InviteSummary()
    for outcome in outcomes:
        if outcome.success:
            summary.success_count += 1
        elif outcome.error is not None and is_rejection_error(outcome.error):
            summary.invalid_rejected.append(
                RejectedInvite(subject=outcome.subject, detail=_rejection_detail(outcome.error))
            )
        else:
            summary.other_errored.append(outcome.subject)
    return summary


def _failed_message(emails: Sequence[str], docs_url: str) -> str:
    noun = "invitations" if len(emails) > 1 else "invitation"
    return (
        f"Failed to send {len(emails)} {noun}: {', '.join(emails)}. "
        f"Please check your email configuration, see {docs_url} for instructions."
    )


def notify_summary(summary: InviteSummary, notifier: Notifier, docs_url: str) -> int:
    """Raise at most one notice per rejection, one batched failure notice and one success notice.

    Returns the number of notices raised.
    """
    raised = 0
    delayed = summary.failures_delayed

    for item in summary.invalid_rejected:
        notifier.notify(
            f"{item.subject} was invalid: {item.detail}",
            NotifyOptions(severity="error", delayed=delayed, key=f"{KEY_PREFIX}.{item.subject}"),
        )
        raised += 1

    if summary.other_errored:
        notifier.notify(
            _failed_message(summary.other_errored, docs_url),
            NotifyOptions(severity="error", delayed=delayed, key=f"{KEY_PREFIX}.failed"),
        )
        raised += 1

    if summary.success_count > 0:
        noun = "invitations" if summary.success_count > 1 else "invitation"
        notifier.notify(
            f"{summary.success_count} {noun} sent!",
            NotifyOptions(severity="success", delayed=True, key=f"{KEY_PREFIX}.success"),
        )
        raised += 1

    logger.info(
        "invitations: sent=%d rejected=%d failed=%d",
        summary.success_count,
        len(summary.invalid_rejected),
        len(summary.other_errored),
    )
    return raised
