"""
Bulk invitation workflow.

    set_users -> invite -> validate -> fallback timer -> resolve role
              -> submit all (concurrently) -> cancel timer -> notify -> transition

The terminal transition fires at most once per run, from whichever of normal
completion or the fallback timer gets there first.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, Protocol

from domain.errors import DependencyResolutionError, EmptyInputError
from domain.models import ClassifiedSet, InviteSummary, RunState, SubmissionOutcome
from domain.value_objects import Role
from services.invitations.aggregate import Notifier, aggregate, notify_summary
from services.invitations.classify import classify, is_valid_email_address
from services.invitations.labels import button_class, button_text
from services.invitations.normalize import normalize
from services.invitations.tasks import DropTask
from services.invitations.validation import USERS_FIELD, ValidationState, evaluate

logger = logging.getLogger(__name__)

SENT = "sent"


class InviteGateway(Protocol):
    async def resolve_submission_role(self) -> Role: ...

    async def submit_one(self, email: str, role: Role) -> str: ...

    def is_rejection_error(self, error: Exception) -> bool: ...


class TransitionGuard:
    """One-shot flag around the terminal transition, scoped to a single run."""

    def __init__(self, perform: Callable[[], None]):
        self._perform = perform
        self.fired = False
        self.source: str | None = None
        self._event = asyncio.Event()

    def trigger(self, source: str) -> bool:
        if self.fired:
            logger.debug("transition already performed by %s; %s is a no-op", self.source, source)
            return False
        self.fired = True
        self.source = source
        logger.info("terminal transition triggered by %s", source)
        self._perform()
        self._event.set()
        return True

    async def wait(self) -> None:
        await self._event.wait()


@dataclass
class InviteRun:
    guard: TransitionGuard
    state: RunState = RunState.RUNNING
    submitted: tuple[str, ...] = ()
    outcomes: list[SubmissionOutcome] = field(default_factory=list)
    summary: Optional[InviteSummary] = None
    error: Optional[Exception] = None
    task: Optional[asyncio.Task] = None


class InviteWorkflow:
    def __init__(
        self,
        gateway: InviteGateway,
        notifier: Notifier,
        perform_transition: Callable[[], None],
        *,
        owner_email: str | None = None,
        is_valid: Callable[[str], bool] = is_valid_email_address,
        fallback_timeout_ms: int = 4000,
        mail_docs_url: str = "",
    ):
        self.gateway = gateway
        self.notifier = notifier
        self.perform_transition = perform_transition
        self.owner_email = owner_email
        self.is_valid = is_valid
        self.fallback_timeout_ms = fallback_timeout_ms
        self.mail_docs_url = mail_docs_url

        self.users = ""
        self.validation = ValidationState()
        self.current_run: InviteRun | None = None

        self._invite_task = DropTask(self._invite, name="invite")
        self._slow_submission_timeout = DropTask(self._fallback, name="slow-submission-timeout")

    # --- derived state (recomputed on demand) ---

    @property
    def users_list(self) -> list[str]:
        return normalize(self.users)

    @property
    def classified(self) -> ClassifiedSet:
        return classify(self.users_list, self.is_valid, self.owner_email)

    @property
    def valid_users(self) -> tuple[str, ...]:
        return self.classified.valid

    @property
    def invalid_users(self) -> tuple[str, ...]:
        return self.classified.invalid

    @property
    def button_text(self) -> str:
        classified = self.classified
        return button_text(
            self.validation.errors.first(USERS_FIELD),
            len(classified.valid),
            len(classified.invalid),
        )

    @property
    def button_class(self) -> str:
        return button_class(evaluate(self.invalid_users).ok, len(self.users_list))

    @property
    def busy(self) -> bool:
        return self._invite_task.is_running

    @property
    def state(self) -> RunState:
        return self.current_run.state if self.current_run else RunState.IDLE

    # --- operations ---

    def set_users(self, raw: str) -> None:
        self.users = raw
        self.validation.clear_stale_empty(len(self.users_list))

    def validate(self) -> bool:
        return self.validation.validate(self.invalid_users)

    def skip_invite(self) -> None:
        self.perform_transition()

    def start_invite(self) -> InviteRun | None:
        """Start a run, or return None if one is already in flight."""
        if self._invite_task.is_running:
            logger.info("invite already running; ignoring request")
            return None

        previous = self.current_run
        if previous is not None and self._slow_submission_timeout.is_running:
            previous.state = RunState.SUPERSEDED
            self._slow_submission_timeout.cancel_all()

        run = InviteRun(guard=TransitionGuard(self.perform_transition))
        self.current_run = run
        run.task = self._invite_task.perform(run)
        return run

    async def invite(self) -> InviteRun | None:
        run = self.start_invite()
        if run is None:
            return None
        await run.task
        return run

    async def _invite(self, run: InviteRun) -> InviteRun:
        try:
            users = self.valid_users
            if not self.validate():
                return run
            if not users:
                run.error = EmptyInputError()
                self.validation.record_empty()
                return run

            self._slow_submission_timeout.perform(run.guard, self.fallback_timeout_ms)

            role = await self._resolve_role(run)
            run.submitted = users
            run.outcomes = await self._save_invites(users, role)

            self._slow_submission_timeout.cancel_all()

            run.summary = aggregate(run.outcomes, self.gateway.is_rejection_error)
            notify_summary(run.summary, self.notifier, self.mail_docs_url)
            run.guard.trigger("completion")
            return run
        finally:
            if run.state is RunState.RUNNING:
                run.state = RunState.COMPLETED

    async def _fallback(self, guard: TransitionGuard, deadline_ms: int) -> None:
        await asyncio.sleep(deadline_ms / 1000)
        logger.warning("invitations still pending after %dms; moving on", deadline_ms)
        guard.trigger("fallback")

    async def _resolve_role(self, run: InviteRun) -> Role:
        try:
            return await self.gateway.resolve_submission_role()
        except DependencyResolutionError as e:
            run.error = e
            logger.exception("could not resolve invite role")
            raise
        except Exception as e:  # noqa: BLE001
            run.error = DependencyResolutionError(str(e))
            logger.exception("could not resolve invite role")
            raise run.error from e

    async def _save_invites(self, users: tuple[str, ...], role: Role) -> list[SubmissionOutcome]:
        return list(await asyncio.gather(*(self._save_one(email, role) for email in users)))

    async def _save_one(self, email: str, role: Role) -> SubmissionOutcome:
        try:
            status = await self.gateway.submit_one(email, role)
        except Exception as e:  # noqa: BLE001
            logger.warning("invite for %s failed: %s", email, e)
            return SubmissionOutcome(subject=email, success=False, error=e)
        return SubmissionOutcome(subject=email, success=status == SENT, remote_state=status)
