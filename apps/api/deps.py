from functools import lru_cache

from core.config import settings
from services.admin_api.client import AdminApiClient
from services.invitations.workflow import InviteWorkflow
from services.notifications.center import NotificationCenter


class Navigator:
    """Tracks which setup stage the admin should be on."""

    def __init__(self, next_stage: str):
        self.next_stage = next_stage
        self.stage = "setup.three"
        self.transitions = 0

    def advance(self) -> None:
        self.transitions += 1
        self.stage = self.next_stage


@lru_cache
def get_notifications() -> NotificationCenter:
    return NotificationCenter()


@lru_cache
def get_navigator() -> Navigator:
    return Navigator(settings.NEXT_STAGE)


@lru_cache
def get_admin_client() -> AdminApiClient:
    """Dependency for the admin API client (one connection pool per process)."""
    return AdminApiClient()


@lru_cache
def get_workflow() -> InviteWorkflow:
    """App-scoped so that the single-flight guard spans requests."""
    return InviteWorkflow(
        gateway=get_admin_client(),
        notifier=get_notifications(),
        perform_transition=get_navigator().advance,
        fallback_timeout_ms=settings.INVITE_FALLBACK_TIMEOUT_MS,
        mail_docs_url=settings.MAIL_CONFIG_DOCS_URL,
    )
