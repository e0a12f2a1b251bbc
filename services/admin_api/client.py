from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import settings
from domain.errors import (
    AdminApiError,
    DependencyResolutionError,
    InviteRejectedError,
)
from domain.value_objects import Role

logger = logging.getLogger(__name__)

UNPROCESSABLE = 422


def _first_error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    errors = (data or {}).get("errors") or []
    if errors and isinstance(errors[0], dict):
        return str(errors[0].get("message", "")) or response.reason_phrase
    return response.reason_phrase


class AdminApiClient:
    """Async client for the roles / invites endpoints of the admin API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        role_name: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.ADMIN_API_URL).rstrip("/")
        self.role_name = role_name or settings.INVITE_ROLE_NAME
        token = settings.ADMIN_API_TOKEN if token is None else token
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout_s or settings.ADMIN_API_TIMEOUT_S,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def resolve_submission_role(self) -> Role:
        try:
            r = await self._client.get("/roles/")
            r.raise_for_status()
            roles: list[dict[str, Any]] = (r.json() or {}).get("roles", [])
        except (httpx.HTTPError, ValueError) as e:
            raise DependencyResolutionError(f"role lookup failed: {e}") from e

        for role in roles:
            if role.get("name") == self.role_name:
                return Role(id=str(role["id"]), name=role["name"])
        raise DependencyResolutionError(f"role {self.role_name!r} not found")

    async def submit_one(self, email: str, role: Role) -> str:
        """Create one invite; returns the remote status (``"sent"`` on success)."""
        payload = {"invites": [{"email": email, "role_id": role.id}]}
        try:
            r = await self._client.post("/invites/", json=payload)
        except httpx.HTTPError as e:
            raise AdminApiError(f"transport error: {e}") from e

        if r.status_code == UNPROCESSABLE:
            raise InviteRejectedError(email, _first_error_message(r))
        if r.is_error:
            raise AdminApiError(_first_error_message(r), status_code=r.status_code)

        invites = (r.json() or {}).get("invites") or [{}]
        return str(invites[0].get("status", ""))

    def is_rejection_error(self, error: Exception) -> bool:
        return is_rejection_error(error)


def is_rejection_error(error: Exception) -> bool:
    return isinstance(error, InviteRejectedError)
