import pytest
from fastapi.testclient import TestClient

from apps.api.deps import Navigator, get_navigator, get_notifications, get_workflow
from apps.api.main import app
from domain.errors import DependencyResolutionError
from domain.value_objects import Role
from services.admin_api.client import is_rejection_error
from services.invitations.workflow import InviteWorkflow
from services.notifications.center import NotificationCenter


class StubGateway:
    def __init__(self, role_error=None):
        self.role_error = role_error
        self.submitted = []

    async def resolve_submission_role(self):
        if self.role_error:
            raise self.role_error
        return Role(id="r1", name="Author")

    async def submit_one(self, email, role):
        self.submitted.append(email)
        return "sent"

    def is_rejection_error(self, error):
        return is_rejection_error(error)


@pytest.fixture
def wired():
    gateway = StubGateway()
    center = NotificationCenter()
    navigator = Navigator("posts.index")
    workflow = InviteWorkflow(gateway, center, navigator.advance, fallback_timeout_ms=4000)
    app.dependency_overrides[get_workflow] = lambda: workflow
    app.dependency_overrides[get_notifications] = lambda: center
    app.dependency_overrides[get_navigator] = lambda: navigator
    yield TestClient(app), gateway, navigator
    app.dependency_overrides.clear()


def test_healthz(wired):
    client, _, _ = wired
    assert client.get("/healthz").json() == {"status": "ok"}


def test_send_invitations(wired):
    client, gateway, navigator = wired
    r = client.post(
        "/setup/invitations",
        json={"users": "a@acme.io\nb@acme.io\nme@acme.io", "owner_email": "me@acme.io"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["state"] == "completed"
    assert body["transitioned"] is True
    assert body["next_stage"] == "posts.index"
    assert body["summary"]["success_count"] == 2
    assert [n["message"] for n in body["notifications"]] == ["2 invitations sent!"]
    assert gateway.submitted == ["a@acme.io", "b@acme.io"]
    assert navigator.transitions == 1

    listed = client.get("/setup/invitations/notifications").json()
    assert listed[0]["key"] == "signup.send-invitations.success"


def test_invalid_addresses_are_reported(wired):
    client, gateway, navigator = wired
    r = client.post("/setup/invitations", json={"users": "a@acme.io\nnope"})
    body = r.json()
    assert r.status_code == 200
    assert body["transitioned"] is False
    assert body["errors"] == ["nope is not a valid email."]
    assert body["button_text"] == "1 invalid email address"
    assert body["next_stage"] == "setup.three"
    assert gateway.submitted == []


def test_empty_input(wired):
    client, _, _ = wired
    body = client.post("/setup/invitations", json={"users": "\n  \n"}).json()
    assert body["errors"] == ["No users to invite"]
    assert body["button_text"] == "No users to invite"


def test_role_failure_returns_502(wired):
    client, gateway, navigator = wired
    gateway.role_error = DependencyResolutionError("role 'Author' not found")
    r = client.post("/setup/invitations", json={"users": "a@acme.io"})
    assert r.status_code == 502
    assert "Author" in r.json()["detail"]
    assert gateway.submitted == []


def test_skip(wired):
    client, _, navigator = wired
    r = client.post("/setup/invitations/skip")
    assert r.json() == {"stage": "posts.index"}
    assert navigator.transitions == 1
