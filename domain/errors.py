from __future__ import annotations

NO_USERS_MESSAGE = "No users to invite"


class InviteWorkflowError(Exception): ...


class EmptyInputError(InviteWorkflowError):
    def __init__(self, message: str = NO_USERS_MESSAGE):
        super().__init__(message)


class DependencyResolutionError(InviteWorkflowError):
    """Fatal: the submission payloads cannot be built."""


class SubmissionError(InviteWorkflowError):
    """Per-item failure; contained at the fan-out and never aborts the batch."""


class InviteRejectedError(SubmissionError):
    def __init__(self, email: str, detail: str):
        super().__init__(f"{email} rejected: {detail}")
        self.email = email
        self.detail = detail


class AdminApiError(SubmissionError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
