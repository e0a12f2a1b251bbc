from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models import InviteSummary, RunState


class InviteRequest(BaseModel):
    users: str = Field("", description="One email address per line.")
    owner_email: Optional[str] = None


class NoticeRead(BaseModel):
    message: str
    severity: str
    delayed: bool = False
    key: Optional[str] = None


class InviteResponse(BaseModel):
    state: RunState
    transitioned: bool
    next_stage: str
    errors: List[str] = []
    button_text: str
    button_class: str
    summary: Optional[InviteSummary] = None
    notifications: List[NoticeRead] = []


class StageRead(BaseModel):
    stage: str
