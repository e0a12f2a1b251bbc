from __future__ import annotations

import asyncio
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from apps.api.deps import Navigator, get_navigator, get_notifications, get_workflow
from apps.api.schemas.invitations import InviteRequest, InviteResponse, NoticeRead, StageRead
from services.invitations.validation import USERS_FIELD
from services.invitations.workflow import InviteRun, InviteWorkflow
from services.notifications.center import NotificationCenter

router = APIRouter(prefix="/setup/invitations", tags=["invitations"])


def _notices(center: NotificationCenter) -> List[NoticeRead]:
    return [
        NoticeRead(
            message=n.message,
            severity=n.options.severity,
            delayed=n.options.delayed,
            key=n.options.key,
        )
        for n in center.alerts
    ]


async def _until_done_or_transitioned(run: InviteRun) -> None:
    waiter = asyncio.create_task(run.guard.wait())
    try:
        await asyncio.wait({run.task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()


@router.post("", response_model=InviteResponse)
async def send_invitations(
    payload: InviteRequest,
    workflow: InviteWorkflow = Depends(get_workflow),
    navigator: Navigator = Depends(get_navigator),
    notifications: NotificationCenter = Depends(get_notifications),
):
    """
    Validate and send the invitations. Responds once the run finishes or the
    slow-submission fallback moves the admin on, whichever comes first.
    """
    if workflow.busy:
        raise HTTPException(status_code=409, detail="Invitations are already being sent")

    workflow.owner_email = payload.owner_email
    workflow.set_users(payload.users)
    run = workflow.start_invite()
    if run is None:
        raise HTTPException(status_code=409, detail="Invitations are already being sent")

    await _until_done_or_transitioned(run)
    if run.task.done() and not run.task.cancelled() and run.task.exception() is not None:
        raise HTTPException(status_code=502, detail=str(run.task.exception()))

    return InviteResponse(
        state=run.state,
        transitioned=run.guard.fired,
        next_stage=navigator.stage,
        errors=workflow.validation.errors.get(USERS_FIELD),
        button_text=workflow.button_text,
        button_class=workflow.button_class,
        summary=run.summary,
        notifications=_notices(notifications),
    )


@router.post("/skip", response_model=StageRead)
async def skip_invitations(
    workflow: InviteWorkflow = Depends(get_workflow),
    navigator: Navigator = Depends(get_navigator),
):
    workflow.skip_invite()
    return StageRead(stage=navigator.stage)


@router.get("/notifications", response_model=List[NoticeRead])
async def list_notifications(notifications: NotificationCenter = Depends(get_notifications)):
    return _notices(notifications)
