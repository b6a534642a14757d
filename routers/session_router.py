from typing import List

from fastapi import APIRouter, HTTPException, Response

from models.common_models import SessionSummary
from models.session_models import Notification
from routers.common import require_session
from services.errors import SessionNotFound
from services.session_service import create_session, delete_session

router = APIRouter(prefix="/session", tags=["session"])


@router.post("", response_model=SessionSummary)
async def new_session():
    return create_session().summary()


@router.get("/{session_id}", response_model=SessionSummary)
async def session_summary(session_id: str):
    return require_session(session_id).summary()


@router.post("/{session_id}/close", response_model=SessionSummary)
async def close_dataset(session_id: str):
    controller = require_session(session_id)
    controller.close()
    return controller.summary()


@router.get("/{session_id}/notifications", response_model=List[Notification])
async def drain_notifications(session_id: str):
    return require_session(session_id).notifications.drain()


@router.delete("/{session_id}", status_code=204)
async def end_session(session_id: str):
    try:
        delete_session(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found.")
    return Response(status_code=204)
