from typing import List

from fastapi import APIRouter, HTTPException

from models.common_models import CommandRequest, CommandResponse
from models.session_models import CommandHistoryEntry
from routers.common import require_session
from services.errors import CommandInProgress

router = APIRouter(prefix="/commands", tags=["commands"])


@router.post("/execute", response_model=CommandResponse)
async def execute_command(req: CommandRequest):
    controller = require_session(req.session_id)

    try:
        entry = await controller.execute_command(req.command)
    except CommandInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))

    if entry is None:
        raise HTTPException(status_code=400, detail="Nothing to execute: enter a command and load a file first.")

    notifications = controller.notifications.drain()
    return CommandResponse(entry=entry, notification=notifications[-1] if notifications else None)


@router.get("/history/{session_id}", response_model=List[CommandHistoryEntry])
async def command_history(session_id: str):
    return list(require_session(session_id).history())
