from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from models.common_models import UploadResponse
from routers.common import require_session
from services.errors import DecodeFailure, InvalidTransition, UnsupportedFileType
from services.file_upload_service import read_upload, read_uploads
from services.session_service import LoadResult, SessionController, create_session

router = APIRouter(prefix="/upload", tags=["upload"])


def _target_session(session_id: Optional[str]) -> SessionController:
    # Without a session id every upload opens a fresh session
    if session_id:
        return require_session(session_id)
    return create_session()


def _respond(controller: SessionController, result: LoadResult) -> UploadResponse:
    # The notification travels with the response, not through the queue
    controller.notifications.drain()
    if isinstance(result.error, UnsupportedFileType):
        raise HTTPException(status_code=415, detail=result.notification.description)
    if isinstance(result.error, DecodeFailure):
        raise HTTPException(status_code=422, detail=result.notification.description)
    return UploadResponse(session=controller.summary(), notification=result.notification)


@router.post("/excel", response_model=UploadResponse)
async def upload_excel(file: UploadFile = File(...), session_id: Optional[str] = Form(None)):
    controller = _target_session(session_id)
    file_name, content = read_upload(file)
    try:
        result = controller.load_file(file_name, content)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(controller, result)


@router.post("/drop", response_model=UploadResponse)
async def upload_dropped(files: List[UploadFile] = File(...), session_id: Optional[str] = Form(None)):
    controller = _target_session(session_id)
    try:
        result = controller.drop_files(read_uploads(files))
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(controller, result)
