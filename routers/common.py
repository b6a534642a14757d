from fastapi import HTTPException

from services.errors import SessionNotFound
from services.session_service import SessionController, get_session


def require_session(session_id: str) -> SessionController:
    try:
        return get_session(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found.")
