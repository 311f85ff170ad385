# david/api/deps.py
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from david.api.errors import SESSION_NOT_FOUND
from david.core.db import get_db
from david.models.orm import ChatSession
from david.services import session_service


def db_session(db: Session = Depends(get_db)) -> Session:
    return db


def require_session(db: Session, sid: str) -> ChatSession:
    """Load a chat session or answer 404."""
    try:
        return session_service.get_session(db, sid)
    except session_service.SessionNotFound:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
