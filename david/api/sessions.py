# david/api/sessions.py
"""
Chat sessions: the sidebar list and each session's transcript.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.orm import Session

from david.api.deps import db_session, require_session
from david.models.chat import MessageOut, SessionCreate, SessionDetail, SessionSummary
from david.models.orm import ChatSession
from david.services import session_service

logger = logging.getLogger("david.api.sessions")
router = APIRouter()


def _summary(st: ChatSession) -> SessionSummary:
    return SessionSummary(id=st.id, title=st.title, timestamp=st.updated_at)


def _detail(st: ChatSession) -> SessionDetail:
    return SessionDetail(
        id=st.id,
        title=st.title,
        timestamp=st.updated_at,
        created_at=st.created_at,
        messages=[
            MessageOut(id=m.id, role=m.role, content=m.content, timestamp=m.created_at)
            for m in st.messages
        ],
    )


@router.get("", response_model=List[SessionSummary])
def list_sessions(db: Session = Depends(db_session)):
    items = session_service.list_sessions(db)
    logger.info("GET /api/sessions count=%d", len(items))
    return [_summary(st) for st in items]


@router.post("", response_model=SessionSummary, status_code=201)
def create_session(
    body: Optional[SessionCreate] = Body(None),
    db: Session = Depends(db_session),
):
    st = session_service.create_session(db, title=body.title if body else None)
    logger.info("POST /api/sessions sid=%s", st.id)
    return _summary(st)


@router.delete("")
def clear_sessions(db: Session = Depends(db_session)):
    deleted = session_service.clear_sessions(db)
    logger.info("DELETE /api/sessions deleted=%d", deleted)
    return {"ok": True, "deleted": deleted}


@router.get("/{sid}", response_model=SessionDetail)
def get_session(sid: str, db: Session = Depends(db_session)):
    st = require_session(db, sid)
    logger.info("GET /api/sessions/%s messages=%d", sid, len(st.messages))
    return _detail(st)


@router.delete("/{sid}", status_code=204)
def delete_session(sid: str, db: Session = Depends(db_session)):
    require_session(db, sid)
    session_service.delete_session(db, sid)
    logger.info("DELETE /api/sessions/%s", sid)
    return Response(status_code=204)
