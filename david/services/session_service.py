from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from david.models.orm import (
    DEFAULT_TITLE,
    ROLE_ASSISTANT,
    ROLE_USER,
    ChatSession,
    Message,
)

logger = logging.getLogger("david.session")

TITLE_MAX_CHARS = 30


class SessionNotFound(LookupError):
    def __init__(self, sid: str):
        super().__init__(f"session {sid} not found")
        self.sid = sid


def _now() -> datetime:
    return datetime.utcnow()


def new_session_id() -> str:
    return uuid.uuid4().hex


def derive_title(text: str) -> str:
    """First 30 characters of the opening message, '...' when cut."""
    if len(text) > TITLE_MAX_CHARS:
        return text[:TITLE_MAX_CHARS] + "..."
    return text


def create_session(db: Session, title: Optional[str] = None) -> ChatSession:
    now = _now()
    st = ChatSession(
        id=new_session_id(),
        title=title or DEFAULT_TITLE,
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(st)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(st)
    logger.info("session created sid=%s", st.id)
    return st


def get_session(db: Session, sid: str) -> ChatSession:
    st = db.get(ChatSession, sid)
    if st is None:
        raise SessionNotFound(sid)
    return st


def list_sessions(db: Session) -> List[ChatSession]:
    """Newest activity first."""
    lst = (
        db.query(ChatSession)
        .order_by(ChatSession.updated_at.desc(), ChatSession.created_at.desc())
        .all()
    )
    logger.debug("list_sessions count=%d", len(lst))
    return lst


def append_exchange(
    db: Session, sid: str, user_text: str, assistant_text: str
) -> Tuple[Message, Message]:
    """
    Persist one user message and its reply together.
    Either both rows land or neither does.
    """
    st = get_session(db, sid)
    now = _now()
    try:
        if not st.messages:
            st.title = derive_title(user_text)
        user_msg = Message(role=ROLE_USER, content=user_text, created_at=now)
        assistant_msg = Message(role=ROLE_ASSISTANT, content=assistant_text, created_at=now)
        st.messages.append(user_msg)
        st.messages.append(assistant_msg)
        st.updated_at = now
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("append_exchange failed sid=%s", sid)
        raise
    logger.info(
        "exchange stored sid=%s user_len=%d reply_len=%d",
        sid, len(user_text), len(assistant_text),
    )
    return user_msg, assistant_msg


def delete_session(db: Session, sid: str) -> None:
    st = get_session(db, sid)
    try:
        db.delete(st)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("session deleted sid=%s", sid)


def clear_sessions(db: Session) -> int:
    """Delete every session and transcript. Returns the number of sessions removed."""
    try:
        db.query(Message).delete(synchronize_session=False)
        count = db.query(ChatSession).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("sessions cleared count=%d", count)
    return count


def stats(db: Session) -> dict:
    return {
        "sessions": db.query(func.count(ChatSession.id)).scalar() or 0,
        "messages": db.query(func.count(Message.id)).scalar() or 0,
    }
