from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from david.api.deps import db_session, require_session
from david.api.errors import FAILED, INVALID_MESSAGE, error_response
from david.models.chat import ChatRequest, ChatResponse, ErrorResponse
from david.services import responder, session_service

logger = logging.getLogger("david.api.chat")
router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def _chat_impl(request: Request, db: Session):
    # Body is parsed by hand so a bad payload answers 400 before classification
    try:
        payload = await request.json()
        req = ChatRequest.model_validate(payload)
    except ValueError:
        logger.info("POST /api/chat rejected: invalid body")
        return error_response(400, INVALID_MESSAGE)

    sid = req.sid
    logger.info("POST /api/chat sid=%s len=%d", sid or "-", len(req.message))

    if sid:
        require_session(db, sid)

    try:
        reply = responder.classify(req.message)
        if sid:
            session_service.append_exchange(db, sid, req.message, reply)
    except Exception:
        logger.exception("chat failed sid=%s", sid or "-")
        return error_response(500, FAILED)

    logger.info("POST /api/chat sid=%s done reply_len=%d", sid or "-", len(reply))
    return ChatResponse(response=reply, timestamp=_now())


@router.post("/chat", name="chat", response_model=ChatResponse, responses=_ERRORS)
async def chat(request: Request, db: Session = Depends(db_session)):
    return await _chat_impl(request, db)


@router.post("/chat/", include_in_schema=False, name="chat_slash")
async def chat_slash(request: Request, db: Session = Depends(db_session)):
    return await _chat_impl(request, db)
