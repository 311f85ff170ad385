from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from david.api.deps import db_session, require_session
from david.api.errors import FAILED, INVALID_IMAGE, error_response
from david.models.chat import ErrorResponse, FrameInfo, TemperatureRequest, TemperatureResponse
from david.services import camera, responder, session_service, temperature

logger = logging.getLogger("david.api.temperature")
router = APIRouter()


@router.post(
    "/check",
    response_model=TemperatureResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def check_temperature(
    body: Optional[TemperatureRequest] = Body(None),
    db: Session = Depends(db_session),
):
    """
    Simulated temperature check.
    With a sid, the result is posted into that chat as if the user sent it,
    followed by the assistant's answer.
    """
    sid = body.sid if body else None
    image = body.image if body else None
    logger.info("POST /api/temperature/check sid=%s frame=%s", sid or "-", bool(image))

    frame = None
    if image:
        try:
            frame = camera.decode_frame(image)
        except camera.InvalidFrame as e:
            logger.info("temperature frame rejected sid=%s: %s", sid or "-", e)
            raise HTTPException(status_code=400, detail=INVALID_IMAGE)

    if sid:
        require_session(db, sid)

    reading = temperature.take_reading()
    text = temperature.format_reading(reading)

    if sid:
        try:
            reply = responder.classify(text)
            session_service.append_exchange(db, sid, text, reply)
        except Exception:
            logger.exception("temperature result not stored sid=%s", sid)
            return error_response(500, FAILED)

    return TemperatureResponse(
        **reading.to_dict(),
        text=text,
        timestamp=datetime.now(timezone.utc),
        frame=FrameInfo(**asdict(frame)) if frame else None,
    )
