# david/services/camera.py
"""
Captured camera frames for the temperature check.

The frame is only checked and measured; it never affects the reading.
"""
from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from david.core.config import MAX_FRAME_BYTES

logger = logging.getLogger("david.camera")


class InvalidFrame(ValueError):
    pass


@dataclass(frozen=True)
class Frame:
    width: int
    height: int
    format: Optional[str]
    size_bytes: int


def _strip_data_url(data: str) -> str:
    # "data:image/png;base64,AAAA..." -> "AAAA..."
    if data.startswith("data:"):
        header, _, payload = data.partition(",")
        if ";base64" not in header:
            raise InvalidFrame("frame must be base64 encoded")
        return payload
    return data


def decode_frame(data: str, max_bytes: int = MAX_FRAME_BYTES) -> Frame:
    """Decode a base64 image (raw or data: URL) and verify it with Pillow."""
    try:
        raw = base64.b64decode(_strip_data_url(data.strip()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidFrame(f"frame is not valid base64: {e}") from e

    if not raw:
        raise InvalidFrame("frame is empty")
    if len(raw) > max_bytes:
        raise InvalidFrame(f"frame too large: {len(raw)} > {max_bytes} bytes")

    # Validate it's actually an image
    try:
        img = Image.open(io.BytesIO(raw))
        img.verify()
    except Exception as e:
        raise InvalidFrame("frame is not a readable image") from e

    # Reopen image for measuring (verify() closes it)
    with Image.open(io.BytesIO(raw)) as img:
        frame = Frame(width=img.width, height=img.height, format=img.format, size_bytes=len(raw))
    logger.debug("frame ok %dx%d format=%s bytes=%d", frame.width, frame.height, frame.format, frame.size_bytes)
    return frame
