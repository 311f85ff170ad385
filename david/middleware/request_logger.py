# david/middleware/request_logger.py
import logging
import time

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("david.http")

# bodies longer than this are cut in the debug log
BODY_LOG_LIMIT = 500


class RequestLoggerMiddleware:
    """
    Logs every HTTP request with:
      - method, path, status, duration
      - X-Req-Id (from client) and X-Sid (session id)
      - request body at DEBUG (safe for small JSON posts)

    Safe body-read: replays the buffered body to the downstream app.
    """
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        start = time.time()

        # Read body safely
        body_bytes = await request.body()

        async def receive_wrapper() -> Message:
            return {"type": "http.request", "body": body_bytes, "more_body": False}

        status = {"code": 500}

        async def send_wrapper(message: Message):
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
            await send(message)

        rid = request.headers.get("x-req-id", "-")
        sid = request.headers.get("x-sid", "-")
        path = request.url.path

        logger.info("[HTTP >] rid=%s sid=%s %s %s", rid, sid, request.method, path)
        if body_bytes and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[HTTP >] rid=%s body=%s", rid,
                body_bytes[:BODY_LOG_LIMIT].decode("utf-8", "ignore"),
            )

        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        finally:
            dur_ms = (time.time() - start) * 1000
            logger.info(
                "[HTTP <] rid=%s sid=%s %s %s -> %d in %.1fms",
                rid, sid, request.method, path, status["code"], dur_ms,
            )
