from __future__ import annotations

import sys
import logging
from typing import List, Dict, Any

from fastapi import APIRouter, Depends, Request
import pydantic  # type: ignore
from sqlalchemy.orm import Session

from david.api.deps import db_session
from david.core.config import DATABASE_URL
from david.services import session_service
from david.services.knowledge_base import TOPICS

logger = logging.getLogger("david.api.health")
router = APIRouter()


@router.get("/ping")
def ping():
    logger.info("GET /health/ping")
    return {"ok": True}


@router.get("/store")
def store_health(db: Session = Depends(db_session)):
    s = session_service.stats(db)
    logger.info("GET /health/store sessions=%d messages=%d", s["sessions"], s["messages"])
    return {
        "ok": True,
        "backend": DATABASE_URL.split(":", 1)[0],
        "sessions": s["sessions"],
        "messages": s["messages"],
    }


@router.get("/topics")
def topics_health():
    """Buckets in match order."""
    out = [{"name": t.name, "keywords": list(t.keywords)} for t in TOPICS]
    logger.info("GET /health/topics count=%d", len(out))
    return {
        "ok": True,
        "topics": out,
        "python": sys.version.split()[0],
        "pydantic": getattr(pydantic, "__version__", "unknown"),
    }


_HTTP_METHODS = {"get", "put", "post", "delete", "patch", "options", "head", "trace"}


@router.get("/routes")
def list_routes(request: Request):
    """
    Introspect all registered routes to verify there are no collisions.
    Routes of included routers are read from the OpenAPI schema.
    """
    app = request.app
    seen: Dict[str, Dict[str, Any]] = {}
    for r in app.routes:
        path = getattr(r, "path", None)
        methods = getattr(r, "methods", None)
        if path and methods:
            for m in methods:
                seen[f"{m} {path}"] = {"path": path, "method": m, "name": getattr(r, "name", None)}
    for path, item in app.openapi().get("paths", {}).items():
        for m, op in item.items():
            if m not in _HTTP_METHODS:
                continue
            key = f"{m.upper()} {path}"
            seen.setdefault(key, {"path": path, "method": m.upper(), "name": op.get("operationId")})

    by_path: Dict[str, Dict[str, Any]] = {}
    for e in seen.values():
        row = by_path.setdefault(e["path"], {"path": e["path"], "methods": set(), "name": e["name"]})
        row["methods"].add(e["method"])
    out: List[Dict[str, Any]] = [
        {"path": row["path"], "methods": sorted(row["methods"]), "name": row["name"]}
        for row in by_path.values()
    ]
    out.sort(key=lambda x: (x["path"], ",".join(x["methods"])))
    logger.info("GET /health/routes count=%d", len(out))
    return {"ok": True, "routes": out}
