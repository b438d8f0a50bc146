from __future__ import annotations

import logging
import uuid
from typing import Any

from flask import Request, g, jsonify, request

logger = logging.getLogger(__name__)


def _get_or_set_request_id() -> str | None:
    """Return a stable per-request id if a request context exists.

    - Prefer an existing value in flask.g
    - Else prefer inbound header 'X-Request-Id'
    - Else generate a new uuid4 and store in flask.g
    - If no request context, return None
    """
    try:
        # Ensure we have a request context
        _ = request.path
    except RuntimeError:
        return None
    rid_existing: str | None = getattr(g, "request_id", None)
    if rid_existing:
        return rid_existing
    rid_hdr: str | None = request.headers.get("X-Request-Id")
    if rid_hdr:
        g.request_id = rid_hdr
        return rid_hdr
    rid_gen = str(uuid.uuid4())
    g.request_id = rid_gen
    return rid_gen


def json_error(
    message: str,
    status: int = 400,
    code: int | str | None = None,
    details: dict[str, Any] | None = None,
):
    payload: dict[str, Any] = {"error": message}
    if code is not None:
        payload["code"] = code
    if details is not None:
        payload["details"] = details
    rid = _get_or_set_request_id()
    if rid is not None:
        payload["request_id"] = rid
    return jsonify(payload), status


def wants_json(req: Request | None = None) -> bool:
    """Heuristic to decide if the current request expects JSON.

    We keep this conservative to avoid affecting HTML routes.
    """
    r = req or request
    accept_json = r.accept_mimetypes.accept_json and not r.accept_mimetypes.accept_html
    return bool(accept_json or r.path.startswith("/api/") or r.is_json)
