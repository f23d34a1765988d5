from __future__ import annotations

from typing import Any, Dict, Optional


def ok(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Success envelope: {status: true, data?, message?}."""
    body: Dict[str, Any] = {"status": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def fail(message: str) -> Dict[str, Any]:
    return {"status": False, "message": message}
