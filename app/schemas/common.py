from __future__ import annotations

import json
from typing import Any, Dict, List


def blank_to_none(data: Any) -> Any:
    """Form posts send empty strings for untouched inputs; treat them as absent."""
    if not isinstance(data, dict):
        return data
    return {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in data.items()}


def as_str_list(value: Any) -> List[str]:
    """
    Accepts a native list, a JSON-encoded list string or a comma-separated
    string and returns a list of non-empty strings.
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, (int, float)):
        items = [value]
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("["):
            try:
                items = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValueError(f"invalid JSON list: {e.msg}")
            if not isinstance(items, list):
                raise ValueError("expected a JSON list")
        else:
            items = raw.split(",")
    else:
        raise ValueError("expected a list, a JSON list string or a comma-separated string")

    out: List[str] = []
    for item in items:
        if item is None:
            continue
        s = str(item).strip()
        if s:
            out.append(s)
    return out


def as_object(value: Any) -> Any:
    """JSON-object string -> dict; anything else is passed through for validation."""
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON object: {e.msg}")
    return value


def form_to_dict(form: Any, skip: tuple = ()) -> Dict[str, Any]:
    """
    Flatten a multipart form: repeated keys become lists, file parts
    named in `skip` are left out.
    """
    out: Dict[str, Any] = {}
    for key in form.keys():
        if key in skip:
            continue
        values = form.getlist(key)
        out[key] = values if len(values) > 1 else values[0]
    return out
