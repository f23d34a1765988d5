#app/api/v1/_forms.py
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.schemas.common import form_to_dict

M = TypeVar("M", bound=BaseModel)

FILE_FIELD = "supporting_document"


def _is_multipart(request: Request) -> bool:
    ctype = request.headers.get("content-type", "")
    return ctype.startswith("multipart/form-data") or ctype.startswith(
        "application/x-www-form-urlencoded"
    )


async def read_body(request: Request) -> Tuple[Dict[str, Any], Optional[Any]]:
    """
    Request body as a plain dict plus the optional uploaded file,
    for routes that take either JSON or multipart form data.
    """
    if _is_multipart(request):
        form = await request.form()
        upload = form.get(FILE_FIELD)
        # a text value under the file field is an existing stored name
        if upload is not None and not hasattr(upload, "filename"):
            return form_to_dict(form), None
        if upload is not None and not upload.filename:
            upload = None
        return form_to_dict(form, skip=(FILE_FIELD,)), upload

    raw = await request.body()
    if not raw.strip():
        return {}, None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return data, None


def parse(model: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
