# app/api/v1/download.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.core.deps import get_file_storage
from app.services.file_storage import FileStorage, display_name

router = APIRouter(prefix="/download")


@router.get("/{filename}")
def download(filename: str, storage: FileStorage = Depends(get_file_storage)):
    path = storage.resolve(filename)
    if path is None:
        raise HTTPException(status_code=400, detail="Invalid file path")
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(
        path,
        media_type="application/pdf",
        filename=display_name(path.name),
        content_disposition_type="attachment",
    )
