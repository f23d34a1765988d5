# /app/core/deps.py
from fastapi import Depends, Request

from app.core.config import Settings
from app.services.file_storage import FileStorage


def get_app_settings(request: Request) -> Settings:
    """Settings object the app was built with (see app.main.create_app)."""
    return request.app.state.settings


def get_file_storage(settings: Settings = Depends(get_app_settings)) -> FileStorage:
    return FileStorage(settings)
