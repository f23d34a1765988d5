# app/services/file_storage.py
from __future__ import annotations

import logging
import os
import re
import shutil
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from app.core.config import Settings
from app.core.errors import UploadError

log = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
GENERIC_CONTENT_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")
_STAMP = re.compile(r"^\d{10,}-")


def sanitize_filename(name: str) -> str:
    base = os.path.basename((name or "").replace("\\", "/"))
    base = _UNSAFE.sub("_", base).strip("._")
    return base or "document.pdf"


def display_name(stored: str) -> str:
    """Stored name without the leading `<unix-millis>-` prefix."""
    return _STAMP.sub("", stored, count=1)


class FileStorage:
    """
    Local disk storage for supporting PDFs.
    Files are written completely before save() returns; the stored
    filename is the durable reference kept on the row.
    """

    def __init__(self, settings: Settings, logger: Optional[logging.Logger] = None):
        self.root = Path(settings.upload_dir).resolve()
        self.max_bytes = settings.max_upload_mb * 1024 * 1024
        self.log = logger or log

    def _is_pdf(self, filename: str, content_type: Optional[str]) -> bool:
        ctype = (content_type or "").split(";")[0].strip().lower()
        if ctype == PDF_CONTENT_TYPE:
            return True
        return ctype in GENERIC_CONTENT_TYPES and filename.lower().endswith(".pdf")

    def save(self, upload) -> str:
        """Persist a starlette UploadFile. Returns the stored filename."""
        filename = upload.filename or ""
        if not self._is_pdf(filename, upload.content_type):
            raise UploadError("Only PDF files are allowed")

        stored = f"{int(time.time() * 1000)}-{sanitize_filename(filename)}"
        target = self.root / stored

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            upload.file.seek(0)
            with open(target, "wb") as out:
                shutil.copyfileobj(upload.file, out)
        except OSError as e:
            self.log.exception("upload write failed", extra={"stored_name": stored})
            raise UploadError(f"File upload failed: {e}")

        size = target.stat().st_size
        if size > self.max_bytes:
            target.unlink(missing_ok=True)
            raise UploadError(f"File exceeds {self.max_bytes // (1024 * 1024)} MB limit")

        self.log.info("upload stored", extra={"stored_name": stored, "bytes": size})
        return stored

    def resolve(self, filename: str) -> Optional[Path]:
        """
        Path of a stored file, or None when `filename` escapes the upload
        directory. Existence is not checked.
        """
        candidate = (self.root / filename).resolve()
        if candidate.parent != self.root and self.root not in candidate.parents:
            return None
        if candidate == self.root:
            return None
        return candidate

    def size_of(self, stored: str) -> int:
        return (self.root / stored).stat().st_size

    def discard(self, stored: Optional[str]) -> None:
        """Remove a file stored earlier in the same request; missing files are ignored."""
        if not stored:
            return
        path = self.resolve(stored)
        if path is not None:
            path.unlink(missing_ok=True)
            self.log.info("upload discarded", extra={"stored_name": stored})

    @contextmanager
    def discard_on_error(self, stored: Optional[str]) -> Iterator[None]:
        """Delete `stored` if the block raises, then re-raise."""
        try:
            yield
        except BaseException:
            self.discard(stored)
            raise
