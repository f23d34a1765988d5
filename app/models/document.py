# app/models/document.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType, new_id, utcnow


class DocumentFieldsMixin:
    categories: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    heading: Mapped[str] = mapped_column(String(512), nullable=False)
    sub_heading: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    agency_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    programme_code: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    document_size: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    # stored upload filename, served by /download/{filename}
    document_link: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    supporting_link: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )


DOCUMENT_FIELDS = (
    "categories",
    "heading",
    "sub_heading",
    "agency_name",
    "programme_code",
    "document_size",
    "document_link",
    "supporting_link",
)


class DocumentRepository(DocumentFieldsMixin, Base):
    __tablename__ = "document_repository"

    repo_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class PendingDocumentRepository(DocumentFieldsMixin, Base):
    __tablename__ = "pending_document_repository"

    repo_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    submitter_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
