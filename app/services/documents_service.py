# app/services/documents_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MissingFieldsError
from app.db.base import utcnow
from app.models.document import DOCUMENT_FIELDS, DocumentRepository, PendingDocumentRepository

log = logging.getLogger(__name__)


class DocumentsService:
    """CRUD over one document table (main or pending)."""

    def __init__(self, model: Type[Any], logger: Optional[logging.Logger] = None):
        self.model = model
        self.log = logger or log
        self.fields = DOCUMENT_FIELDS + (
            ("submitter_email",) if hasattr(model, "submitter_email") else ()
        )

    def create(self, db: Session, data: Dict[str, Any]):
        if not data.get("heading"):
            raise MissingFieldsError(["heading"])

        now = utcnow()
        row = self.model(
            **{k: data.get(k) for k in self.fields},
            created_at=now,
            updated_at=now,
        )
        if row.categories is None:
            row.categories = []
        db.add(row)
        db.commit()
        db.refresh(row)
        self.log.info("document created", extra={"table": self.model.__tablename__, "repo_id": row.repo_id})
        return row

    def get_all(self, db: Session) -> List[Any]:
        return db.execute(
            select(self.model).order_by(self.model.created_at.desc(), self.model.repo_id)
        ).scalars().all()

    def get_by_id(self, db: Session, repo_id: str):
        return db.execute(
            select(self.model).where(self.model.repo_id == repo_id)
        ).scalar_one_or_none()

    def update(self, db: Session, repo_id: str, data: Dict[str, Any]):
        """Partial update: keys absent from `data` keep their stored value."""
        if "heading" in data and not data["heading"]:
            raise MissingFieldsError(["heading"])

        row = self.get_by_id(db, repo_id)
        if row is None:
            return None

        for k in self.fields:
            if k in data:
                setattr(row, k, data[k] if k != "categories" else (data[k] or []))
        row.updated_at = utcnow()
        db.commit()
        db.refresh(row)
        self.log.info("document updated", extra={"table": self.model.__tablename__, "repo_id": repo_id})
        return row

    def delete(self, db: Session, repo_id: str) -> bool:
        res = db.execute(delete(self.model).where(self.model.repo_id == repo_id))
        db.commit()
        removed = res.rowcount == 1
        self.log.info(
            "document deleted",
            extra={"table": self.model.__tablename__, "repo_id": repo_id, "removed": removed},
        )
        return removed


class PendingDocumentsService(DocumentsService):
    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(PendingDocumentRepository, logger)

    def accept(self, db: Session, repo_id: str) -> Optional[DocumentRepository]:
        """
        Copy a pending document into the main repository and drop the
        pending row in one transaction. None when the pending row is gone.
        """
        try:
            pending = db.execute(
                select(PendingDocumentRepository)
                .where(PendingDocumentRepository.repo_id == repo_id)
                .with_for_update()
            ).scalar_one_or_none()
            if pending is None:
                db.rollback()
                return None

            now = utcnow()
            doc = DocumentRepository(
                **{k: getattr(pending, k) for k in DOCUMENT_FIELDS},
                created_at=now,
                updated_at=now,
            )
            db.add(doc)
            res = db.execute(
                delete(PendingDocumentRepository).where(PendingDocumentRepository.repo_id == repo_id)
            )
            if res.rowcount != 1:
                db.rollback()
                return None
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            self.log.exception("document accept failed", extra={"repo_id": repo_id})
            raise

        self.log.info("pending document accepted", extra={"repo_id": repo_id, "document_id": doc.repo_id})
        return doc


def documents_service(logger: Optional[logging.Logger] = None) -> DocumentsService:
    return DocumentsService(DocumentRepository, logger)
