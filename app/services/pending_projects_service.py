# app/services/pending_projects_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MissingFieldsError, PendingProjectNotFound
from app.models.pending_project import PendingProject, PENDING_RELATION_FIELDS
from app.schemas.projects import PendingProjectPayload, WashComponentPayload
from app.services.projects_service import ProjectsService, RELATIONS, scalar_values
from app.services.serializers import iso, project_fields

log = logging.getLogger(__name__)


def _pending_dict(row: PendingProject) -> Dict[str, Any]:
    out = {"pending_id": row.pending_id}
    out.update(project_fields(row))
    out["submitter_email"] = row.submitter_email
    out["submitted_at"] = iso(row.submitted_at)
    out["wash_component"] = row.wash_component
    for f in PENDING_RELATION_FIELDS:
        out[f] = list(getattr(row, f) or [])
    return out


class PendingProjectsService:
    """
    Staging area for public submissions.

    States: submitted (row exists) -> approved | rejected. Both transitions
    delete the row, so each one can happen at most once per pending id.

    Public methods:
    - submit(db, payload) -> PendingProject
    - get_all(db) / get_by_id(db, pending_id)
    - update(db, pending_id, payload) -> Optional[PendingProject]
    - approve(db, pending_id) -> new project id
    - reject(db, pending_id) -> bool (whether a row was removed)
    """

    def __init__(
        self,
        projects: Optional[ProjectsService] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.log = logger or log
        self.projects = projects or ProjectsService(logger=self.log)

    def _apply(self, row: PendingProject, payload: PendingProjectPayload) -> None:
        for k, v in scalar_values(payload).items():
            setattr(row, k, v)
        row.submitter_email = payload.submitter_email
        for f in PENDING_RELATION_FIELDS:
            setattr(row, f, list(getattr(payload, f)))
        row.wash_component = (
            payload.wash_component.model_dump() if payload.wash_component is not None else None
        )

    def submit(self, db: Session, payload: PendingProjectPayload) -> PendingProject:
        missing = payload.missing_required()
        if missing:
            raise MissingFieldsError(missing)

        row = PendingProject()
        self._apply(row, payload)
        db.add(row)
        db.commit()
        db.refresh(row)
        self.log.info("pending project submitted", extra={"pending_id": row.pending_id})
        return row

    def _resolve(self, db: Session, rows: List[PendingProject]) -> List[Dict[str, Any]]:
        """Attach display objects for the staged ids; unknown ids are skipped."""
        wanted: Dict[str, set] = {rel.ids_field: set() for rel in RELATIONS}
        for row in rows:
            for rel in RELATIONS:
                wanted[rel.ids_field].update(getattr(row, rel.ids_field) or [])

        lookup: Dict[str, Dict[str, Any]] = {}
        for rel in RELATIONS:
            ids = wanted[rel.ids_field]
            if not ids:
                lookup[rel.key] = {}
                continue
            found = db.execute(select(rel.entity).where(rel.entity_pk.in_(ids))).scalars().all()
            lookup[rel.key] = {getattr(e, rel.pk): rel.to_dict(e) for e in found}

        out = []
        for row in rows:
            item = _pending_dict(row)
            for rel in RELATIONS:
                table = lookup[rel.key]
                item[rel.key] = [table[i] for i in (getattr(row, rel.ids_field) or []) if i in table]
            out.append(item)
        return out

    def get_all(self, db: Session) -> List[Dict[str, Any]]:
        rows = db.execute(
            select(PendingProject).order_by(
                PendingProject.submitted_at.desc(), PendingProject.pending_id
            )
        ).scalars().all()
        return self._resolve(db, rows)

    def get_by_id(self, db: Session, pending_id: str) -> Optional[Dict[str, Any]]:
        row = db.execute(
            select(PendingProject).where(PendingProject.pending_id == pending_id)
        ).scalar_one_or_none()
        if row is None:
            return None
        return self._resolve(db, [row])[0]

    def update(
        self, db: Session, pending_id: str, payload: PendingProjectPayload
    ) -> Optional[PendingProject]:
        missing = payload.missing_required()
        if missing:
            raise MissingFieldsError(missing)

        row = db.execute(
            select(PendingProject).where(PendingProject.pending_id == pending_id)
        ).scalar_one_or_none()
        if row is None:
            return None

        self._apply(row, payload)
        db.commit()
        db.refresh(row)
        self.log.info("pending project updated", extra={"pending_id": pending_id})
        return row

    def _claim(self, db: Session, pending_id: str) -> None:
        """
        Conditional delete of the staged row. Exactly one row must go away;
        if a concurrent approve/reject already removed it, the whole
        approval is abandoned.
        """
        res = db.execute(
            delete(PendingProject).where(PendingProject.pending_id == pending_id)
        )
        if res.rowcount != 1:
            raise PendingProjectNotFound(pending_id)

    def approve(self, db: Session, pending_id: str) -> str:
        """
        Promote a pending row into a Project with WASH and relation rows,
        then claim the pending row, all in one transaction. Any failure
        rolls back everything and leaves the pending row in place.
        """
        try:
            row = db.execute(
                select(PendingProject)
                .where(PendingProject.pending_id == pending_id)
                .with_for_update()
            ).scalar_one_or_none()
            if row is None:
                raise PendingProjectNotFound(pending_id)

            wash = (
                WashComponentPayload.model_validate(row.wash_component)
                if row.wash_component
                else None
            )
            relation_ids = {f: list(getattr(row, f) or []) for f in PENDING_RELATION_FIELDS}

            project = self.projects._insert(
                db, values=scalar_values(row), wash=wash, relation_ids=relation_ids
            )
            self._claim(db, pending_id)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            self.log.exception("pending approval failed", extra={"pending_id": pending_id})
            raise
        except Exception:
            db.rollback()
            raise

        self.log.info(
            "pending project approved",
            extra={"pending_id": pending_id, "project_id": project.project_id},
        )
        return project.project_id

    def reject(self, db: Session, pending_id: str) -> bool:
        """Idempotent: rejecting a missing id removes nothing and is not an error."""
        res = db.execute(delete(PendingProject).where(PendingProject.pending_id == pending_id))
        db.commit()
        removed = res.rowcount == 1
        self.log.info("pending project rejected", extra={"pending_id": pending_id, "removed": removed})
        return removed
