# app/services/projects_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy import select, delete, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MissingFieldsError
from app.db.base import utcnow
from app.models.agency import Agency
from app.models.delivery_partner import DeliveryPartner
from app.models.executing_agency import ExecutingAgency
from app.models.funding_source import FundingSource
from app.models.implementing_entity import ImplementingEntity
from app.models.location import Location
from app.models.project import Project, PROJECT_SCALAR_FIELDS
from app.models.project_links import (
    ProjectAgency,
    ProjectDeliveryPartner,
    ProjectExecutingAgency,
    ProjectFundingSource,
    ProjectImplementingEntity,
    ProjectLocation,
    ProjectSdg,
)
from app.models.sdg_alignment import SdgAlignment
from app.models.wash_component import WashComponent
from app.schemas.projects import ProjectPayload, WashComponentPayload
from app.services.serializers import (
    entity_dict,
    funding_source_dict,
    project_dict,
    sdg_dict,
    wash_dict,
)

log = logging.getLogger(__name__)

NUMERIC_FIELDS = {
    "total_cost_usd",
    "gef_grant",
    "cofinancing",
    "loan_amount",
    "direct_beneficiaries",
    "indirect_beneficiaries",
    "climate_relevance_score",
}


@dataclass(frozen=True)
class Relation:
    key: str
    ids_field: str
    link: Any
    entity: Any
    pk: str
    to_dict: Callable[[Any], Dict[str, Any]]

    @property
    def entity_pk(self):
        return getattr(self.entity, self.pk)


# deletion order of a project cascade follows this tuple
RELATIONS = (
    Relation("sdgs", "sdg_ids", ProjectSdg, SdgAlignment, "sdg_id", sdg_dict),
    Relation(
        "funding_sources",
        "funding_source_ids",
        ProjectFundingSource,
        FundingSource,
        "funding_source_id",
        funding_source_dict,
    ),
    Relation("locations", "location_ids", ProjectLocation, Location, "id", entity_dict),
    Relation("agencies", "agency_ids", ProjectAgency, Agency, "id", entity_dict),
    Relation(
        "implementing_entities",
        "implementing_entity_ids",
        ProjectImplementingEntity,
        ImplementingEntity,
        "id",
        entity_dict,
    ),
    Relation(
        "executing_agencies",
        "executing_agency_ids",
        ProjectExecutingAgency,
        ExecutingAgency,
        "id",
        entity_dict,
    ),
    Relation(
        "delivery_partners",
        "delivery_partner_ids",
        ProjectDeliveryPartner,
        DeliveryPartner,
        "id",
        entity_dict,
    ),
)


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


def scalar_values(source: Any) -> Dict[str, Any]:
    """Project column values from a payload or a pending row; numbers default to 0."""
    out: Dict[str, Any] = {}
    for f in PROJECT_SCALAR_FIELDS:
        v = getattr(source, f, None)
        if f in NUMERIC_FIELDS:
            v = v or 0
        elif isinstance(v, (list, tuple)):
            v = list(v)
        out[f] = v
    for f in ("geographic_division", "districts", "type", "location_segregation", "activities", "hotspot_types"):
        out[f] = list(out[f] or [])
    return out


class ProjectsService:
    """
    Project aggregate: the project row, its optional WASH component and
    seven link tables. Every multi-statement write is one transaction.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or log

    # -----------------------
    # writes
    # -----------------------

    def _insert(
        self,
        db: Session,
        *,
        values: Dict[str, Any],
        wash: Optional[WashComponentPayload],
        relation_ids: Dict[str, List[str]],
    ) -> Project:
        """Stage a full aggregate in the caller's transaction. Does not commit."""
        missing = [f for f in ("title", "status", "approval_fy") if not values.get(f)]
        if missing:
            raise MissingFieldsError(missing)

        now = utcnow()
        project = Project(**values, created_at=now, updated_at=now)
        db.add(project)
        db.flush()

        if wash is not None and wash.presence:
            db.add(
                WashComponent(
                    project_id=project.project_id,
                    presence=True,
                    wash_percentage=wash.wash_percentage or 0,
                    description=wash.description,
                )
            )

        self._write_links(db, project.project_id, relation_ids)
        return project

    def _write_links(
        self,
        db: Session,
        project_id: str,
        relation_ids: Dict[str, List[str]],
        *,
        replace: bool = False,
    ) -> None:
        for rel in RELATIONS:
            if replace:
                db.execute(delete(rel.link).where(rel.link.project_id == project_id))
            ids = _dedupe(relation_ids.get(rel.ids_field) or [])
            if ids:
                db.execute(
                    insert(rel.link),
                    [{"project_id": project_id, "related_id": i} for i in ids],
                )

    def _upsert_wash(self, db: Session, project_id: str, wash: WashComponentPayload) -> None:
        row = db.execute(
            select(WashComponent).where(WashComponent.project_id == project_id)
        ).scalar_one_or_none()
        if row is None:
            row = WashComponent(project_id=project_id)
            db.add(row)
        row.presence = bool(wash.presence)
        row.wash_percentage = wash.wash_percentage or 0
        row.description = wash.description

    def create(self, db: Session, payload: ProjectPayload) -> str:
        try:
            project = self._insert(
                db,
                values=scalar_values(payload),
                wash=payload.wash_component,
                relation_ids=payload.relation_ids(),
            )
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            self.log.exception("project create failed")
            raise
        except Exception:
            db.rollback()
            raise

        self.log.info("project created", extra={"project_id": project.project_id})
        return project.project_id

    def update(self, db: Session, project_id: str, payload: ProjectPayload) -> Optional[str]:
        """
        Overwrites every scalar and fully replaces every relation set:
        an omitted or empty id list clears that relation.
        Returns None (nothing written) when the project does not exist.
        """
        missing = payload.missing_required()
        if missing:
            raise MissingFieldsError(missing)

        try:
            project = db.execute(
                select(Project).where(Project.project_id == project_id).with_for_update()
            ).scalar_one_or_none()
            if project is None:
                db.rollback()
                return None

            for k, v in scalar_values(payload).items():
                setattr(project, k, v)
            project.updated_at = utcnow()

            if payload.wash_component is not None:
                self._upsert_wash(db, project_id, payload.wash_component)

            self._write_links(db, project_id, payload.relation_ids(), replace=True)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            self.log.exception("project update failed", extra={"project_id": project_id})
            raise
        except Exception:
            db.rollback()
            raise

        self.log.info("project updated", extra={"project_id": project_id})
        return project_id

    def delete(self, db: Session, project_id: str) -> bool:
        try:
            for rel in RELATIONS:
                db.execute(delete(rel.link).where(rel.link.project_id == project_id))
            db.execute(delete(WashComponent).where(WashComponent.project_id == project_id))
            res = db.execute(delete(Project).where(Project.project_id == project_id))
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            self.log.exception("project delete failed", extra={"project_id": project_id})
            raise

        removed = res.rowcount == 1
        self.log.info("project deleted", extra={"project_id": project_id, "removed": removed})
        return removed

    # -----------------------
    # reads
    # -----------------------

    def _related(self, db: Session, rel: Relation, project_ids: Optional[List[str]] = None):
        stmt = select(rel.link.project_id, rel.entity).join(
            rel.entity, rel.entity_pk == rel.link.related_id
        )
        if project_ids is not None:
            stmt = stmt.where(rel.link.project_id.in_(project_ids))
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for pid, entity in db.execute(stmt).all():
            grouped.setdefault(pid, []).append(rel.to_dict(entity))
        return grouped

    def get_all(self, db: Session) -> List[Dict[str, Any]]:
        projects = db.execute(
            select(Project).order_by(Project.created_at.desc(), Project.project_id)
        ).scalars().all()
        if not projects:
            return []

        related = {rel.key: self._related(db, rel) for rel in RELATIONS}
        washes = {
            w.project_id: w for w in db.execute(select(WashComponent)).scalars().all()
        }

        out = []
        for p in projects:
            item = project_dict(p)
            for rel in RELATIONS:
                item[rel.key] = related[rel.key].get(p.project_id, [])
            item["wash_component"] = wash_dict(washes.get(p.project_id))
            out.append(item)
        return out

    def get_by_id(self, db: Session, project_id: str) -> Optional[Dict[str, Any]]:
        project = db.execute(
            select(Project).where(Project.project_id == project_id)
        ).scalar_one_or_none()
        if project is None:
            return None

        item = project_dict(project)
        for rel in RELATIONS:
            item[rel.key] = self._related(db, rel, [project_id]).get(project_id, [])
            item[rel.ids_field] = list(
                db.execute(
                    select(rel.link.related_id).where(rel.link.project_id == project_id)
                ).scalars().all()
            )

        wash = db.execute(
            select(WashComponent).where(WashComponent.project_id == project_id)
        ).scalar_one_or_none()
        item["wash_component"] = wash_dict(wash)
        return item

    def exists(self, db: Session, project_id: str) -> bool:
        return db.execute(
            select(Project.project_id).where(Project.project_id == project_id)
        ).first() is not None
