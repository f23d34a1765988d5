# app/services/entities_service.py
from __future__ import annotations

import logging
from typing import Any, Optional, List, Sequence, Type

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from app.models.agency import Agency
from app.models.delivery_partner import DeliveryPartner
from app.models.executing_agency import ExecutingAgency
from app.models.implementing_entity import ImplementingEntity
from app.models.location import Location
from app.models.project_links import (
    ProjectAgency,
    ProjectDeliveryPartner,
    ProjectExecutingAgency,
    ProjectImplementingEntity,
    ProjectLocation,
)

log = logging.getLogger(__name__)


class NamedEntityService:
    """
    Repository for the name-keyed participant tables.

    Names are unique case-insensitively only through find_or_create;
    the database itself does not enforce it.
    """

    def __init__(
        self,
        model: Type[Any],
        link_models: Sequence[Type[Any]],
        label: str,
        logger: Optional[logging.Logger] = None,
    ):
        self.model = model
        self.link_models = tuple(link_models)
        self.label = label
        self.log = logger or log

    def add(self, db: Session, name: str, **extra: Any):
        row = self.model(name=name, **extra)
        db.add(row)
        db.commit()
        db.refresh(row)
        self.log.info(f"{self.label} created", extra={"entity_id": row.id})
        return row

    def get_all(self, db: Session) -> List[Any]:
        return db.execute(select(self.model).order_by(self.model.name)).scalars().all()

    def get_by_id(self, db: Session, entity_id: str):
        return db.get(self.model, entity_id)

    def update(self, db: Session, entity_id: str, name: str, **extra: Any):
        row = db.get(self.model, entity_id)
        if row is None:
            return None

        row.name = name
        for k, v in extra.items():
            setattr(row, k, v)
        db.commit()
        db.refresh(row)
        self.log.info(f"{self.label} updated", extra={"entity_id": entity_id})
        return row

    def delete(self, db: Session, entity_id: str) -> bool:
        """Join rows first, then the entity row. Returns whether the entity existed."""
        try:
            for link in self.link_models:
                db.execute(delete(link).where(link.related_id == entity_id))
            res = db.execute(delete(self.model).where(self.model.id == entity_id))
            db.commit()
        except Exception:
            db.rollback()
            raise

        removed = res.rowcount == 1
        self.log.info(f"{self.label} deleted", extra={"entity_id": entity_id, "removed": removed})
        return removed

    def find_by_name(self, db: Session, name: str):
        return db.execute(
            select(self.model)
            .where(func.lower(self.model.name) == name.strip().lower())
            .order_by(self.model.created_at)
            .limit(1)
        ).scalar_one_or_none()

    def find_or_create(self, db: Session, name: str, **extra: Any):
        existing = self.find_by_name(db, name)
        if existing is not None:
            return existing
        return self.add(db, name.strip(), **extra)


def agency_service(logger: Optional[logging.Logger] = None) -> NamedEntityService:
    return NamedEntityService(Agency, [ProjectAgency], "agency", logger)


def executing_agency_service(logger: Optional[logging.Logger] = None) -> NamedEntityService:
    return NamedEntityService(ExecutingAgency, [ProjectExecutingAgency], "executing agency", logger)


def implementing_entity_service(logger: Optional[logging.Logger] = None) -> NamedEntityService:
    return NamedEntityService(
        ImplementingEntity, [ProjectImplementingEntity], "implementing entity", logger
    )


def delivery_partner_service(logger: Optional[logging.Logger] = None) -> NamedEntityService:
    return NamedEntityService(DeliveryPartner, [ProjectDeliveryPartner], "delivery partner", logger)


def location_service(logger: Optional[logging.Logger] = None) -> NamedEntityService:
    return NamedEntityService(Location, [ProjectLocation], "location", logger)
