# app/models/pending_project.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType, new_id, utcnow
from app.models.project import ProjectFieldsMixin

# pending column -> link kind used when the row is materialized
PENDING_RELATION_FIELDS = (
    "agency_ids",
    "implementing_entity_ids",
    "executing_agency_ids",
    "delivery_partner_ids",
    "location_ids",
    "funding_source_ids",
    "sdg_ids",
)


class PendingProject(ProjectFieldsMixin, Base):
    """
    Staged user submission. Relations live on the row as raw id arrays;
    there are no join tables until approval. Approval or rejection deletes
    the row, so no review status is retained.
    """

    __tablename__ = "pending_projects"

    pending_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    submitter_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)

    agency_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    implementing_entity_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    executing_agency_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    delivery_partner_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    location_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    funding_source_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    sdg_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)

    wash_component: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
