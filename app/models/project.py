# app/models/project.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import String, Text, Float, Integer, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType, new_id, utcnow


class ProjectFieldsMixin:
    """
    Scalar project shape shared by Project and PendingProject.
    List-valued classification fields are JSON arrays.
    """

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    status: Mapped[str] = mapped_column(String(64), nullable=False)
    approval_fy: Mapped[str] = mapped_column(String(16), nullable=False)
    beginning: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    closing: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    total_cost_usd: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    gef_grant: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    cofinancing: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    loan_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    objectives: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    direct_beneficiaries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    indirect_beneficiaries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    beneficiary_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gender_inclusion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    equity_marker: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    equity_marker_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assessment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    alignment_nap: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    alignment_cff: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    climate_relevance_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    climate_relevance_category: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    climate_relevance_justification: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    wash_component_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    supporting_document: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    sector: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    vulnerability_type: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    additional_location_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    portfolio_type: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    funding_source_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    geographic_division: Mapped[List[Any]] = mapped_column(JSONType, nullable=False, default=list)
    districts: Mapped[List[Any]] = mapped_column(JSONType, nullable=False, default=list)
    type: Mapped[List[Any]] = mapped_column(JSONType, nullable=False, default=list)
    location_segregation: Mapped[List[Any]] = mapped_column(JSONType, nullable=False, default=list)
    activities: Mapped[List[Any]] = mapped_column(JSONType, nullable=False, default=list)
    hotspot_types: Mapped[List[Any]] = mapped_column(JSONType, nullable=False, default=list)


# every scalar column copied 1:1 on approval
PROJECT_SCALAR_FIELDS = (
    "title",
    "status",
    "approval_fy",
    "beginning",
    "closing",
    "total_cost_usd",
    "gef_grant",
    "cofinancing",
    "loan_amount",
    "objectives",
    "direct_beneficiaries",
    "indirect_beneficiaries",
    "beneficiary_description",
    "gender_inclusion",
    "equity_marker",
    "equity_marker_description",
    "assessment",
    "alignment_nap",
    "alignment_cff",
    "climate_relevance_score",
    "climate_relevance_category",
    "climate_relevance_justification",
    "wash_component_description",
    "supporting_document",
    "sector",
    "vulnerability_type",
    "additional_location_info",
    "portfolio_type",
    "funding_source_name",
    "geographic_division",
    "districts",
    "type",
    "location_segregation",
    "activities",
    "hotspot_types",
)


class Project(ProjectFieldsMixin, Base):
    __tablename__ = "projects"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("ix_projects_status", "status"),)
