# app/models/project_links.py
from __future__ import annotations

from sqlalchemy import String, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

# Pure join tables (project_id, other_id). No FK cascade is relied upon:
# repositories delete join rows explicitly before the owning row.
# Every link model exposes the foreign side as `related_id`.


class ProjectAgency(Base):
    __tablename__ = "project_agencies"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("agency_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_agencies_agency", "agency_id"),)


class ProjectExecutingAgency(Base):
    __tablename__ = "project_executing_agencies"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("agency_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_executing_agencies_agency", "agency_id"),)


class ProjectImplementingEntity(Base):
    __tablename__ = "project_implementing_entities"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("entity_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_implementing_entities_entity", "entity_id"),)


class ProjectDeliveryPartner(Base):
    __tablename__ = "project_delivery_partners"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("partner_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_delivery_partners_partner", "partner_id"),)


class ProjectLocation(Base):
    __tablename__ = "project_locations"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("location_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_locations_location", "location_id"),)


class ProjectFundingSource(Base):
    __tablename__ = "project_funding_sources"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("funding_source_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_funding_sources_source", "funding_source_id"),)


class ProjectSdg(Base):
    __tablename__ = "project_sdgs"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    related_id: Mapped[str] = mapped_column("sdg_id", String(36), primary_key=True)

    __table_args__ = (Index("ix_project_sdgs_sdg", "sdg_id"),)
