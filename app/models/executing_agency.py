# app/models/executing_agency.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_id, utcnow


class ExecutingAgency(Base):
    __tablename__ = "executing_agencies"

    id: Mapped[str] = mapped_column("agency_id", String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("ix_executing_agencies_name", "name"),)
