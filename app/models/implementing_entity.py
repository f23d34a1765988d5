# app/models/implementing_entity.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_id, utcnow


class ImplementingEntity(Base):
    __tablename__ = "implementing_entities"

    id: Mapped[str] = mapped_column("entity_id", String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("ix_implementing_entities_name", "name"),)
