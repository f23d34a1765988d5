# app/models/wash_component.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Float, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class WashComponent(Base):
    """Owned 0..1 by a project; keyed by the project id itself."""

    __tablename__ = "wash_components"

    project_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    presence: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wash_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
