# app/models/funding_source.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_id, utcnow


class FundingSource(Base):
    """
    Financier entity. Grant/loan/cofinancing totals are never stored here;
    they are summed from linked projects at query time.
    """

    __tablename__ = "funding_sources"

    funding_source_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    dev_partner: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    non_grant_instrument: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("ix_funding_sources_name", "name"),)
