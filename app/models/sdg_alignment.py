# app/models/sdg_alignment.py
from __future__ import annotations

from sqlalchemy import String, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_id


class SdgAlignment(Base):
    __tablename__ = "sdg_alignments"

    sdg_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    sdg_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(256), nullable=False)

    __table_args__ = (UniqueConstraint("sdg_number", name="uq_sdg_alignments_number"),)
