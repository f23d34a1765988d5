# app/services/sdg_service.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from app.models.project_links import ProjectSdg
from app.models.sdg_alignment import SdgAlignment

log = logging.getLogger(__name__)

# UN Sustainable Development Goals, inserted by the seed script
SDG_TITLES = {
    1: "No Poverty",
    2: "Zero Hunger",
    3: "Good Health and Well-being",
    4: "Quality Education",
    5: "Gender Equality",
    6: "Clean Water and Sanitation",
    7: "Affordable and Clean Energy",
    8: "Decent Work and Economic Growth",
    9: "Industry, Innovation and Infrastructure",
    10: "Reduced Inequalities",
    11: "Sustainable Cities and Communities",
    12: "Responsible Consumption and Production",
    13: "Climate Action",
    14: "Life Below Water",
    15: "Life on Land",
    16: "Peace, Justice and Strong Institutions",
    17: "Partnerships for the Goals",
}


class SdgService:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or log

    def add(self, db: Session, sdg_number: int, title: str) -> SdgAlignment:
        row = SdgAlignment(sdg_number=sdg_number, title=title)
        db.add(row)
        db.commit()
        db.refresh(row)
        self.log.info("sdg created", extra={"sdg_id": row.sdg_id, "sdg_number": sdg_number})
        return row

    def get_all(self, db: Session) -> List[SdgAlignment]:
        return db.execute(select(SdgAlignment).order_by(SdgAlignment.sdg_number)).scalars().all()

    def get_by_id(self, db: Session, sdg_id: str) -> Optional[SdgAlignment]:
        return db.get(SdgAlignment, sdg_id)

    def update(self, db: Session, sdg_id: str, data: Dict) -> Optional[SdgAlignment]:
        row = db.get(SdgAlignment, sdg_id)
        if row is None:
            return None
        if data.get("sdg_number") is not None:
            row.sdg_number = data["sdg_number"]
        if data.get("title") is not None:
            row.title = data["title"]
        db.commit()
        db.refresh(row)
        self.log.info("sdg updated", extra={"sdg_id": sdg_id})
        return row

    def delete(self, db: Session, sdg_id: str) -> bool:
        try:
            db.execute(delete(ProjectSdg).where(ProjectSdg.related_id == sdg_id))
            res = db.execute(delete(SdgAlignment).where(SdgAlignment.sdg_id == sdg_id))
            db.commit()
        except Exception:
            db.rollback()
            raise
        self.log.info("sdg deleted", extra={"sdg_id": sdg_id, "removed": res.rowcount == 1})
        return res.rowcount == 1

    def seed(self, db: Session) -> int:
        """Insert any missing SDG 1-17 rows. Returns how many were added."""
        present = set(db.execute(select(SdgAlignment.sdg_number)).scalars().all())
        added = 0
        for number, title in SDG_TITLES.items():
            if number in present:
                continue
            db.add(SdgAlignment(sdg_number=number, title=title))
            added += 1
        db.commit()
        return added
