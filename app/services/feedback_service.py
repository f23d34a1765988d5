from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from app.db.base import utcnow
from app.models.feedback import Feedback
from app.schemas.feedback import FeedbackCreate, FeedbackUpdate

log = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or log

    def create(self, db: Session, body: FeedbackCreate) -> Feedback:
        now = utcnow()
        row = Feedback(
            issue_type=body.issue_type,
            priority=body.priority.value,
            issue_title=body.issue_title,
            description=body.description,
            user_name=body.user_name,
            email=body.email,
            created_at=now,
            updated_at=now,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        self.log.info("feedback created", extra={"feedback_id": row.id, "priority": row.priority})
        return row

    def get_all(self, db: Session) -> List[Feedback]:
        return db.execute(
            select(Feedback).order_by(Feedback.created_at.desc(), Feedback.id)
        ).scalars().all()

    def get_by_id(self, db: Session, feedback_id: str) -> Optional[Feedback]:
        return db.execute(select(Feedback).where(Feedback.id == feedback_id)).scalar_one_or_none()

    def update(self, db: Session, feedback_id: str, body: FeedbackUpdate) -> Optional[Feedback]:
        row = self.get_by_id(db, feedback_id)
        if row is None:
            return None

        changes: Dict[str, Any] = body.model_dump(exclude_none=True)
        if "priority" in changes:
            changes["priority"] = body.priority.value
        for k, v in changes.items():
            setattr(row, k, v)
        row.updated_at = utcnow()
        db.commit()
        db.refresh(row)
        self.log.info("feedback updated", extra={"feedback_id": feedback_id})
        return row

    def delete(self, db: Session, feedback_id: str) -> bool:
        res = db.execute(delete(Feedback).where(Feedback.id == feedback_id))
        db.commit()
        return res.rowcount == 1
