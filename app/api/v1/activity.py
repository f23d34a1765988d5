# app/api/v1/activity.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.envelope import ok
from app.db.session import get_db
from app.services.activity_service import ActivityService

router = APIRouter(prefix="/activity")


@router.get("/recent")
def recent_activity(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ok(ActivityService().recent(db, limit=limit))
