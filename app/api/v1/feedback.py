# app/api/v1/feedback.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.envelope import ok
from app.db.session import get_db
from app.schemas.feedback import FeedbackCreate, FeedbackUpdate
from app.services.feedback_service import FeedbackService
from app.services.serializers import feedback_dict

router = APIRouter(prefix="/feedback")


@router.post("", status_code=201)
def create_feedback(body: FeedbackCreate, db: Session = Depends(get_db)):
    row = FeedbackService().create(db, body)
    return ok(feedback_dict(row), message="Feedback submitted successfully")


@router.get("")
def list_feedback(db: Session = Depends(get_db)):
    return ok([feedback_dict(r) for r in FeedbackService().get_all(db)])


@router.get("/{feedback_id}")
def get_feedback(feedback_id: str, db: Session = Depends(get_db)):
    row = FeedbackService().get_by_id(db, feedback_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return ok(feedback_dict(row))


@router.put("/{feedback_id}")
def update_feedback(feedback_id: str, body: FeedbackUpdate, db: Session = Depends(get_db)):
    row = FeedbackService().update(db, feedback_id, body)
    if row is None:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return ok(feedback_dict(row), message="Feedback updated successfully")


@router.delete("/{feedback_id}")
def delete_feedback(feedback_id: str, db: Session = Depends(get_db)):
    if not FeedbackService().delete(db, feedback_id):
        raise HTTPException(status_code=404, detail="Feedback not found")
    return ok(message="Feedback deleted successfully")
