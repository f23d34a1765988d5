from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.enums import FeedbackPriority


class FeedbackCreate(BaseModel):
    issue_type: str = Field(..., min_length=1, max_length=128)
    priority: FeedbackPriority = FeedbackPriority.MEDIUM
    issue_title: str = Field(..., min_length=1, max_length=512)
    description: str = Field(..., min_length=1)
    user_name: Optional[str] = None
    email: Optional[str] = None

    @field_validator("user_name", "email")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class FeedbackUpdate(BaseModel):
    issue_type: Optional[str] = Field(default=None, min_length=1, max_length=128)
    priority: Optional[FeedbackPriority] = None
    issue_title: Optional[str] = Field(default=None, min_length=1, max_length=512)
    description: Optional[str] = Field(default=None, min_length=1)
    user_name: Optional[str] = None
    email: Optional[str] = None
