# app/services/activity_service.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.document import DocumentRepository, PendingDocumentRepository
from app.models.pending_project import PendingProject
from app.models.project import Project
from app.services.serializers import iso

WINDOW = timedelta(days=30)


def _aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def time_ago(when: datetime, now: datetime) -> str:
    delta = now - _aware(when)
    hours = int(delta.total_seconds() // 3600)
    days = delta.days

    if delta < timedelta(hours=1):
        return "Just now"
    if delta < timedelta(hours=2):
        return "1 hour ago"
    if delta < timedelta(hours=24):
        return f"{hours} hours ago"
    if delta < timedelta(hours=48):
        return "1 day ago"
    if delta < WINDOW:
        return f"{days} days ago"
    return "More than 30 days ago"


def _event(kind: str, title: str, description: str, when: datetime, color: str, icon: str) -> Dict[str, Any]:
    return {
        "activity_type": kind,
        "activity_title": title,
        "activity_description": description,
        "activity_time": _aware(when),
        "activity_color": color,
        "activity_icon": icon,
    }


class ActivityService:
    """
    Recent-activity feed merged from projects, documents and the two
    staging tables. Only rows touched in the last 30 days are considered.
    """

    def recent(self, db: Session, limit: int = 10, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        now = now or datetime.now(timezone.utc)
        since = now - WINDOW
        events: List[Dict[str, Any]] = []

        for p in db.execute(
            select(Project).where((Project.created_at >= since) | (Project.updated_at >= since))
        ).scalars():
            if _aware(p.created_at) >= since:
                events.append(_event("project_created", "New project added", p.title, p.created_at, "primary", "Plus"))
            if p.updated_at and p.updated_at != p.created_at and _aware(p.updated_at) >= since:
                events.append(_event("project_updated", "Project updated", p.title, p.updated_at, "primary", "FolderTree"))

        for d in db.execute(
            select(DocumentRepository).where(
                (DocumentRepository.created_at >= since) | (DocumentRepository.updated_at >= since)
            )
        ).scalars():
            heading = d.heading or "Untitled Repository"
            if _aware(d.created_at) >= since:
                events.append(_event("repository_created", "New repository added", heading, d.created_at, "success", "Book"))
            if d.updated_at and d.updated_at != d.created_at and _aware(d.updated_at) >= since:
                events.append(_event("repository_updated", "Repository updated", heading, d.updated_at, "success", "Book"))

        for pp in db.execute(
            select(PendingProject).where(PendingProject.submitted_at >= since)
        ).scalars():
            events.append(
                _event(
                    "pending_project_submitted",
                    "Pending project submitted",
                    pp.title or "",
                    pp.submitted_at,
                    "info",
                    "CheckCircle",
                )
            )

        for pd in db.execute(
            select(PendingDocumentRepository).where(PendingDocumentRepository.created_at >= since)
        ).scalars():
            events.append(
                _event(
                    "pending_repository_submitted",
                    "Pending repository submitted",
                    pd.heading or "Untitled Repository",
                    pd.created_at,
                    "info",
                    "BookOpenText",
                )
            )

        events.sort(key=lambda e: e["activity_time"], reverse=True)
        out = []
        for e in events[: max(limit, 0)]:
            e["time_ago"] = time_ago(e["activity_time"], now)
            e["activity_time"] = iso(e["activity_time"])
            out.append(e)
        return out
