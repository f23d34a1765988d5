# app/services/serializers.py
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from app.models.document import DOCUMENT_FIELDS
from app.models.project import PROJECT_SCALAR_FIELDS


def iso(dt):
    return dt.isoformat() if dt else None


def entity_dict(row) -> Dict[str, Any]:
    out = {"id": row.id, "name": row.name, "created_at": iso(row.created_at)}
    if hasattr(row, "region"):
        out["region"] = row.region
    return out


def funding_source_dict(row) -> Dict[str, Any]:
    return {
        "funding_source_id": row.funding_source_id,
        "name": row.name,
        "dev_partner": row.dev_partner,
        "type": row.type,
        "non_grant_instrument": row.non_grant_instrument,
        "created_at": iso(row.created_at),
    }


def sdg_dict(row) -> Dict[str, Any]:
    return {"sdg_id": row.sdg_id, "sdg_number": row.sdg_number, "title": row.title}


def wash_dict(row) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    return {
        "presence": bool(row.presence),
        "wash_percentage": row.wash_percentage or 0,
        "description": row.description,
    }


def project_fields(row, fields: Iterable[str] = PROJECT_SCALAR_FIELDS) -> Dict[str, Any]:
    out = {f: getattr(row, f) for f in fields}
    for f in ("geographic_division", "districts", "type", "location_segregation", "activities", "hotspot_types"):
        out[f] = list(out.get(f) or [])
    return out


def project_dict(row) -> Dict[str, Any]:
    out = {"project_id": row.project_id}
    out.update(project_fields(row))
    out["created_at"] = iso(row.created_at)
    out["updated_at"] = iso(row.updated_at)
    return out


def document_dict(row) -> Dict[str, Any]:
    out = {"repo_id": row.repo_id}
    out.update({f: getattr(row, f) for f in DOCUMENT_FIELDS})
    out["categories"] = list(row.categories or [])
    if hasattr(row, "submitter_email"):
        out["submitter_email"] = row.submitter_email
    out["created_at"] = iso(row.created_at)
    out["updated_at"] = iso(row.updated_at)
    return out


def feedback_dict(row) -> Dict[str, Any]:
    return {
        "id": row.id,
        "issue_type": row.issue_type,
        "priority": row.priority,
        "issue_title": row.issue_title,
        "description": row.description,
        "user_name": row.user_name,
        "email": row.email,
        "created_at": iso(row.created_at),
        "updated_at": iso(row.updated_at),
    }
