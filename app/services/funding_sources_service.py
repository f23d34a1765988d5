# app/services/funding_sources_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from app.core.errors import MissingFieldsError
from app.models.enums import ProjectStatus
from app.models.funding_source import FundingSource
from app.models.project import Project
from app.models.project_links import ProjectFundingSource
from app.services.serializers import funding_source_dict

log = logging.getLogger(__name__)


def _num(v) -> float:
    return float(v or 0)


class FundingSourcesService:
    """
    Funding sources never store money. Every total below is summed from the
    projects linked through project_funding_sources at read time.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or log

    def add(self, db: Session, data: Dict[str, Any]) -> FundingSource:
        row = FundingSource(
            name=data["name"],
            dev_partner=data.get("dev_partner"),
            type=data.get("type"),
            non_grant_instrument=data.get("non_grant_instrument"),
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        self.log.info("funding source created", extra={"funding_source_id": row.funding_source_id})
        return row

    def get(self, db: Session, funding_source_id: str) -> Optional[FundingSource]:
        return db.get(FundingSource, funding_source_id)

    def get_all(self, db: Session) -> List[Dict[str, Any]]:
        stmt = (
            select(
                FundingSource,
                func.coalesce(func.sum(Project.gef_grant), 0),
                func.coalesce(func.sum(Project.loan_amount), 0),
                func.coalesce(func.sum(Project.cofinancing), 0),
                func.count(func.distinct(Project.project_id)),
            )
            .outerjoin(
                ProjectFundingSource,
                ProjectFundingSource.related_id == FundingSource.funding_source_id,
            )
            .outerjoin(Project, Project.project_id == ProjectFundingSource.project_id)
            .group_by(FundingSource.funding_source_id)
            .order_by(FundingSource.name)
        )

        out = []
        for fs, grant, loan, cofin, count in db.execute(stmt).all():
            item = funding_source_dict(fs)
            item.update(
                {
                    "grant_amount": _num(grant),
                    "loan_amount": _num(loan),
                    "counterpart_funding": _num(cofin),
                    "project_count": int(count or 0),
                }
            )
            out.append(item)
        return out

    def get_detail(self, db: Session, funding_source_id: str) -> Optional[Dict[str, Any]]:
        fs = db.get(FundingSource, funding_source_id)
        if fs is None:
            return None

        projects = db.execute(
            select(Project)
            .join(ProjectFundingSource, ProjectFundingSource.project_id == Project.project_id)
            .where(ProjectFundingSource.related_id == funding_source_id)
            .order_by(Project.beginning.desc())
        ).scalars().all()

        out = funding_source_dict(fs)
        out["projects"] = [
            {
                "project_id": p.project_id,
                "title": p.title,
                "status": p.status,
                "beginning": p.beginning,
                "closing": p.closing,
                "total_cost_usd": p.total_cost_usd,
                "gef_grant": p.gef_grant,
                "cofinancing": p.cofinancing,
                "loan_amount": p.loan_amount,
                "climate_relevance_category": p.climate_relevance_category,
            }
            for p in projects
        ]
        out["active_projects"] = sum(1 for p in projects if p.status == ProjectStatus.ACTIVE.value)
        out["total_grant"] = sum(_num(p.gef_grant) for p in projects)
        out["total_loan"] = sum(_num(p.loan_amount) for p in projects)
        out["total_co_finance"] = sum(_num(p.cofinancing) for p in projects)
        out["total_funded"] = sum(_num(p.total_cost_usd) for p in projects)
        return out

    def update(self, db: Session, funding_source_id: str, data: Dict[str, Any]) -> Optional[FundingSource]:
        """Partial update: only keys present in `data` are written."""
        if "name" in data and not data["name"]:
            raise MissingFieldsError(["name"])

        row = db.get(FundingSource, funding_source_id)
        if row is None:
            return None

        for k in ("name", "dev_partner", "type", "non_grant_instrument"):
            if k in data:
                setattr(row, k, data[k])
        db.commit()
        db.refresh(row)
        self.log.info("funding source updated", extra={"funding_source_id": funding_source_id})
        return row

    def delete(self, db: Session, funding_source_id: str) -> bool:
        try:
            db.execute(
                delete(ProjectFundingSource).where(ProjectFundingSource.related_id == funding_source_id)
            )
            res = db.execute(
                delete(FundingSource).where(FundingSource.funding_source_id == funding_source_id)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        removed = res.rowcount == 1
        self.log.info(
            "funding source deleted",
            extra={"funding_source_id": funding_source_id, "removed": removed},
        )
        return removed

    def project_counts(self, db: Session) -> List[Dict[str, Any]]:
        total = func.count(func.distinct(ProjectFundingSource.project_id)).label("total_projects")
        rows = db.execute(
            select(FundingSource.funding_source_id, FundingSource.name, total)
            .join(
                ProjectFundingSource,
                ProjectFundingSource.related_id == FundingSource.funding_source_id,
            )
            .group_by(FundingSource.funding_source_id, FundingSource.name)
            .order_by(total.desc())
        ).all()
        return [
            {
                "funding_source_id": fid,
                "funding_source_name": name,
                "total_projects": int(count),
            }
            for fid, name, count in rows
        ]

    def overview(self, db: Session) -> Dict[str, int]:
        sources, projects, partners = db.execute(
            select(
                func.count(func.distinct(FundingSource.funding_source_id)),
                func.count(func.distinct(ProjectFundingSource.project_id)),
                func.count(func.distinct(FundingSource.dev_partner)),
            ).outerjoin(
                ProjectFundingSource,
                ProjectFundingSource.related_id == FundingSource.funding_source_id,
            )
        ).one()
        return {
            "total_funding_sources": int(sources or 0),
            "total_projects_supported": int(projects or 0),
            "total_development_partners": int(partners or 0),
        }
