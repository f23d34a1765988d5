# app/services/stats_service.py
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List

from sqlalchemy import select, func, case, and_
from sqlalchemy.orm import Session

from app.models.delivery_partner import DeliveryPartner
from app.models.enums import ProjectStatus
from app.models.executing_agency import ExecutingAgency
from app.models.funding_source import FundingSource
from app.models.implementing_entity import ImplementingEntity
from app.models.project import Project
from app.models.project_links import (
    ProjectDeliveryPartner,
    ProjectExecutingAgency,
    ProjectFundingSource,
    ProjectImplementingEntity,
)
from app.models.wash_component import WashComponent

ACTIVE = ProjectStatus.ACTIVE.value
PIPELINE = ProjectStatus.PIPELINE.value
COMPLETED_STATES = (ProjectStatus.IMPLEMENTED.value, ProjectStatus.COMPLETED.value)


def _count_where(cond):
    return func.coalesce(func.sum(case((cond, 1), else_=0)), 0)


def _f(v) -> float:
    return float(v or 0)


def _i(v) -> int:
    return int(v or 0)


def _year():
    return func.substr(Project.beginning, 1, 4)


def _has_beginning():
    return and_(Project.beginning.is_not(None), Project.beginning != "")


class StatsService:
    """
    Read-only dashboard aggregations with fixed output shapes.

    Scalar columns are grouped in SQL. List-valued columns (regions,
    districts, project types, hotspots) are JSON arrays, so their
    groupings are tallied over the selected rows in Python.
    """

    # -----------------------
    # overview
    # -----------------------

    def overview_stats(self, db: Session) -> Dict[str, Any]:
        wash_share = func.coalesce(WashComponent.wash_percentage, 0) / 100.0
        row = db.execute(
            select(
                func.count(Project.project_id),
                func.sum(Project.total_cost_usd),
                _count_where(Project.status == ACTIVE),
                _count_where(Project.status == ProjectStatus.COMPLETED.value),
                func.avg(Project.climate_relevance_score),
                func.sum(Project.total_cost_usd * wash_share),
            ).outerjoin(WashComponent, WashComponent.project_id == Project.project_id)
        ).one()
        return {
            "total_projects": _i(row[0]),
            "total_climate_finance": _f(row[1]),
            "active_projects": _i(row[2]),
            "completed_projects": _i(row[3]),
            "avg_climate_relevance": _f(row[4]),
            "total_wash_finance": _f(row[5]),
        }

    def projects_overview_stats(self, db: Session) -> Dict[str, Any]:
        row = db.execute(
            select(
                func.count(Project.project_id),
                func.sum(Project.total_cost_usd),
                _count_where(Project.status == ACTIVE),
                _count_where(Project.status == PIPELINE),
                _count_where(Project.status == ProjectStatus.COMPLETED.value),
                func.sum(Project.gef_grant),
                func.sum(Project.cofinancing),
                func.sum(Project.loan_amount),
            )
        ).one()
        return {
            "total_projects": _i(row[0]),
            "total_climate_finance": _f(row[1]),
            "active_projects": _i(row[2]),
            "pipeline_projects": _i(row[3]),
            "completed_projects": _i(row[4]),
            "total_gef_grant": _f(row[5]),
            "total_cofinancing": _f(row[6]),
            "total_loan": _f(row[7]),
        }

    # -----------------------
    # {name, value} breakdowns
    # -----------------------

    def _by_column(self, db: Session, column, *, skip_blank: bool = True) -> List[Dict[str, Any]]:
        value = func.count().label("value")
        stmt = select(column, value).group_by(column).order_by(value.desc(), column)
        if skip_blank:
            stmt = stmt.where(column.is_not(None), column != "")
        return [{"name": name, "value": int(v)} for name, v in db.execute(stmt).all()]

    def _by_list_column(self, db: Session, column) -> List[Dict[str, Any]]:
        tally: Counter = Counter()
        for values in db.execute(select(column)).scalars().all():
            for v in values or []:
                if v not in (None, ""):
                    tally[v] += 1
        return [
            {"name": name, "value": count}
            for name, count in sorted(tally.items(), key=lambda kv: (-kv[1], str(kv[0])))
        ]

    def projects_by_status(self, db: Session) -> List[Dict[str, Any]]:
        return self._by_column(db, Project.status, skip_blank=False)

    def projects_by_sector(self, db: Session) -> List[Dict[str, Any]]:
        return self._by_column(db, Project.sector)

    def projects_by_type(self, db: Session) -> List[Dict[str, Any]]:
        return self._by_list_column(db, Project.type)

    def projects_by_hotspot(self, db: Session) -> List[Dict[str, Any]]:
        return self._by_list_column(db, Project.hotspot_types)

    def projects_by_vulnerability_type(self, db: Session) -> List[Dict[str, Any]]:
        return self._by_column(db, Project.vulnerability_type)

    def projects_by_portfolio_type(self, db: Session) -> List[Dict[str, Any]]:
        return self._by_column(db, Project.portfolio_type)

    # -----------------------
    # trends (year = first four characters of `beginning`)
    # -----------------------

    def project_trend(self, db: Session) -> List[Dict[str, Any]]:
        year = _year().label("year")
        rows = db.execute(
            select(year, func.count()).where(_has_beginning()).group_by(year).order_by(year)
        ).all()
        return [{"year": y, "projects": int(n)} for y, n in rows]

    def climate_finance_trend(self, db: Session) -> List[Dict[str, Any]]:
        year = _year().label("year")
        rows = db.execute(
            select(year, func.sum(Project.total_cost_usd))
            .where(_has_beginning())
            .group_by(year)
            .order_by(year)
        ).all()
        return [{"year": y, "Total_Finance": _f(total)} for y, total in rows]

    # -----------------------
    # WASH
    # -----------------------

    def wash_stats(self, db: Session) -> List[Dict[str, Any]]:
        has_wash = WashComponent.presence.is_(True)
        row = db.execute(
            select(
                func.count(func.distinct(Project.project_id)),
                func.sum(Project.total_cost_usd),
                func.count(func.distinct(case((has_wash, Project.project_id)))),
                func.sum(
                    case(
                        (has_wash, Project.total_cost_usd * (WashComponent.wash_percentage / 100.0)),
                    )
                ),
            ).outerjoin(WashComponent, WashComponent.project_id == Project.project_id)
        ).one()
        return [
            {
                "total_projects": _i(row[0]),
                "total_budget_usd": round(_f(row[1]), 2),
                "wash_projects": _i(row[2]),
                "wash_budget_usd": round(_f(row[3]), 2),
            }
        ]

    # -----------------------
    # regional / district distribution
    # -----------------------

    def _distribution(self, db: Session, column) -> List[Dict[str, Any]]:
        buckets: Dict[str, Dict[str, int]] = {}
        for values, status in db.execute(select(column, Project.status)).all():
            for region in values or []:
                if region in (None, ""):
                    continue
                b = buckets.setdefault(region, {"total": 0, "active": 0, "completed": 0})
                b["total"] += 1
                if status == ACTIVE:
                    b["active"] += 1
                elif status in COMPLETED_STATES:
                    b["completed"] += 1
        return [{"region": r, **buckets[r]} for r in sorted(buckets)]

    def regional_distribution(self, db: Session) -> List[Dict[str, Any]]:
        return self._distribution(db, Project.geographic_division)

    def district_distribution(self, db: Session) -> List[Dict[str, Any]]:
        return self._distribution(db, Project.districts)

    # -----------------------
    # funding source analytics
    # -----------------------

    def _fs_join(self, stmt, *, outer: bool = False):
        join = stmt.outerjoin if outer else stmt.join
        stmt = join(
            ProjectFundingSource,
            ProjectFundingSource.related_id == FundingSource.funding_source_id,
        )
        join = stmt.outerjoin if outer else stmt.join
        return join(Project, Project.project_id == ProjectFundingSource.project_id)

    def funding_source_by_type(self, db: Session) -> List[Dict[str, Any]]:
        total = func.sum(Project.total_cost_usd).label("total_finance")
        stmt = self._fs_join(
            select(
                FundingSource.name,
                func.count(func.distinct(ProjectFundingSource.project_id)),
                total,
            ).select_from(FundingSource)
        ).group_by(FundingSource.name).order_by(total.desc())
        return [
            {"name": name, "project_count": int(n), "total_finance": _f(t)}
            for name, n, t in db.execute(stmt).all()
        ]

    def funding_source_overview(self, db: Session) -> Dict[str, Any]:
        stmt = self._fs_join(
            select(
                func.count(func.distinct(FundingSource.funding_source_id)),
                func.count(func.distinct(ProjectFundingSource.project_id)),
                func.sum(Project.total_cost_usd),
            ).select_from(FundingSource),
            outer=True,
        )
        sources, projects, total = db.execute(stmt).one()
        return {
            "total_funding_sources": _i(sources),
            "projects_with_funding": _i(projects),
            "total_finance": _f(total),
        }

    def funding_source_trend(self, db: Session) -> List[Dict[str, Any]]:
        year = _year().label("year")
        stmt = (
            self._fs_join(
                select(year, FundingSource.name, func.sum(Project.total_cost_usd)).select_from(
                    FundingSource
                )
            )
            .where(_has_beginning())
            .group_by(year, FundingSource.name)
            .order_by(year, FundingSource.name)
        )
        return [
            {"year": y, "funding_source": name, "total_finance": _f(t)}
            for y, name, t in db.execute(stmt).all()
        ]

    def funding_source_sector_allocation(self, db: Session) -> List[Dict[str, Any]]:
        total = func.sum(Project.total_cost_usd).label("total_finance")
        stmt = (
            self._fs_join(
                select(
                    FundingSource.name,
                    Project.sector,
                    func.count(func.distinct(Project.project_id)),
                    total,
                ).select_from(FundingSource)
            )
            .where(Project.sector.is_not(None), Project.sector != "")
            .group_by(FundingSource.name, Project.sector)
            .order_by(FundingSource.name, total.desc())
        )
        return [
            {"funding_source": name, "sector": sector, "project_count": int(n), "total_finance": _f(t)}
            for name, sector, n, t in db.execute(stmt).all()
        ]

    def funding_sources_with_finance(self, db: Session) -> List[Dict[str, Any]]:
        total = func.coalesce(func.sum(Project.total_cost_usd), 0).label("total_finance")
        stmt = (
            self._fs_join(
                select(
                    FundingSource.funding_source_id,
                    FundingSource.name,
                    FundingSource.dev_partner,
                    func.count(func.distinct(ProjectFundingSource.project_id)),
                    total,
                ).select_from(FundingSource),
                outer=True,
            )
            .group_by(FundingSource.funding_source_id, FundingSource.name, FundingSource.dev_partner)
            .order_by(total.desc(), FundingSource.name)
        )
        return [
            {
                "funding_source_id": fid,
                "name": name,
                "dev_partner": partner,
                "project_count": int(n),
                "total_finance": _f(t),
            }
            for fid, name, partner, n, t in db.execute(stmt).all()
        ]

    # -----------------------
    # participant stats
    # -----------------------

    def _participant_stats(self, db: Session, entity, link) -> List[Dict[str, Any]]:
        count = func.count(func.distinct(link.project_id)).label("project_count")
        stmt = (
            select(
                entity.id,
                entity.name,
                count,
                func.coalesce(func.sum(Project.total_cost_usd), 0),
            )
            .select_from(entity)
            .outerjoin(link, link.related_id == entity.id)
            .outerjoin(Project, Project.project_id == link.project_id)
            .group_by(entity.id, entity.name)
            .order_by(count.desc(), entity.name)
        )
        return [
            {"id": eid, "name": name, "project_count": int(n), "total_finance": _f(t)}
            for eid, name, n, t in db.execute(stmt).all()
        ]

    def implementing_entity_stats(self, db: Session) -> List[Dict[str, Any]]:
        return self._participant_stats(db, ImplementingEntity, ProjectImplementingEntity)

    def executing_agency_stats(self, db: Session) -> List[Dict[str, Any]]:
        return self._participant_stats(db, ExecutingAgency, ProjectExecutingAgency)

    def delivery_partner_stats(self, db: Session) -> List[Dict[str, Any]]:
        return self._participant_stats(db, DeliveryPartner, ProjectDeliveryPartner)
