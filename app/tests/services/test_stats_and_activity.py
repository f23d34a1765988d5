from datetime import datetime, timedelta, timezone

from app.schemas.projects import ProjectPayload
from app.services.activity_service import ActivityService, time_ago
from app.services.documents_service import documents_service
from app.services.projects_service import ProjectsService
from app.services.stats_service import StatsService


def add(db, **fields):
    base = {"title": "P", "status": "Active", "approval_fy": "2022"}
    base.update(fields)
    return ProjectsService().create(db, ProjectPayload.model_validate(base))


def test_overview_counts_and_sums(db):
    add(db, total_cost_usd=100, climate_relevance_score=50)
    add(db, status="Completed", total_cost_usd=300, climate_relevance_score=70,
        wash_component={"presence": True, "wash_percentage": 50})

    stats = StatsService().overview_stats(db)
    assert stats["total_projects"] == 2
    assert stats["total_climate_finance"] == 400
    assert stats["active_projects"] == 1
    assert stats["completed_projects"] == 1
    assert stats["avg_climate_relevance"] == 60
    assert stats["total_wash_finance"] == 150


def test_overview_on_empty_database(db):
    stats = StatsService().overview_stats(db)
    assert stats["total_projects"] == 0
    assert stats["total_climate_finance"] == 0


def test_trend_groups_by_year_prefix(db):
    add(db, beginning="2021-01-01", total_cost_usd=10)
    add(db, beginning="2021-09-30", total_cost_usd=5)
    add(db, beginning="2023-02-01", total_cost_usd=1)
    add(db)

    assert StatsService().project_trend(db) == [
        {"year": "2021", "projects": 2},
        {"year": "2023", "projects": 1},
    ]
    assert StatsService().climate_finance_trend(db)[0] == {"year": "2021", "Total_Finance": 15}


def test_list_column_breakdowns(db):
    add(db, type=["Adaptation", "Mitigation"], geographic_division=["Dhaka"])
    add(db, type="Adaptation", geographic_division=["Dhaka", "Sylhet"], status="Completed")

    assert StatsService().projects_by_type(db) == [
        {"name": "Adaptation", "value": 2},
        {"name": "Mitigation", "value": 1},
    ]
    regions = {r["region"]: r for r in StatsService().regional_distribution(db)}
    assert regions["Dhaka"] == {"region": "Dhaka", "total": 2, "active": 1, "completed": 1}
    assert regions["Sylhet"]["total"] == 1


def test_wash_stats(db):
    add(db, total_cost_usd=200, wash_component={"presence": True, "wash_percentage": 25})
    add(db, total_cost_usd=100)

    [row] = StatsService().wash_stats(db)
    assert row == {
        "total_projects": 2,
        "total_budget_usd": 300,
        "wash_projects": 1,
        "wash_budget_usd": 50,
    }


def test_time_ago_buckets():
    now = datetime(2024, 1, 31, 12, tzinfo=timezone.utc)
    assert time_ago(now - timedelta(minutes=5), now) == "Just now"
    assert time_ago(now - timedelta(minutes=90), now) == "1 hour ago"
    assert time_ago(now - timedelta(hours=5), now) == "5 hours ago"
    assert time_ago(now - timedelta(hours=30), now) == "1 day ago"
    assert time_ago(now - timedelta(days=4), now) == "4 days ago"


def test_recent_activity_merges_sources(db):
    add(db, title="Mangrove Belt")
    documents_service().create(db, {"heading": "Annual Report"})

    events = ActivityService().recent(db, limit=10)
    kinds = {e["activity_type"] for e in events}
    assert {"project_created", "repository_created"} <= kinds
    assert all(e["time_ago"] == "Just now" for e in events)

    assert len(ActivityService().recent(db, limit=1)) == 1
