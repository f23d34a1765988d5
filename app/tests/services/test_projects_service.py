import pytest

from app.core.errors import MissingFieldsError
from app.models.project import Project
from app.models.project_links import ProjectAgency
from app.models.wash_component import WashComponent
from app.schemas.projects import ProjectPayload
from app.services.entities_service import agency_service
from app.services.projects_service import ProjectsService


def payload(**overrides):
    base = {
        "title": "Coastal Resilience",
        "status": "Active",
        "approval_fy": "2023",
        "beginning": "2023-07-01",
        "total_cost_usd": 1000000,
    }
    base.update(overrides)
    return ProjectPayload.model_validate(base)


def test_create_writes_project_links_and_wash(db):
    a1 = agency_service().add(db, "Ministry of Environment")
    a2 = agency_service().add(db, "Department of Forests")

    pid = ProjectsService().create(
        db,
        payload(
            agency_ids=[a1.id, a2.id, a1.id],
            wash_component={"presence": True, "wash_percentage": 40, "description": "wells"},
        ),
    )

    item = ProjectsService().get_by_id(db, pid)
    assert item["title"] == "Coastal Resilience"
    assert sorted(item["agency_ids"]) == sorted([a1.id, a2.id])
    assert {a["name"] for a in item["agencies"]} == {"Ministry of Environment", "Department of Forests"}
    assert item["wash_component"]["wash_percentage"] == 40


def test_create_without_wash_presence_stores_no_component(db):
    pid = ProjectsService().create(db, payload(wash_component={"presence": False, "wash_percentage": 10}))
    assert db.query(WashComponent).filter_by(project_id=pid).count() == 0
    assert ProjectsService().get_by_id(db, pid)["wash_component"] is None


def test_create_missing_required_fields_writes_nothing(db):
    with pytest.raises(MissingFieldsError) as exc:
        ProjectsService().create(db, ProjectPayload.model_validate({"status": "Active"}))

    assert set(exc.value.fields) == {"title", "approval_fy"}
    assert db.query(Project).count() == 0


def test_update_replaces_relation_sets(db):
    svc = agency_service()
    a, b, c = (svc.add(db, n) for n in ("A", "B", "C"))
    pid = ProjectsService().create(db, payload(agency_ids=[a.id, b.id]))

    ProjectsService().update(db, pid, payload(title="Renamed", agency_ids=[b.id, c.id]))

    linked = {r.related_id for r in db.query(ProjectAgency).filter_by(project_id=pid)}
    assert linked == {b.id, c.id}
    assert ProjectsService().get_by_id(db, pid)["title"] == "Renamed"


def test_update_omitted_relation_list_clears_it(db):
    a = agency_service().add(db, "A")
    pid = ProjectsService().create(db, payload(agency_ids=[a.id]))

    ProjectsService().update(db, pid, payload())

    assert db.query(ProjectAgency).filter_by(project_id=pid).count() == 0


def test_update_unknown_project_returns_none(db):
    assert ProjectsService().update(db, "missing-id", payload()) is None
    assert db.query(Project).count() == 0


def test_update_upserts_wash(db):
    pid = ProjectsService().create(db, payload())
    ProjectsService().update(db, pid, payload(wash_component={"presence": True, "wash_percentage": 25}))

    wash = ProjectsService().get_by_id(db, pid)["wash_component"]
    assert wash == {"presence": True, "wash_percentage": 25, "description": None}


def test_delete_removes_links_and_wash(db):
    a = agency_service().add(db, "A")
    pid = ProjectsService().create(
        db, payload(agency_ids=[a.id], wash_component={"presence": True, "wash_percentage": 5})
    )

    assert ProjectsService().delete(db, pid) is True
    assert ProjectsService().delete(db, pid) is False
    assert db.query(ProjectAgency).count() == 0
    assert db.query(WashComponent).count() == 0
    # the agency itself survives
    assert agency_service().get_by_id(db, a.id) is not None


def test_get_all_skips_dangling_link_ids(db):
    pid = ProjectsService().create(db, payload(agency_ids=["no-such-agency"]))

    [item] = ProjectsService().get_all(db)
    assert item["project_id"] == pid
    assert item["agencies"] == []
