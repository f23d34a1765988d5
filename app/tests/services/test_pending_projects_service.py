import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import PendingProjectNotFound
from app.core.logging import null_logger
from app.models.pending_project import PendingProject
from app.models.project import Project
from app.models.project_links import ProjectAgency, ProjectSdg
from app.models.wash_component import WashComponent
from app.schemas.projects import PendingProjectPayload
from app.services.entities_service import agency_service
from app.services.pending_projects_service import PendingProjectsService
from app.services.sdg_service import SdgService


def submission(**overrides):
    base = {
        "title": "Flood Early Warning",
        "status": "Pipeline",
        "approval_fy": "2024",
        "submitter_email": "someone@example.org",
    }
    base.update(overrides)
    return PendingProjectPayload.model_validate(base)


def test_submit_keeps_ids_on_the_row(db):
    row = PendingProjectsService().submit(db, submission(agency_ids='["x", "y"]'))

    assert row.agency_ids == ["x", "y"]
    assert db.query(ProjectAgency).count() == 0


def test_get_by_id_resolves_known_ids_only(db):
    a = agency_service().add(db, "Water Board")
    row = PendingProjectsService().submit(db, submission(agency_ids=[a.id, "ghost"]))

    item = PendingProjectsService().get_by_id(db, row.pending_id)
    assert item["agency_ids"] == [a.id, "ghost"]
    assert [x["name"] for x in item["agencies"]] == ["Water Board"]


def test_approve_materializes_project_and_drops_pending(db):
    a = agency_service().add(db, "Water Board")
    sdg = SdgService().add(db, 6, "Clean Water and Sanitation")
    row = PendingProjectsService().submit(
        db,
        submission(
            agency_ids=[a.id],
            sdg_ids=[sdg.sdg_id],
            wash_component={"presence": True, "wash_percentage": 30, "description": "latrines"},
        ),
    )

    project_id = PendingProjectsService().approve(db, row.pending_id)

    assert db.query(PendingProject).count() == 0
    project = db.query(Project).filter_by(project_id=project_id).one()
    assert project.title == "Flood Early Warning"
    assert db.query(ProjectAgency).filter_by(project_id=project_id).one().related_id == a.id
    assert db.query(ProjectSdg).filter_by(project_id=project_id).count() == 1
    assert db.query(WashComponent).filter_by(project_id=project_id).one().wash_percentage == 30


def test_approve_unknown_id_raises(db):
    with pytest.raises(PendingProjectNotFound):
        PendingProjectsService().approve(db, "nope")


def test_approve_rolls_back_when_claim_fails(db, monkeypatch):
    row = PendingProjectsService().submit(db, submission(agency_ids=["a1"]))
    pending_id = row.pending_id

    def boom(self, db, pending_id):
        raise OperationalError("DELETE FROM pending_projects", {}, Exception("disk I/O error"))

    monkeypatch.setattr(PendingProjectsService, "_claim", boom)
    with pytest.raises(OperationalError):
        PendingProjectsService(logger=null_logger()).approve(db, pending_id)

    assert db.query(Project).count() == 0
    assert db.query(ProjectAgency).count() == 0
    assert db.query(PendingProject).filter_by(pending_id=pending_id).count() == 1


def test_reject_is_idempotent(db):
    row = PendingProjectsService().submit(db, submission())

    assert PendingProjectsService().reject(db, row.pending_id) is True
    assert PendingProjectsService().reject(db, row.pending_id) is False
    assert db.query(Project).count() == 0


def test_update_overwrites_submission(db):
    row = PendingProjectsService().submit(db, submission(agency_ids=["a"]))
    updated = PendingProjectsService().update(db, row.pending_id, submission(title="New", agency_ids=["b"]))

    assert updated.title == "New"
    assert updated.agency_ids == ["b"]
    assert PendingProjectsService().update(db, "missing", submission()) is None
