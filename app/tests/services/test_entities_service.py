from app.models.project_links import ProjectAgency
from app.schemas.projects import ProjectPayload
from app.services.entities_service import agency_service, location_service
from app.services.funding_sources_service import FundingSourcesService
from app.services.projects_service import ProjectsService
from app.services.sdg_service import SdgService, SDG_TITLES


def test_find_or_create_is_case_insensitive(db):
    svc = agency_service()
    first = svc.find_or_create(db, "Ministry of Water")
    again = svc.find_or_create(db, "  ministry OF water ")

    assert again.id == first.id
    assert len(svc.get_all(db)) == 1


def test_location_keeps_region(db):
    row = location_service().add(db, "Khulna", region="South-West")
    assert location_service().get_by_id(db, row.id).region == "South-West"


def test_delete_entity_removes_join_rows(db):
    a = agency_service().add(db, "Agency")
    ProjectsService().create(
        db,
        ProjectPayload.model_validate(
            {"title": "P", "status": "Active", "approval_fy": "2022", "agency_ids": [a.id]}
        ),
    )

    assert agency_service().delete(db, a.id) is True
    assert db.query(ProjectAgency).count() == 0
    assert agency_service().delete(db, a.id) is False


def test_funding_source_totals_are_derived(db):
    fs = FundingSourcesService().add(db, {"name": "GCF", "dev_partner": "UN"})
    for grant in (100, 250):
        ProjectsService().create(
            db,
            ProjectPayload.model_validate(
                {
                    "title": f"P{grant}",
                    "status": "Active",
                    "approval_fy": "2022",
                    "gef_grant": grant,
                    "loan_amount": 10,
                    "funding_source_ids": [fs.funding_source_id],
                }
            ),
        )

    [item] = FundingSourcesService().get_all(db)
    assert item["grant_amount"] == 350
    assert item["loan_amount"] == 20
    assert item["project_count"] == 2

    detail = FundingSourcesService().get_detail(db, fs.funding_source_id)
    assert detail["active_projects"] == 2
    assert detail["total_grant"] == 350


def test_funding_source_partial_update(db):
    fs = FundingSourcesService().add(db, {"name": "GCF", "type": "Multilateral"})
    FundingSourcesService().update(db, fs.funding_source_id, {"dev_partner": "UNDP"})

    row = FundingSourcesService().get(db, fs.funding_source_id)
    assert row.type == "Multilateral"
    assert row.dev_partner == "UNDP"


def test_sdg_seed_is_repeatable(db):
    assert SdgService().seed(db) == len(SDG_TITLES)
    assert SdgService().seed(db) == 0
    assert [s.sdg_number for s in SdgService().get_all(db)] == list(range(1, 18))
