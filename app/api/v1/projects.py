# app/api/v1/projects.py
from __future__ import annotations

from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.api.v1._forms import parse, read_body
from app.core.deps import get_file_storage
from app.core.envelope import ok
from app.core.errors import MissingFieldsError
from app.db.session import get_db
from app.schemas.projects import ProjectPayload
from app.services.file_storage import FileStorage
from app.services.projects_service import ProjectsService
from app.services.stats_service import StatsService

router = APIRouter(prefix="/project")


async def _payload(request: Request, storage: FileStorage) -> Tuple[ProjectPayload, Optional[str]]:
    """Validated payload plus the stored upload name (None when no file was sent)."""
    data, upload = await read_body(request)
    payload = parse(ProjectPayload, data)
    missing = payload.missing_required()
    if missing:
        raise MissingFieldsError(missing)

    stored = None
    if upload is not None:
        stored = storage.save(upload)
        payload = payload.model_copy(update={"supporting_document": stored})
    return payload, stored


@router.post("/add-project", status_code=201)
async def add_project(
    request: Request,
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    payload, stored = await _payload(request, storage)
    with storage.discard_on_error(stored):
        project_id = ProjectsService().create(db, payload)
    return ok({"project_id": project_id}, message="Project added successfully")


@router.get("/all-project")
def all_projects(db: Session = Depends(get_db)):
    return ok(ProjectsService().get_all(db))


@router.get("/get/{project_id}")
def get_project(project_id: str, db: Session = Depends(get_db)):
    project = ProjectsService().get_by_id(db, project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return ok(project)


@router.put("/update/{project_id}")
async def update_project(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    svc = ProjectsService()
    # look up first so a 404 never leaves an uploaded file behind
    if not svc.exists(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    payload, stored = await _payload(request, storage)
    with storage.discard_on_error(stored):
        updated = svc.update(db, project_id, payload)
    if updated is None:
        storage.discard(stored)
        raise HTTPException(status_code=404, detail="Project not found")
    return ok({"project_id": updated}, message="Project updated successfully")


@router.delete("/delete/{project_id}")
def delete_project(project_id: str, db: Session = Depends(get_db)):
    if not ProjectsService().delete(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return ok(message="Project deleted successfully")


# ------------------------------------------------------------------
# dashboard aggregations (read-only)
# ------------------------------------------------------------------

_stats = StatsService()


@router.get("/get-overview-stat")
def overview_stat(db: Session = Depends(get_db)):
    return ok(_stats.overview_stats(db))


@router.get("/projectsOverviewStats")
def projects_overview_stats(db: Session = Depends(get_db)):
    return ok(_stats.projects_overview_stats(db))


@router.get("/get-project-by-status")
def by_status(db: Session = Depends(get_db)):
    return ok(_stats.projects_by_status(db))


@router.get("/get-project-by-sector")
def by_sector(db: Session = Depends(get_db)):
    return ok(_stats.projects_by_sector(db))


@router.get("/get-project-by-type")
def by_type(db: Session = Depends(get_db)):
    return ok(_stats.projects_by_type(db))


@router.get("/get-project-by-trend")
def project_trend(db: Session = Depends(get_db)):
    return ok(_stats.project_trend(db))


@router.get("/get-climate-finance-by-trend")
def climate_finance_trend(db: Session = Depends(get_db)):
    return ok(_stats.climate_finance_trend(db))


@router.get("/get-wash-stat")
def wash_stat(db: Session = Depends(get_db)):
    return ok(_stats.wash_stats(db))


@router.get("/get-project-by-hotspot")
def by_hotspot(db: Session = Depends(get_db)):
    return ok(_stats.projects_by_hotspot(db))


@router.get("/get-project-by-vulnerability-type")
def by_vulnerability_type(db: Session = Depends(get_db)):
    return ok(_stats.projects_by_vulnerability_type(db))


@router.get("/get-project-by-portfolio-type")
def by_portfolio_type(db: Session = Depends(get_db)):
    return ok(_stats.projects_by_portfolio_type(db))


@router.get("/get-regional-distribution")
def regional_distribution(db: Session = Depends(get_db)):
    return ok(_stats.regional_distribution(db))


@router.get("/get-district-project-distribution")
def district_distribution(db: Session = Depends(get_db)):
    return ok(_stats.district_distribution(db))


@router.get("/get-implementing-entity-stats")
def implementing_entity_stats(db: Session = Depends(get_db)):
    return ok(_stats.implementing_entity_stats(db))


@router.get("/get-executing-agency-stats")
def executing_agency_stats(db: Session = Depends(get_db)):
    return ok(_stats.executing_agency_stats(db))


@router.get("/get-delivery-partner-stats")
def delivery_partner_stats(db: Session = Depends(get_db)):
    return ok(_stats.delivery_partner_stats(db))


@router.get("/get-funding-source-by-type")
def funding_source_by_type(db: Session = Depends(get_db)):
    return ok(_stats.funding_source_by_type(db))


@router.get("/get-funding-source-overview")
def funding_source_overview(db: Session = Depends(get_db)):
    return ok(_stats.funding_source_overview(db))


@router.get("/get-funding-source-trend")
def funding_source_trend(db: Session = Depends(get_db)):
    return ok(_stats.funding_source_trend(db))


@router.get("/get-funding-source-sector-allocation")
def funding_source_sector_allocation(db: Session = Depends(get_db)):
    return ok(_stats.funding_source_sector_allocation(db))


@router.get("/get-funding-source")
def funding_sources_with_finance(db: Session = Depends(get_db)):
    return ok(_stats.funding_sources_with_finance(db))
