# app/api/v1/pending_projects.py
from __future__ import annotations

from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.api.v1._forms import parse, read_body
from app.core.auth_deps import require_permission
from app.core.deps import get_file_storage
from app.core.envelope import ok
from app.core.errors import MissingFieldsError
from app.db.session import get_db
from app.policies.rbac import ACTION_APPROVE_PENDING, ACTION_REJECT_PENDING, Principal
from app.schemas.projects import PendingProjectPayload
from app.services.file_storage import FileStorage
from app.services.pending_projects_service import PendingProjectsService

router = APIRouter(prefix="/pending-project")


async def _payload(
    request: Request, storage: FileStorage
) -> Tuple[PendingProjectPayload, Optional[str]]:
    data, upload = await read_body(request)
    payload = parse(PendingProjectPayload, data)
    # required fields are checked before anything touches the disk
    missing = payload.missing_required()
    if missing:
        raise MissingFieldsError(missing)

    stored = None
    if upload is not None:
        stored = storage.save(upload)
        payload = payload.model_copy(update={"supporting_document": stored})
    return payload, stored


async def _submit(
    request: Request,
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    payload, stored = await _payload(request, storage)
    with storage.discard_on_error(stored):
        row = PendingProjectsService().submit(db, payload)
    return ok({"pending_id": row.pending_id}, message="Project submitted for approval")


router.add_api_route("/create", _submit, methods=["POST"], status_code=201)
router.add_api_route("/submit", _submit, methods=["POST"], status_code=201)


@router.get("/all")
def all_pending(db: Session = Depends(get_db)):
    return ok(PendingProjectsService().get_all(db))


@router.put("/update/{pending_id}")
async def update_pending(
    pending_id: str,
    request: Request,
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    svc = PendingProjectsService()
    if svc.get_by_id(db, pending_id) is None:
        raise HTTPException(status_code=404, detail="Pending project not found")

    payload, stored = await _payload(request, storage)
    with storage.discard_on_error(stored):
        row = svc.update(db, pending_id, payload)
    if row is None:
        storage.discard(stored)
        raise HTTPException(status_code=404, detail="Pending project not found")
    return ok({"pending_id": row.pending_id}, message="Pending project updated successfully")


@router.put("/approve/{pending_id}")
def approve_pending(
    pending_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission(ACTION_APPROVE_PENDING)),
):
    project_id = PendingProjectsService().approve(db, pending_id)
    return ok({"project_id": project_id}, message="Project approved successfully")


@router.delete("/reject/{pending_id}")
def reject_pending(
    pending_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission(ACTION_REJECT_PENDING)),
):
    removed = PendingProjectsService().reject(db, pending_id)
    return ok({"removed": removed}, message="Project rejected successfully")


# registered last so it never shadows the fixed paths above
@router.get("/{pending_id}")
def get_pending(pending_id: str, db: Session = Depends(get_db)):
    row = PendingProjectsService().get_by_id(db, pending_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Pending project not found")
    return ok(row)
