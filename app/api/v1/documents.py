# app/api/v1/documents.py
from typing import Callable, Optional, Tuple, Type

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.api.v1._forms import parse, read_body
from app.core.auth_deps import require_permission
from app.core.deps import get_file_storage
from app.core.envelope import ok
from app.core.errors import MissingFieldsError
from app.db.session import get_db
from app.policies.rbac import ACTION_ACCEPT_DOCUMENT, Principal
from app.schemas.documents import DocumentPayload, PendingDocumentPayload
from app.services.documents_service import (
    DocumentsService,
    PendingDocumentsService,
    documents_service,
)
from app.services.file_storage import FileStorage
from app.services.serializers import document_dict


def _human_size(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    if n < 1024 * 1024:
        return f"{n / 1024:.1f} KB"
    return f"{n / (1024 * 1024):.2f} MB"


async def _document_data(
    request: Request,
    storage: FileStorage,
    schema: Type[DocumentPayload],
    *,
    require_heading: bool,
) -> Tuple[dict, Optional[str]]:
    """Column values to write plus the stored upload name (None when no file was sent)."""
    data, upload = await read_body(request)
    payload = parse(schema, data)
    out = payload.model_dump(exclude_unset=True)

    # heading is NOT NULL: required on create, and never cleared by an update
    if (require_heading or "heading" in out) and not out.get("heading"):
        raise MissingFieldsError(["heading"])

    stored = None
    if upload is not None:
        stored = storage.save(upload)
        out["document_link"] = stored
        if not out.get("document_size"):
            out["document_size"] = _human_size(storage.size_of(stored))
    return out, stored


def document_router(
    prefix: str,
    make_service: Callable[[], DocumentsService],
    schema: Type[DocumentPayload],
) -> APIRouter:
    router = APIRouter(prefix=prefix)

    @router.post("/create", status_code=201)
    async def create(
        request: Request,
        db: Session = Depends(get_db),
        storage: FileStorage = Depends(get_file_storage),
    ):
        data, stored = await _document_data(request, storage, schema, require_heading=True)
        with storage.discard_on_error(stored):
            row = make_service().create(db, data)
        return ok(document_dict(row), message="Document created successfully")

    @router.get("")
    @router.get("/")
    def get_all(db: Session = Depends(get_db)):
        return ok([document_dict(r) for r in make_service().get_all(db)])

    return router


def _item_routes(router: APIRouter, make_service: Callable[[], DocumentsService], schema) -> None:
    # path-parameter routes go after every fixed path of the router
    @router.get("/{repo_id}")
    def get_one(repo_id: str, db: Session = Depends(get_db)):
        row = make_service().get_by_id(db, repo_id)
        if row is None:
            raise HTTPException(status_code=404, detail="Document not found")
        return ok(document_dict(row))

    @router.put("/{repo_id}")
    async def update(
        repo_id: str,
        request: Request,
        db: Session = Depends(get_db),
        storage: FileStorage = Depends(get_file_storage),
    ):
        svc = make_service()
        if svc.get_by_id(db, repo_id) is None:
            raise HTTPException(status_code=404, detail="Document not found")

        data, stored = await _document_data(request, storage, schema, require_heading=False)
        with storage.discard_on_error(stored):
            row = svc.update(db, repo_id, data)
        if row is None:
            storage.discard(stored)
            raise HTTPException(status_code=404, detail="Document not found")
        return ok(document_dict(row), message="Document updated successfully")

    @router.delete("/{repo_id}")
    def delete(repo_id: str, db: Session = Depends(get_db)):
        if not make_service().delete(db, repo_id):
            raise HTTPException(status_code=404, detail="Document not found or already deleted")
        return ok(message="Document deleted successfully")


document_repository_router = document_router(
    "/document-repository", documents_service, DocumentPayload
)
_item_routes(document_repository_router, documents_service, DocumentPayload)

pending_document_repository_router = document_router(
    "/pending-document-repository", PendingDocumentsService, PendingDocumentPayload
)


@pending_document_repository_router.put("/accept/{repo_id}")
def accept_document(
    repo_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission(ACTION_ACCEPT_DOCUMENT)),
):
    doc = PendingDocumentsService().accept(db, repo_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return ok(document_dict(doc), message="Document accepted successfully")


_item_routes(pending_document_repository_router, PendingDocumentsService, PendingDocumentPayload)
