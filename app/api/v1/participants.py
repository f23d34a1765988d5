# app/api/v1/participants.py
from typing import Callable, Sequence, Type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.envelope import ok
from app.db.session import get_db
from app.schemas.entities import LocationIn, NameIn
from app.services.entities_service import (
    NamedEntityService,
    agency_service,
    delivery_partner_service,
    executing_agency_service,
    implementing_entity_service,
    location_service,
)
from app.services.serializers import entity_dict


def _extra(body: BaseModel) -> dict:
    return body.model_dump(exclude={"name"})


def entity_router(
    prefix: str,
    label: str,
    make_service: Callable[[], NamedEntityService],
    schema: Type[BaseModel] = NameIn,
    add_aliases: Sequence[str] = (),
) -> APIRouter:
    """
    Standard CRUD + find-or-create routes for one name-keyed entity table.
    `label` is the human name used in messages ("Agency not found").
    """
    router = APIRouter(prefix=prefix)

    def add(body: schema, db: Session = Depends(get_db)):
        row = make_service().add(db, body.name, **_extra(body))
        return ok(entity_dict(row), message=f"{label} added successfully")

    for path in ("/add", *add_aliases):
        router.add_api_route(path, add, methods=["POST"], status_code=201)

    @router.get("/all")
    def get_all(db: Session = Depends(get_db)):
        return ok([entity_dict(r) for r in make_service().get_all(db)])

    @router.get("/get/{entity_id}")
    def get_one(entity_id: str, db: Session = Depends(get_db)):
        row = make_service().get_by_id(db, entity_id)
        if row is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return ok(entity_dict(row))

    @router.put("/update/{entity_id}")
    def update(entity_id: str, body: schema, db: Session = Depends(get_db)):
        row = make_service().update(db, entity_id, body.name, **_extra(body))
        if row is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return ok(entity_dict(row), message=f"{label} updated successfully")

    @router.delete("/delete/{entity_id}")
    def delete(entity_id: str, db: Session = Depends(get_db)):
        if not make_service().delete(db, entity_id):
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return ok(message=f"{label} deleted successfully")

    @router.post("/find-or-create")
    def find_or_create(body: schema, db: Session = Depends(get_db)):
        row = make_service().find_or_create(db, body.name, **_extra(body))
        return ok(entity_dict(row))

    return router


agency_router = entity_router("/agency", "Agency", agency_service, add_aliases=("/add-agency",))
executing_agency_router = entity_router(
    "/executing-agency", "Executing agency", executing_agency_service
)
implementing_entity_router = entity_router(
    "/implementing-entity", "Implementing entity", implementing_entity_service
)
delivery_partner_router = entity_router(
    "/delivery-partner", "Delivery partner", delivery_partner_service
)
location_router = entity_router(
    "/location", "Location", location_service, schema=LocationIn, add_aliases=("/add-location",)
)
