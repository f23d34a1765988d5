# app/api/v1/sdg.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.envelope import ok
from app.db.session import get_db
from app.schemas.entities import SdgIn, SdgUpdate
from app.services.sdg_service import SdgService
from app.services.serializers import sdg_dict

router = APIRouter(prefix="/sdg")


@router.post("/add", status_code=201)
def add_sdg(body: SdgIn, db: Session = Depends(get_db)):
    row = SdgService().add(db, body.sdg_number, body.title)
    return ok(sdg_dict(row), message="SDG added successfully")


@router.get("/all")
def all_sdgs(db: Session = Depends(get_db)):
    return ok([sdg_dict(r) for r in SdgService().get_all(db)])


@router.get("/get/{sdg_id}")
def get_sdg(sdg_id: str, db: Session = Depends(get_db)):
    row = SdgService().get_by_id(db, sdg_id)
    if row is None:
        raise HTTPException(status_code=404, detail="SDG not found")
    return ok(sdg_dict(row))


@router.put("/update/{sdg_id}")
def update_sdg(sdg_id: str, body: SdgUpdate, db: Session = Depends(get_db)):
    row = SdgService().update(db, sdg_id, body.model_dump(exclude_unset=True))
    if row is None:
        raise HTTPException(status_code=404, detail="SDG not found")
    return ok(sdg_dict(row), message="SDG updated successfully")


@router.delete("/delete/{sdg_id}")
def delete_sdg(sdg_id: str, db: Session = Depends(get_db)):
    if not SdgService().delete(db, sdg_id):
        raise HTTPException(status_code=404, detail="SDG not found")
    return ok(message="SDG deleted successfully")
