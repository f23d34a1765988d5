# app/api/v1/funding_sources.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.envelope import ok
from app.db.session import get_db
from app.schemas.entities import FundingSourceIn, FundingSourceUpdate
from app.services.funding_sources_service import FundingSourcesService
from app.services.serializers import funding_source_dict

router = APIRouter(prefix="/funding-source")


@router.post("/add-funding-source", status_code=201)
def add_funding_source(body: FundingSourceIn, db: Session = Depends(get_db)):
    row = FundingSourcesService().add(db, body.model_dump())
    return ok(funding_source_dict(row), message="Funding source added successfully")


@router.get("/all")
def all_funding_sources(db: Session = Depends(get_db)):
    return ok(FundingSourcesService().get_all(db))


@router.get("/get/{funding_source_id}")
def get_funding_source(funding_source_id: str, db: Session = Depends(get_db)):
    detail = FundingSourcesService().get_detail(db, funding_source_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Funding source not found")
    return ok(detail)


@router.put("/update/{funding_source_id}")
def update_funding_source(
    funding_source_id: str, body: FundingSourceUpdate, db: Session = Depends(get_db)
):
    row = FundingSourcesService().update(db, funding_source_id, body.model_dump(exclude_unset=True))
    if row is None:
        raise HTTPException(status_code=404, detail="Funding source not found")
    return ok(funding_source_dict(row), message="Funding source updated successfully")


@router.delete("/delete/{funding_source_id}")
def delete_funding_source(funding_source_id: str, db: Session = Depends(get_db)):
    if not FundingSourcesService().delete(db, funding_source_id):
        raise HTTPException(status_code=404, detail="Funding source not found")
    return ok(message="Funding source deleted successfully")


@router.get("/get-funding-source-count")
def funding_source_count(db: Session = Depends(get_db)):
    return ok(FundingSourcesService().project_counts(db))


@router.get("/get-funding-source-overview")
def funding_source_overview(db: Session = Depends(get_db)):
    return ok(FundingSourcesService().overview(db))
