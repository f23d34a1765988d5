#app/schemas/projects.py
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.common import as_object, as_str_list, blank_to_none

# relation id lists, one per project link table
RELATION_ID_FIELDS = (
    "agency_ids",
    "implementing_entity_ids",
    "executing_agency_ids",
    "delivery_partner_ids",
    "location_ids",
    "funding_source_ids",
    "sdg_ids",
)

# list-valued classification columns on the project row
LIST_FIELDS = (
    "geographic_division",
    "districts",
    "type",
    "location_segregation",
    "activities",
    "hotspot_types",
)

REQUIRED_PROJECT_FIELDS = ("title", "status", "approval_fy")


class WashComponentPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    presence: bool = False
    wash_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    description: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _blank(cls, data: Any) -> Any:
        return blank_to_none(data)


class ProjectPayload(BaseModel):
    """
    One internal representation of a project write, whatever the wire format
    (JSON body or multipart form). Required fields are checked by the
    repository so a missing title rolls back like any other failure.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    status: Optional[str] = None
    approval_fy: Optional[str] = None
    beginning: Optional[str] = None
    closing: Optional[str] = None

    total_cost_usd: Optional[float] = None
    gef_grant: Optional[float] = None
    cofinancing: Optional[float] = None
    loan_amount: Optional[float] = None

    objectives: Optional[str] = None
    direct_beneficiaries: Optional[int] = None
    indirect_beneficiaries: Optional[int] = None
    beneficiary_description: Optional[str] = None
    gender_inclusion: Optional[str] = None
    equity_marker: Optional[str] = None
    equity_marker_description: Optional[str] = None
    assessment: Optional[str] = None
    alignment_nap: Optional[str] = None
    alignment_cff: Optional[str] = None

    climate_relevance_score: Optional[float] = None
    climate_relevance_category: Optional[str] = None
    climate_relevance_justification: Optional[str] = None

    wash_component_description: Optional[str] = None
    supporting_document: Optional[str] = None

    sector: Optional[str] = None
    vulnerability_type: Optional[str] = None
    additional_location_info: Optional[str] = None
    portfolio_type: Optional[str] = None
    funding_source_name: Optional[str] = None

    geographic_division: List[str] = Field(default_factory=list)
    districts: List[str] = Field(default_factory=list)
    type: List[str] = Field(default_factory=list)
    location_segregation: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    hotspot_types: List[str] = Field(default_factory=list)

    agency_ids: List[str] = Field(default_factory=list)
    implementing_entity_ids: List[str] = Field(default_factory=list)
    executing_agency_ids: List[str] = Field(default_factory=list)
    delivery_partner_ids: List[str] = Field(default_factory=list)
    location_ids: List[str] = Field(default_factory=list)
    funding_source_ids: List[str] = Field(default_factory=list)
    sdg_ids: List[str] = Field(default_factory=list)

    wash_component: Optional[WashComponentPayload] = None

    @model_validator(mode="before")
    @classmethod
    def _blank(cls, data: Any) -> Any:
        return blank_to_none(data)

    @field_validator(*RELATION_ID_FIELDS, *LIST_FIELDS, mode="before")
    @classmethod
    def _lists(cls, v: Any) -> List[str]:
        return as_str_list(v)

    @field_validator("wash_component", mode="before")
    @classmethod
    def _wash(cls, v: Any) -> Any:
        return as_object(v)

    def missing_required(self) -> List[str]:
        return [f for f in REQUIRED_PROJECT_FIELDS if not getattr(self, f)]

    def relation_ids(self) -> dict:
        return {f: list(getattr(self, f)) for f in RELATION_ID_FIELDS}


class PendingProjectPayload(ProjectPayload):
    submitter_email: Optional[str] = None
