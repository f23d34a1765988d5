from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from app.schemas.common import as_str_list, blank_to_none


class DocumentPayload(BaseModel):
    """Document metadata; every field optional so the same model serves partial updates."""

    model_config = ConfigDict(extra="ignore")

    categories: Optional[List[str]] = None
    heading: Optional[str] = None
    sub_heading: Optional[str] = None
    agency_name: Optional[str] = None
    programme_code: Optional[str] = None
    document_size: Optional[str] = None
    document_link: Optional[str] = None
    supporting_link: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _blank(cls, data: Any) -> Any:
        return blank_to_none(data)

    @field_validator("categories", mode="before")
    @classmethod
    def _categories(cls, v: Any) -> Optional[List[str]]:
        return None if v is None else as_str_list(v)

    @field_validator("document_size", mode="before")
    @classmethod
    def _size(cls, v: Any) -> Any:
        return str(v) if isinstance(v, (int, float)) else v


class PendingDocumentPayload(DocumentPayload):
    submitter_email: Optional[str] = None
