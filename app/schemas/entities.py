from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NameIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=256)


class LocationIn(NameIn):
    region: Optional[str] = Field(default=None, max_length=128)


class FundingSourceIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=256)
    dev_partner: Optional[str] = None
    type: Optional[str] = None
    non_grant_instrument: Optional[str] = None


class FundingSourceUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    dev_partner: Optional[str] = None
    type: Optional[str] = None
    non_grant_instrument: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, v: Optional[str]) -> str:
        # an omitted key keeps the stored name; explicit null is rejected
        if v is None:
            raise ValueError("name cannot be null")
        return v


class SdgIn(BaseModel):
    sdg_number: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=256)


class SdgUpdate(BaseModel):
    sdg_number: Optional[int] = Field(default=None, ge=1)
    title: Optional[str] = Field(default=None, min_length=1, max_length=256)
