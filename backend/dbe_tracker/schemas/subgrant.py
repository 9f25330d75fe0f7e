"""
Subgrant schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from ..models.subgrant import SubgrantContractType
from ..utils.validators import validate_ethnicity_gender


class SubgrantBase(BaseModel):
    """Fields shared by subgrant create/update payloads"""
    dbe_firm_name: str = Field(..., min_length=1, max_length=255)
    naics_code: str = Field(..., description="Six digit NAICS industry code")
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    contract_type: SubgrantContractType = SubgrantContractType.SUBCONTRACT
    certified_dbe: bool = False
    award_date: Optional[date] = None
    ethnicity_gender: Optional[str] = Field(default=None, description="e.g. 'Black American/Female'")

    @field_validator("dbe_firm_name", "naics_code")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("ethnicity_gender")
    @classmethod
    def check_ethnicity_gender(cls, value: Optional[str]) -> Optional[str]:
        # Forms send "" for "not selected"
        if value is None or not value.strip():
            return None
        value = value.strip()
        is_valid, error = validate_ethnicity_gender(value)
        if not is_valid:
            raise ValueError(error)
        return value


class SubgrantCreate(SubgrantBase):
    """Create subgrant schema"""
    pass


class SubgrantUpdate(SubgrantBase):
    """Whole-record subgrant update"""
    pass


class SubgrantEdit(SubgrantBase):
    """Subgrant row submitted together with its contract in the edit form"""
    id: str


class CertifiedDBEUpdate(BaseModel):
    """Single-field update toggling certification"""
    certified_dbe: bool


class SubgrantResponse(BaseModel):
    """Subgrant response schema"""
    id: str
    contract_id: str
    dbe_firm_name: str
    naics_code: Optional[str] = None
    amount: Decimal
    contract_type: str
    certified_dbe: bool
    award_date: Optional[date] = None
    ethnicity_gender: Optional[str] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
