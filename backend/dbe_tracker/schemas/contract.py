"""
Contract schemas
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from .subgrant import SubgrantCreate, SubgrantEdit, SubgrantResponse


class ContractBase(BaseModel):
    """Fields entered on the contract form"""
    tad_project_number: str = Field(..., min_length=1, max_length=100)
    contract_number: str = Field(..., min_length=1, max_length=100)
    prime_contractor: str = Field(..., min_length=1, max_length=255)
    original_amount: Decimal = Field(..., ge=0, decimal_places=2)
    dbe_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100, decimal_places=2)
    award_date: Optional[date] = None
    report_date: Optional[date] = None
    final_report: bool = False

    @field_validator("tad_project_number", "contract_number", "prime_contractor")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field is required")
        return value


class ContractCreate(ContractBase):
    """Create contract schema, optionally with its first subgrants"""
    subgrants: List[SubgrantCreate] = []


class ContractUpdate(ContractBase):
    """Whole-record contract update"""
    pass


class ContractEdit(ContractBase):
    """Edit form payload: the contract plus the subgrant rows shown with it"""
    subgrants: List[SubgrantEdit] = []

    @model_validator(mode="after")
    def unique_subgrant_ids(self):
        ids = [subgrant.id for subgrant in self.subgrants]
        if len(ids) != len(set(ids)):
            raise ValueError("Each subgrant may appear only once")
        return self


class FinalReportUpdate(BaseModel):
    """Single-field update marking a contract closed out (or reopened)"""
    final_report: bool


class ContractResponse(BaseModel):
    """Contract response schema"""
    id: str
    tad_project_number: str
    contract_number: str
    prime_contractor: str
    original_amount: Decimal
    dbe_percentage: Decimal
    award_date: Optional[date] = None
    report_date: Optional[date] = None
    final_report: bool
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    subgrants: List[SubgrantResponse] = []

    class Config:
        from_attributes = True


class ContractList(BaseModel):
    """List of contracts"""
    contracts: List[ContractResponse]
    total: int


class ContractFilter(BaseModel):
    """Dashboard search and filter values; unset fields do not filter"""
    search: str = ""
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
