"""
DBE participation report schemas
"""
from pydantic import BaseModel
from typing import Optional, List, Dict
from decimal import Decimal


class AmountCount(BaseModel):
    """A dollar total with the number of records behind it"""
    count: int = 0
    amount: Decimal = Decimal("0")


class PrimeTotals(BaseModel):
    """Prime contract row; DBE dollars are not tracked at prime level"""
    count: int = 0
    amount: Decimal = Decimal("0")
    dbe_amount: Decimal = Decimal("0")


class SummaryTotals(BaseModel):
    prime_contracts: PrimeTotals
    dbe_subcontracts: AmountCount
    dbe_share_percent: Decimal = Decimal("0")


class EthnicityBucket(BaseModel):
    women: AmountCount
    men: AmountCount
    total: AmountCount


class OngoingPayments(BaseModel):
    """Contracts still open (final report not yet filed)"""
    count: int = 0
    amount: Decimal = Decimal("0")
    dbe_amount: Decimal = Decimal("0")
    dbe_count: int = 0
    dbe_percent: Decimal = Decimal("0")


class CompletedGroup(BaseModel):
    """Closed-out contracts with the same goal treatment"""
    count: int = 0
    amount: Decimal = Decimal("0")
    dbe_needed: Decimal = Decimal("0")
    dbe_participation: Decimal = Decimal("0")
    percent_to_dbe: Decimal = Decimal("0")


class CompletedPayments(BaseModel):
    race_conscious: CompletedGroup
    race_neutral: CompletedGroup


class PaymentsByStatus(BaseModel):
    ongoing: OngoingPayments
    completed: CompletedPayments


class ComplianceReport(BaseModel):
    """Everything shown on the Reports page"""
    selected_contract_ids: List[str]
    totals: SummaryTotals
    ethnicity_breakdown: Dict[str, EthnicityBucket]
    payments_by_status: PaymentsByStatus


class EthnicityGenderContractRow(BaseModel):
    """Certified subgrant totals for one contract and one ethnicity/gender category"""
    contract_id: str
    tad_project_number: str
    contract_number: str
    prime_contractor: str
    original_amount: Decimal
    dbe_percentage: Decimal
    ethnicity_gender: Optional[str]
    subgrant_count: int
    total_amount: Decimal


class EthnicityGenderReport(BaseModel):
    rows: List[EthnicityGenderContractRow]
    total: int
