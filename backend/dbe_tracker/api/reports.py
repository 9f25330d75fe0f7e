"""
Report API endpoints

Reports are computed from the full contract list on every request.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from ..core.database import get_db
from ..core.dependencies import get_current_active_user
from ..models.user import User
from ..schemas.report import ComplianceReport, EthnicityGenderReport
from ..services import contract_service
from ..services.dbe_report import build_compliance_report, ethnicity_gender_by_contract

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/dbe-participation", response_model=ComplianceReport)
async def dbe_participation_report(
    contract_ids: List[str] = Query(default=[], description="Contracts to include; omit for all"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Totals, ethnicity/gender breakdown and payments by status"""
    contracts = contract_service.list_contracts(db)
    return build_compliance_report(contracts, contract_ids)


@router.get("/ethnicity-gender", response_model=EthnicityGenderReport)
async def ethnicity_gender_report(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Certified subgrant totals per contract and ethnicity/gender category"""
    rows = ethnicity_gender_by_contract(contract_service.list_contracts(db))
    return {
        "rows": rows,
        "total": len(rows)
    }
