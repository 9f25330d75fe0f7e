"""
Contracts API endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
from decimal import Decimal
from ..core.database import get_db
from ..core.dependencies import get_current_active_user
from ..models.user import User
from ..schemas.contract import (
    ContractCreate,
    ContractUpdate,
    ContractEdit,
    FinalReportUpdate,
    ContractResponse,
    ContractList,
    ContractFilter,
)
from ..schemas.subgrant import SubgrantCreate, SubgrantResponse
from ..services import contract_service

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("", response_model=ContractList)
async def list_contracts(
    search: str = Query(default="", description="Matches project number, contract number or prime contractor"),
    min_amount: Optional[Decimal] = Query(default=None, ge=0),
    max_amount: Optional[Decimal] = Query(default=None, ge=0),
    start_date: Optional[date] = Query(default=None, description="Created on or after"),
    end_date: Optional[date] = Query(default=None, description="Created on or before"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """List contracts with their subgrants, newest first"""
    criteria = ContractFilter(
        search=search,
        min_amount=min_amount,
        max_amount=max_amount,
        start_date=start_date,
        end_date=end_date,
    )
    contracts = contract_service.list_contracts(db, criteria)
    return {
        "contracts": contracts,
        "total": len(contracts)
    }


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    contract_data: ContractCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Record a new prime contract"""
    return contract_service.create_contract(db, current_user, contract_data)


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get a contract with its subgrants"""
    return contract_service.get_contract(db, contract_id)


@router.put("/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: str,
    contract_data: ContractUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Replace the contract's fields"""
    return contract_service.update_contract(db, current_user, contract_id, contract_data)


@router.put("/{contract_id}/edit", response_model=ContractResponse)
async def edit_contract(
    contract_id: str,
    contract_data: ContractEdit,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """
    Save the contract together with its subgrant rows.
    Either every row is saved or none is.
    """
    return contract_service.edit_contract(db, current_user, contract_id, contract_data)


@router.patch("/{contract_id}/final-report", response_model=ContractResponse)
async def update_final_report(
    contract_id: str,
    update: FinalReportUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Toggle the final report flag"""
    return contract_service.set_final_report(db, current_user, contract_id, update.final_report)


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contract(
    contract_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Delete a contract and all of its subgrants"""
    contract_service.delete_contract(db, current_user, contract_id)
    return None


@router.post("/{contract_id}/subgrants", response_model=SubgrantResponse, status_code=status.HTTP_201_CREATED)
async def create_subgrant(
    contract_id: str,
    subgrant_data: SubgrantCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Attach a DBE subgrant to the contract"""
    return contract_service.create_subgrant(db, current_user, contract_id, subgrant_data)
