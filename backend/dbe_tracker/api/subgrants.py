"""
Subgrants API endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ..core.database import get_db
from ..core.dependencies import get_current_active_user
from ..models.user import User
from ..schemas.subgrant import SubgrantUpdate, CertifiedDBEUpdate, SubgrantResponse
from ..services import contract_service

router = APIRouter(prefix="/subgrants", tags=["subgrants"])


@router.get("/{subgrant_id}", response_model=SubgrantResponse)
async def get_subgrant(
    subgrant_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    return contract_service.get_subgrant(db, subgrant_id)


@router.put("/{subgrant_id}", response_model=SubgrantResponse)
async def update_subgrant(
    subgrant_id: str,
    subgrant_data: SubgrantUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Replace the subgrant's fields"""
    return contract_service.update_subgrant(db, current_user, subgrant_id, subgrant_data)


@router.patch("/{subgrant_id}/certified-dbe", response_model=SubgrantResponse)
async def update_certified_dbe(
    subgrant_id: str,
    update: CertifiedDBEUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Toggle whether the firm is a certified DBE"""
    return contract_service.set_certified_dbe(db, current_user, subgrant_id, update.certified_dbe)


@router.delete("/{subgrant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subgrant(
    subgrant_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    contract_service.delete_subgrant(db, current_user, subgrant_id)
    return None
