"""
Contract Service - validated writes for contracts and their subgrants

Route handlers call these functions instead of touching the session directly.
Validation happens before anything is added to the session, so a rejected
request never reaches the database. Every write commits (or rolls back) as a
unit; callers re-read the contract list afterwards instead of patching it.
"""
import logging
from typing import Iterable, List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..core.exceptions import DataStoreError, NotFoundError, PermissionDeniedError, ValidationError
from ..models.contract import Contract
from ..models.subgrant import Subgrant
from ..models.user import User
from ..schemas.contract import ContractCreate, ContractEdit, ContractFilter, ContractUpdate
from ..schemas.subgrant import SubgrantBase
from ..utils.validators import validate_naics_code
from .contract_filters import filter_contracts

logger = logging.getLogger(__name__)

CONTRACT_FIELDS = (
    "tad_project_number",
    "contract_number",
    "prime_contractor",
    "original_amount",
    "dbe_percentage",
    "award_date",
    "report_date",
    "final_report",
)

SUBGRANT_FIELDS = (
    "dbe_firm_name",
    "naics_code",
    "amount",
    "contract_type",
    "certified_dbe",
    "award_date",
    "ethnicity_gender",
)


def commit_or_raise(db: Session, action: str) -> None:
    """Commit the pending changes, rolling back and wrapping any database error"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error while trying to {action}: {str(e)}")
        raise DataStoreError(f"Could not {action}: the change conflicts with existing data", conflict=True)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {str(e)}", exc_info=True)
        raise DataStoreError(f"Could not {action}. Please try again.")


def check_subgrant_naics(subgrants: Iterable[SubgrantBase], allow_blank: bool = False) -> None:
    """Reject malformed NAICS codes; allow_blank skips rows that have none"""
    for index, subgrant in enumerate(subgrants):
        if allow_blank and not subgrant.naics_code:
            continue
        is_valid, error = validate_naics_code(subgrant.naics_code)
        if not is_valid:
            raise ValidationError(error, field=f"subgrants[{index}].naics_code", code="invalid_naics_code")


def _ensure_can_modify(user: User, contract: Contract) -> None:
    """Only the user who entered the contract, or an admin, may change it"""
    if user.is_admin:
        return
    if contract.created_by is None or contract.created_by != user.id:
        raise PermissionDeniedError()


def apply_fields(record, data, fields) -> None:
    for field in fields:
        value = getattr(data, field)
        # Enum members are stored by value
        setattr(record, field, getattr(value, "value", value))


def _contract_query(db: Session):
    return db.query(Contract).options(selectinload(Contract.subgrants))


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def list_contracts(db: Session, criteria: Optional[ContractFilter] = None) -> List[Contract]:
    """All contracts with subgrants, newest first, narrowed by the dashboard filters"""
    try:
        contracts = _contract_query(db).order_by(Contract.created_at.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error loading contracts: {str(e)}", exc_info=True)
        raise DataStoreError("Could not load contracts")
    return filter_contracts(contracts, criteria)


def get_contract(db: Session, contract_id: str) -> Contract:
    contract = _contract_query(db).filter(Contract.id == contract_id).first()
    if not contract:
        raise NotFoundError("Contract", contract_id)
    return contract


def get_subgrant(db: Session, subgrant_id: str) -> Subgrant:
    subgrant = db.query(Subgrant).filter(Subgrant.id == subgrant_id).first()
    if not subgrant:
        raise NotFoundError("Subgrant", subgrant_id)
    return subgrant


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

def create_contract(db: Session, user: User, data: ContractCreate) -> Contract:
    """Insert a contract, plus any subgrants submitted with it"""
    check_subgrant_naics(data.subgrants)

    contract = Contract(created_by=user.id)
    apply_fields(contract, data, CONTRACT_FIELDS)
    for subgrant_data in data.subgrants:
        subgrant = Subgrant(created_by=user.id)
        apply_fields(subgrant, subgrant_data, SUBGRANT_FIELDS)
        contract.subgrants.append(subgrant)

    db.add(contract)
    commit_or_raise(db, "create the contract")
    logger.info(f"Contract {contract.id} ({contract.contract_number}) created by user {user.id} with {len(data.subgrants)} subgrant(s)")
    return get_contract(db, contract.id)


def update_contract(db: Session, user: User, contract_id: str, data: ContractUpdate) -> Contract:
    """Replace every editable contract field"""
    contract = get_contract(db, contract_id)
    _ensure_can_modify(user, contract)

    apply_fields(contract, data, CONTRACT_FIELDS)
    commit_or_raise(db, "update the contract")
    logger.info(f"Contract {contract_id} updated by user {user.id}")
    return get_contract(db, contract_id)


def set_final_report(db: Session, user: User, contract_id: str, final_report: bool) -> Contract:
    """Mark a contract closed out, or reopen it"""
    contract = get_contract(db, contract_id)
    _ensure_can_modify(user, contract)

    contract.final_report = final_report
    commit_or_raise(db, "update the final report flag")
    logger.info(f"Contract {contract_id} final_report set to {final_report} by user {user.id}")
    return get_contract(db, contract_id)


def edit_contract(db: Session, user: User, contract_id: str, data: ContractEdit) -> Contract:
    """
    Save the edit form: the contract row and each listed subgrant

    All rows are written in one transaction. If any of them fails nothing is
    kept, so the contract never ends up updated with only some of its
    subgrants.
    """
    check_subgrant_naics(data.subgrants)
    contract = get_contract(db, contract_id)
    _ensure_can_modify(user, contract)

    owned = {subgrant.id: subgrant for subgrant in contract.subgrants}
    for subgrant_data in data.subgrants:
        if subgrant_data.id not in owned:
            raise ValidationError(
                f"Subgrant {subgrant_data.id} does not belong to this contract",
                field="subgrants",
                code="foreign_subgrant",
            )

    try:
        apply_fields(contract, data, CONTRACT_FIELDS)
        for subgrant_data in data.subgrants:
            apply_fields(owned[subgrant_data.id], subgrant_data, SUBGRANT_FIELDS)
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Edit of contract {contract_id} rolled back: {str(e)}")
        raise DataStoreError("Could not save the contract. No changes were applied.")

    commit_or_raise(db, "save the contract")
    logger.info(f"Contract {contract_id} and {len(data.subgrants)} subgrant(s) updated by user {user.id}")
    return get_contract(db, contract_id)


def delete_contract(db: Session, user: User, contract_id: str) -> None:
    """Delete a contract; its subgrants go with it"""
    contract = get_contract(db, contract_id)
    _ensure_can_modify(user, contract)

    subgrant_count = len(contract.subgrants)
    db.delete(contract)
    commit_or_raise(db, "delete the contract")
    logger.info(f"Contract {contract_id} and {subgrant_count} subgrant(s) deleted by user {user.id}")


# ---------------------------------------------------------------------------
# Subgrants
# ---------------------------------------------------------------------------

def create_subgrant(db: Session, user: User, contract_id: str, data: SubgrantBase) -> Subgrant:
    """Attach a subgrant to a contract after checking the NAICS code"""
    is_valid, error = validate_naics_code(data.naics_code)
    if not is_valid:
        raise ValidationError(error, field="naics_code", code="invalid_naics_code")

    contract = get_contract(db, contract_id)
    _ensure_can_modify(user, contract)

    subgrant = Subgrant(contract_id=contract.id, created_by=user.id)
    apply_fields(subgrant, data, SUBGRANT_FIELDS)
    db.add(subgrant)
    commit_or_raise(db, "add the subgrant")
    db.refresh(subgrant)
    logger.info(f"Subgrant {subgrant.id} ({subgrant.dbe_firm_name}) added to contract {contract_id}")
    return subgrant


def update_subgrant(db: Session, user: User, subgrant_id: str, data: SubgrantBase) -> Subgrant:
    """Replace every editable subgrant field"""
    is_valid, error = validate_naics_code(data.naics_code)
    if not is_valid:
        raise ValidationError(error, field="naics_code", code="invalid_naics_code")

    subgrant = get_subgrant(db, subgrant_id)
    _ensure_can_modify(user, subgrant.contract)

    apply_fields(subgrant, data, SUBGRANT_FIELDS)
    commit_or_raise(db, "update the subgrant")
    db.refresh(subgrant)
    logger.info(f"Subgrant {subgrant_id} updated by user {user.id}")
    return subgrant


def set_certified_dbe(db: Session, user: User, subgrant_id: str, certified_dbe: bool) -> Subgrant:
    subgrant = get_subgrant(db, subgrant_id)
    _ensure_can_modify(user, subgrant.contract)

    subgrant.certified_dbe = certified_dbe
    commit_or_raise(db, "update the certified DBE status")
    db.refresh(subgrant)
    logger.info(f"Subgrant {subgrant_id} certified_dbe set to {certified_dbe} by user {user.id}")
    return subgrant


def delete_subgrant(db: Session, user: User, subgrant_id: str) -> None:
    subgrant = get_subgrant(db, subgrant_id)
    _ensure_can_modify(user, subgrant.contract)

    db.delete(subgrant)
    commit_or_raise(db, "delete the subgrant")
    logger.info(f"Subgrant {subgrant_id} deleted by user {user.id}")
