"""
Dashboard search and filters over a loaded contract list
"""
from datetime import date, datetime
from typing import Any, Iterable, List, Optional
from dateutil import parser as dateutil_parser

from ..schemas.contract import ContractFilter
from .dbe_report import to_decimal

SEARCH_FIELDS = ("tad_project_number", "contract_number", "prime_contractor")


def _created_on(contract: Any) -> Optional[date]:
    """Calendar day the contract was entered"""
    created_at = contract.created_at
    if created_at is None:
        return None
    if isinstance(created_at, str):
        created_at = dateutil_parser.isoparse(created_at)
    if isinstance(created_at, datetime):
        return created_at.date()
    return created_at


def matches_search(contract: Any, search: str) -> bool:
    """Case-insensitive substring match on project number, contract number or prime"""
    needle = (search or "").strip().lower()
    if not needle:
        return True
    return any(needle in (getattr(contract, field) or "").lower() for field in SEARCH_FIELDS)


def matches_amount(contract: Any, criteria: ContractFilter) -> bool:
    amount = to_decimal(contract.original_amount)
    if criteria.min_amount is not None and amount < criteria.min_amount:
        return False
    if criteria.max_amount is not None and amount > criteria.max_amount:
        return False
    return True


def matches_dates(contract: Any, criteria: ContractFilter) -> bool:
    """Creation day within [start_date, end_date], both ends inclusive"""
    if criteria.start_date is None and criteria.end_date is None:
        return True
    created_on = _created_on(contract)
    if created_on is None:
        return False
    if criteria.start_date is not None and created_on < criteria.start_date:
        return False
    if criteria.end_date is not None and created_on > criteria.end_date:
        return False
    return True


def filter_contracts(contracts: Optional[Iterable[Any]], criteria: Optional[ContractFilter] = None) -> List[Any]:
    """Contracts passing every filter that is set, in their original order"""
    contracts = list(contracts or [])
    if criteria is None:
        return contracts
    return [
        contract for contract in contracts
        if matches_search(contract, criteria.search)
        and matches_amount(contract, criteria)
        and matches_dates(contract, criteria)
    ]
