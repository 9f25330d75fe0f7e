"""
DBE participation report - in-memory aggregation over loaded contracts

Every function here is pure: it reads the contracts (ORM rows or
ContractResponse objects, anything exposing the same attributes) and returns
new report objects. Nothing is written back and nothing is queried.
"""
import logging
from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.subgrant import DBEEthnicity, ETHNICITY_GENDER_SEPARATOR
from ..schemas.report import (
    AmountCount,
    CompletedGroup,
    CompletedPayments,
    ComplianceReport,
    EthnicityBucket,
    EthnicityGenderContractRow,
    OngoingPayments,
    PaymentsByStatus,
    PrimeTotals,
    SummaryTotals,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Gender spellings counted as women; everything else is reported as men
FEMALE_VALUES = {"female", "f", "woman", "women"}


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored amount (Decimal, float, int, str or None) to Decimal"""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 0.1 keep their short form
    return Decimal(str(value))


def percentage(numerator: Any, denominator: Any) -> Decimal:
    """
    numerator / denominator * 100, rounded half-up to 2 decimal places

    A zero denominator yields 0 whatever the numerator is.
    """
    denominator = to_decimal(denominator)
    if denominator == ZERO:
        return ZERO.quantize(CENT)
    result = to_decimal(numerator) / denominator * HUNDRED
    return result.quantize(CENT, rounding=ROUND_HALF_UP)


def select_contracts(contracts: Optional[Iterable[Any]], contract_ids: Optional[Sequence[str]] = None) -> List[Any]:
    """Contracts named in contract_ids, or all of them when no ids are given"""
    contracts = list(contracts or [])
    if not contract_ids:
        return contracts
    wanted = {str(contract_id) for contract_id in contract_ids}
    return [contract for contract in contracts if str(contract.id) in wanted]


def certified_subgrants(contract: Any) -> List[Any]:
    return [subgrant for subgrant in (getattr(contract, "subgrants", None) or []) if subgrant.certified_dbe]


def _certified_totals(contracts: Iterable[Any]) -> AmountCount:
    totals = AmountCount()
    for contract in contracts:
        for subgrant in certified_subgrants(contract):
            totals.count += 1
            totals.amount += to_decimal(subgrant.amount)
    return totals


def split_ethnicity_gender(category: str) -> Tuple[str, str]:
    """Split "Black American/Female" into ("Black American", "Female")"""
    ethnicity, _, gender = category.partition(ETHNICITY_GENDER_SEPARATOR)
    return ethnicity.strip(), gender.strip()


def is_women(gender: str) -> bool:
    return gender.strip().lower() in FEMALE_VALUES


def _match_ethnicity(ethnicity: str) -> Optional[str]:
    lowered = ethnicity.lower()
    for bucket in DBEEthnicity:
        if bucket.value.lower() == lowered:
            return bucket.value
    return None


def calculate_totals(contracts: Sequence[Any]) -> SummaryTotals:
    """Prime contract and certified DBE subcontract totals"""
    prime = PrimeTotals(
        count=len(contracts),
        amount=sum((to_decimal(contract.original_amount) for contract in contracts), ZERO),
    )
    dbe = _certified_totals(contracts)
    return SummaryTotals(
        prime_contracts=prime,
        dbe_subcontracts=dbe,
        dbe_share_percent=percentage(dbe.amount, prime.amount),
    )


def calculate_ethnicity_breakdown(contracts: Sequence[Any]) -> Dict[str, EthnicityBucket]:
    """
    Certified subgrant dollars by ethnicity, split into women and men

    Every ethnicity bucket is always present. Subgrants without a category
    are left out, as are categories whose ethnicity is not a known bucket.
    """
    breakdown: Dict[str, EthnicityBucket] = OrderedDict(
        (bucket.value, EthnicityBucket(women=AmountCount(), men=AmountCount(), total=AmountCount()))
        for bucket in DBEEthnicity
    )

    for contract in contracts:
        for subgrant in certified_subgrants(contract):
            category = subgrant.ethnicity_gender
            if not category:
                continue

            ethnicity, gender = split_ethnicity_gender(category)
            bucket_name = _match_ethnicity(ethnicity)
            if bucket_name is None:
                logger.debug(f"Skipping subgrant {subgrant.id}: unknown ethnicity category '{category}'")
                continue

            amount = to_decimal(subgrant.amount)
            bucket = breakdown[bucket_name]
            side = bucket.women if is_women(gender) else bucket.men
            side.count += 1
            side.amount += amount
            bucket.total.count += 1
            bucket.total.amount += amount

    return breakdown


def _completed_group(contracts: Sequence[Any]) -> CompletedGroup:
    group = CompletedGroup(count=len(contracts))
    for contract in contracts:
        original_amount = to_decimal(contract.original_amount)
        group.amount += original_amount
        group.dbe_needed += original_amount * to_decimal(contract.dbe_percentage) / HUNDRED
    group.dbe_needed = group.dbe_needed.quantize(CENT, rounding=ROUND_HALF_UP)
    group.dbe_participation = _certified_totals(contracts).amount
    group.percent_to_dbe = percentage(group.dbe_participation, group.amount)
    return group


def calculate_payments_by_status(contracts: Sequence[Any]) -> PaymentsByStatus:
    """
    Split contracts into ongoing and completed (final report filed)

    Completed contracts are further divided into race-conscious (a DBE goal
    was set) and race-neutral (goal of 0%).
    """
    ongoing_contracts = [contract for contract in contracts if not contract.final_report]
    completed_contracts = [contract for contract in contracts if contract.final_report]

    certified = _certified_totals(ongoing_contracts)
    ongoing = OngoingPayments(
        count=len(ongoing_contracts),
        amount=sum((to_decimal(contract.original_amount) for contract in ongoing_contracts), ZERO),
        dbe_amount=certified.amount,
        dbe_count=certified.count,
    )
    ongoing.dbe_percent = percentage(ongoing.dbe_amount, ongoing.amount)

    race_conscious = [c for c in completed_contracts if to_decimal(c.dbe_percentage) > ZERO]
    race_neutral = [c for c in completed_contracts if to_decimal(c.dbe_percentage) <= ZERO]

    return PaymentsByStatus(
        ongoing=ongoing,
        completed=CompletedPayments(
            race_conscious=_completed_group(race_conscious),
            race_neutral=_completed_group(race_neutral),
        ),
    )


def build_compliance_report(
    contracts: Optional[Iterable[Any]],
    contract_ids: Optional[Sequence[str]] = None
) -> ComplianceReport:
    """
    Build the full DBE participation report

    Args:
        contracts: Contracts with their subgrants loaded
        contract_ids: Contracts to include; empty or None means all

    Returns:
        ComplianceReport with totals, ethnicity/gender breakdown and payments by status
    """
    selected = select_contracts(contracts, contract_ids)
    return ComplianceReport(
        selected_contract_ids=[str(contract.id) for contract in selected],
        totals=calculate_totals(selected),
        ethnicity_breakdown=calculate_ethnicity_breakdown(selected),
        payments_by_status=calculate_payments_by_status(selected),
    )


def ethnicity_gender_by_contract(contracts: Optional[Iterable[Any]]) -> List[EthnicityGenderContractRow]:
    """Certified subgrant count and dollars per contract and ethnicity/gender category"""
    rows: List[EthnicityGenderContractRow] = []
    for contract in contracts or []:
        groups: Dict[Optional[str], AmountCount] = OrderedDict()
        for subgrant in certified_subgrants(contract):
            group = groups.setdefault(subgrant.ethnicity_gender or None, AmountCount())
            group.count += 1
            group.amount += to_decimal(subgrant.amount)

        # Uncategorised subgrants go last
        for category in sorted(groups, key=lambda value: (value is None, value or "")):
            rows.append(EthnicityGenderContractRow(
                contract_id=str(contract.id),
                tad_project_number=contract.tad_project_number,
                contract_number=contract.contract_number,
                prime_contractor=contract.prime_contractor,
                original_amount=to_decimal(contract.original_amount),
                dbe_percentage=to_decimal(contract.dbe_percentage),
                ethnicity_gender=category,
                subgrant_count=groups[category].count,
                total_amount=groups[category].amount,
            ))
    return rows
