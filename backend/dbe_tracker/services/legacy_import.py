"""
Import contracts exported from earlier revisions of the tracker

Older exports differ from the current record shape in four ways:

- schema_version 1 subgrants carry a free-text ``work_type`` instead of
  ``contract_type`` and ``naics_code``. The work type is kept only when it
  names a known contract type. A missing NAICS code is stored as null; one
  that is present must still be six digits.
- ethnicity/gender was recorded as coded categories ("MBE-BA", "WFBE", ...)
  rather than "<Ethnicity>/<Gender>" pairs. Codes are mapped through
  LEGACY_ETHNICITY_CODES; unknown codes are logged and stored as null.
- dates were typed by hand ("3/15/2021", "March 15 2021").
- rows without a schema_version predate versioning and are read as version 1.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from ..core.exceptions import DataStoreError, ValidationError
from ..models.contract import CURRENT_SCHEMA_VERSION, Contract
from ..models.subgrant import (
    DBEEthnicity,
    DBEGender,
    ETHNICITY_GENDER_CHOICES,
    ETHNICITY_GENDER_SEPARATOR,
    Subgrant,
    SubgrantContractType,
)
from ..models.user import User
from ..schemas.contract import ContractCreate
from .contract_service import CONTRACT_FIELDS, SUBGRANT_FIELDS, apply_fields, check_subgrant_naics, commit_or_raise

logger = logging.getLogger(__name__)

_ETHNICITY_CODES = {
    "BA": DBEEthnicity.BLACK_AMERICAN,
    "HA": DBEEthnicity.HISPANIC_AMERICAN,
    "NA": DBEEthnicity.NATIVE_AMERICAN,
    "APA": DBEEthnicity.ASIAN_PACIFIC_AMERICAN,
    "SAA": DBEEthnicity.SUBCONTINENT_ASIAN_AMERICAN,
}


def _category(ethnicity: DBEEthnicity, gender: DBEGender) -> str:
    return f"{ethnicity.value}{ETHNICITY_GENDER_SEPARATOR}{gender.value}"


def _build_legacy_codes() -> Dict[str, str]:
    codes = {
        "WBE": _category(DBEEthnicity.NON_MINORITY, DBEGender.FEMALE),
        "WFBE": _category(DBEEthnicity.NON_MINORITY, DBEGender.FEMALE),
    }
    for code, ethnicity in _ETHNICITY_CODES.items():
        codes[f"MBE-{code}"] = _category(ethnicity, DBEGender.MALE)
        codes[f"MBE-{code}-F"] = _category(ethnicity, DBEGender.FEMALE)
        codes[f"WMBE-{code}"] = _category(ethnicity, DBEGender.FEMALE)
    return codes


LEGACY_ETHNICITY_CODES = _build_legacy_codes()


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)


def normalize_ethnicity_gender(value: Optional[str]) -> Optional[str]:
    """Map a stored category (canonical or legacy code) to the canonical form"""
    if value is None or not str(value).strip():
        return None
    value = str(value).strip()
    if value in ETHNICITY_GENDER_CHOICES:
        return value
    mapped = LEGACY_ETHNICITY_CODES.get(value.upper())
    if mapped is None:
        logger.warning(f"Unknown ethnicity/gender category '{value}' imported as null")
    return mapped


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return dateutil_parser.parse(str(value)).date()
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"Unrecognised date: {value}", code="invalid_date")


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return dateutil_parser.parse(str(value))
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"Unrecognised timestamp: {value}", code="invalid_date")


def parse_schema_version(value: Any) -> int:
    """Schema version of an exported row; rows from before versioning are version 1"""
    if value is None or value == "":
        return 1
    text = str(value).strip()
    version = int(text) if text.isascii() and text.isdigit() and not isinstance(value, bool) else None
    if version is None or not 1 <= version <= CURRENT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unrecognised schema_version: {value}",
            field="schema_version",
            code="invalid_schema_version",
        )
    return version


def _contract_type(row: Dict[str, Any]) -> str:
    value = row.get("contract_type") or row.get("work_type") or ""
    for member in SubgrantContractType:
        if str(value).strip().lower() == member.value.lower():
            return member.value
    return SubgrantContractType.SUBCONTRACT.value


def normalize_subgrant_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Convert one exported subgrant dict to current field names and values"""
    return {
        "dbe_firm_name": row.get("dbe_firm_name") or "",
        "naics_code": str(row.get("naics_code") or "").strip(),
        "amount": row.get("amount", 0),
        "contract_type": _contract_type(row),
        "certified_dbe": bool(row.get("certified_dbe", False)),
        "award_date": parse_date(row.get("award_date")),
        "ethnicity_gender": normalize_ethnicity_gender(row.get("ethnicity_gender")),
    }


def normalize_contract_row(row: Dict[str, Any]) -> ContractCreate:
    """Convert one exported contract dict (with nested subgrants) to a ContractCreate"""
    subgrant_rows = row.get("subgrants") or []
    if not isinstance(subgrant_rows, list) or not all(isinstance(sub, dict) for sub in subgrant_rows):
        raise ValidationError("subgrants must be a list of objects", field="subgrants", code="invalid_row")

    return ContractCreate(
        tad_project_number=row.get("tad_project_number") or "",
        contract_number=row.get("contract_number") or "",
        prime_contractor=row.get("prime_contractor") or "",
        original_amount=row.get("original_amount", 0),
        dbe_percentage=row.get("dbe_percentage") or 0,
        award_date=parse_date(row.get("award_date")),
        report_date=parse_date(row.get("report_date")),
        final_report=bool(row.get("final_report", False)),
        subgrants=[normalize_subgrant_row(sub) for sub in subgrant_rows],
    )


def import_contracts(db: Session, user: User, rows: List[Dict[str, Any]]) -> ImportResult:
    """
    Insert exported contracts, one transaction per contract

    A row that fails validation or insertion is skipped and reported; the
    others are still imported. Original creation timestamps and schema
    versions are kept.
    """
    result = ImportResult()

    for index, row in enumerate(rows):
        label = f"row {index}"
        try:
            if not isinstance(row, dict):
                raise ValidationError("Row is not a contract object", code="invalid_row")
            label = row.get("contract_number") or label

            schema_version = parse_schema_version(row.get("schema_version"))
            data = normalize_contract_row(row)
            check_subgrant_naics(data.subgrants, allow_blank=schema_version == 1)
            created_at = parse_timestamp(row.get("created_at"))

            contract = Contract(created_by=user.id, schema_version=schema_version)
            apply_fields(contract, data, CONTRACT_FIELDS)
            if created_at:
                contract.created_at = created_at
            for subgrant_data in data.subgrants:
                subgrant = Subgrant(created_by=user.id, schema_version=schema_version)
                apply_fields(subgrant, subgrant_data, SUBGRANT_FIELDS)
                # Version 1 subgrants without a code stay null
                subgrant.naics_code = subgrant_data.naics_code or None
                contract.subgrants.append(subgrant)

            db.add(contract)
            commit_or_raise(db, f"import contract {label}")
            result.imported += 1
        except (SchemaValidationError, ValidationError, DataStoreError) as e:
            db.rollback()
            message = getattr(e, "message", str(e))
            logger.warning(f"Skipping contract {label}: {message}")
            result.skipped += 1
            result.errors.append({"row": index, "contract_number": label, "error": message})

    logger.info(f"Legacy import finished: {result.imported} imported, {result.skipped} skipped")
    return result
