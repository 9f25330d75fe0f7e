"""
Field validation for contracts, subgrants and accounts
"""
import re
from typing import Optional, Tuple

from ..models.subgrant import ETHNICITY_GENDER_CHOICES

NAICS_PATTERN = re.compile(r"[0-9]{6}")

# Symbols accepted by the password policy
PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'
PASSWORD_MIN_LENGTH = 6


def validate_naics_code(code: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a NAICS industry code

    Returns:
        (is_valid, error_message)
    """
    if not code or not isinstance(code, str):
        return False, "NAICS code is required"

    # \d would also accept non-ASCII digits
    if not NAICS_PATTERN.fullmatch(code):
        return False, "NAICS code must be exactly 6 digits."

    return True, None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """
    Check a sign-up password against the account policy

    Returns:
        (is_valid, error_message)
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
    if not re.search(r"[a-z]", password):
        return False, "Password must include at least one lowercase letter"
    if not re.search(r"[A-Z]", password):
        return False, "Password must include at least one uppercase letter"
    if not re.search(r"[0-9]", password):
        return False, "Password must include at least one number"
    if not any(ch in PASSWORD_SYMBOLS for ch in password):
        return False, "Password must include at least one symbol"
    return True, None


def validate_ethnicity_gender(value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Accept None or one of the canonical "<Ethnicity>/<Gender>" categories"""
    if value is None:
        return True, None
    if value not in ETHNICITY_GENDER_CHOICES:
        return False, f"Unknown ethnicity/gender category: {value}"
    return True, None
