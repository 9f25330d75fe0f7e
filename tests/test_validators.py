"""
Tests for field validators (NAICS codes, passwords, ethnicity/gender).
"""
import pytest

from backend.dbe_tracker.models.subgrant import ETHNICITY_GENDER_CHOICES
from backend.dbe_tracker.utils.validators import (
    validate_ethnicity_gender,
    validate_naics_code,
    validate_password,
)


class TestNaicsCode:
    @pytest.mark.parametrize("code", ["012345", "237310", "484110"])
    def test_accepts_six_digits(self, code):
        assert validate_naics_code(code) == (True, None)

    @pytest.mark.parametrize("code", ["12345", "1234567", "12a456", "", "12 345", "123456\n", "١٢٣٤٥٦"])
    def test_rejects_malformed(self, code):
        is_valid, error = validate_naics_code(code)
        assert is_valid is False
        assert error

    def test_error_message(self):
        assert validate_naics_code("12345") == (False, "NAICS code must be exactly 6 digits.")

    def test_rejects_non_string(self):
        assert validate_naics_code(None)[0] is False


class TestPassword:
    def test_accepts_policy_compliant(self):
        assert validate_password("Passw0rd!") == (True, None)

    @pytest.mark.parametrize("password, fragment", [
        ("Pa0!", "at least 6"),
        ("PASSW0RD!", "lowercase"),
        ("passw0rd!", "uppercase"),
        ("Password!", "number"),
        ("Passw0rd", "symbol"),
    ])
    def test_rejects(self, password, fragment):
        is_valid, error = validate_password(password)
        assert is_valid is False
        assert fragment in error


class TestEthnicityGender:
    def test_none_allowed(self):
        assert validate_ethnicity_gender(None) == (True, None)

    def test_all_canonical_choices_accepted(self):
        assert len(ETHNICITY_GENDER_CHOICES) == 12
        for choice in ETHNICITY_GENDER_CHOICES:
            assert validate_ethnicity_gender(choice)[0] is True

    def test_legacy_code_rejected(self):
        is_valid, error = validate_ethnicity_gender("MBE-BA")
        assert is_valid is False
        assert "MBE-BA" in error
