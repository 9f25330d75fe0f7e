"""
Tests for dashboard search and filters.
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from backend.dbe_tracker.schemas.contract import ContractFilter
from backend.dbe_tracker.services.contract_filters import filter_contracts, matches_search


def contract(project, amount, created, contract_number="", prime=""):
    return SimpleNamespace(
        tad_project_number=project,
        contract_number=contract_number or f"C-{project}",
        prime_contractor=prime or "Prime Co",
        original_amount=Decimal(str(amount)),
        created_at=created,
    )


@pytest.fixture()
def contracts():
    return [
        contract("A1", 100, "2024-01-01"),
        contract("B2", 500, "2024-06-01"),
    ]


def projects(result):
    return [c.tad_project_number for c in result]


class TestFilterContracts:
    def test_min_amount(self, contracts):
        assert projects(filter_contracts(contracts, ContractFilter(min_amount=200))) == ["B2"]

    def test_max_amount(self, contracts):
        assert projects(filter_contracts(contracts, ContractFilter(max_amount=100))) == ["A1"]

    def test_search_is_case_insensitive(self, contracts):
        assert projects(filter_contracts(contracts, ContractFilter(search="a1"))) == ["A1"]

    def test_start_date(self, contracts):
        assert projects(filter_contracts(contracts, ContractFilter(start_date=date(2024, 3, 1)))) == ["B2"]

    def test_date_bounds_inclusive(self, contracts):
        criteria = ContractFilter(start_date=date(2024, 1, 1), end_date=date(2024, 6, 1))
        assert projects(filter_contracts(contracts, criteria)) == ["A1", "B2"]

    def test_end_date_includes_whole_day(self):
        late = contract("C3", 10, datetime(2024, 6, 1, 23, 59, tzinfo=timezone.utc))
        assert filter_contracts([late], ContractFilter(end_date=date(2024, 6, 1))) == [late]

    def test_all_filters_combined(self, contracts):
        criteria = ContractFilter(search="b", min_amount=100, max_amount=1000, end_date=date(2024, 12, 31))
        assert projects(filter_contracts(contracts, criteria)) == ["B2"]

    def test_empty_filter_passes_everything(self, contracts):
        assert filter_contracts(contracts, ContractFilter()) == contracts
        assert filter_contracts(contracts, None) == contracts
        assert filter_contracts(None, ContractFilter()) == []

    def test_does_not_reorder_or_mutate(self, contracts):
        original = list(contracts)
        filter_contracts(contracts, ContractFilter(min_amount=200))
        assert contracts == original


class TestSearch:
    def test_matches_any_of_three_fields(self):
        row = contract("TAD-9", 1, "2024-01-01", contract_number="AER-77", prime="Blue Sky Paving")
        assert matches_search(row, "tad-9")
        assert matches_search(row, "aer-7")
        assert matches_search(row, "sky")
        assert not matches_search(row, "granite")

    def test_blank_search_matches(self):
        assert matches_search(contract("A1", 1, "2024-01-01"), "   ")
