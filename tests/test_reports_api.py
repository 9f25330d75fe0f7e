"""
API tests for the DBE participation and ethnicity/gender reports.
"""
from decimal import Decimal

import pytest

from conftest import contract_payload, subgrant_payload


@pytest.fixture()
def closed_contract(client, member_headers):
    resp = client.post("/api/v1/contracts", headers=member_headers, json=contract_payload(
        original_amount="100000", dbe_percentage="10", final_report=True,
        subgrants=[subgrant_payload(amount="12000", ethnicity_gender="Black American/Female")],
    ))
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture()
def open_contract(client, member_headers):
    resp = client.post("/api/v1/contracts", headers=member_headers, json=contract_payload(
        contract_number="AER-2002", original_amount="40000", dbe_percentage="0",
        subgrants=[
            subgrant_payload(amount="4000", ethnicity_gender="Asian-Pacific American/Male"),
            subgrant_payload(amount="6000", certified_dbe=False),
        ],
    ))
    assert resp.status_code == 201
    return resp.json()


class TestParticipationReport:
    def test_completed_race_conscious(self, client, member_headers, closed_contract):
        resp = client.get("/api/v1/reports/dbe-participation", headers=member_headers)
        assert resp.status_code == 200
        body = resp.json()

        group = body["payments_by_status"]["completed"]["race_conscious"]
        assert group["count"] == 1
        assert Decimal(group["amount"]) == Decimal("100000")
        assert Decimal(group["dbe_needed"]) == Decimal("10000")
        assert Decimal(group["dbe_participation"]) == Decimal("12000")
        assert Decimal(group["percent_to_dbe"]) == Decimal("12.00")

        women = body["ethnicity_breakdown"]["Black American"]["women"]
        assert women["count"] == 1
        assert Decimal(women["amount"]) == Decimal("12000")

    def test_selection(self, client, member_headers, closed_contract, open_contract):
        resp = client.get("/api/v1/reports/dbe-participation", headers=member_headers,
                          params={"contract_ids": [open_contract["id"]]})
        body = resp.json()
        assert body["selected_contract_ids"] == [open_contract["id"]]
        assert Decimal(body["totals"]["prime_contracts"]["amount"]) == Decimal("40000")
        assert Decimal(body["totals"]["dbe_subcontracts"]["amount"]) == Decimal("4000")
        assert body["totals"]["dbe_subcontracts"]["count"] == 1
        assert Decimal(body["payments_by_status"]["ongoing"]["dbe_percent"]) == Decimal("10.00")

    def test_no_selection_covers_all(self, client, member_headers, closed_contract, open_contract):
        body = client.get("/api/v1/reports/dbe-participation", headers=member_headers).json()
        assert sorted(body["selected_contract_ids"]) == sorted([closed_contract["id"], open_contract["id"]])
        assert body["totals"]["prime_contracts"]["count"] == 2
        assert Decimal(body["totals"]["dbe_subcontracts"]["amount"]) == Decimal("16000")

    def test_empty_database(self, client, member_headers):
        body = client.get("/api/v1/reports/dbe-participation", headers=member_headers).json()
        assert body["totals"]["prime_contracts"]["count"] == 0
        assert Decimal(body["totals"]["dbe_share_percent"]) == Decimal("0")
        assert len(body["ethnicity_breakdown"]) == 6

    def test_report_reflects_writes(self, client, member_headers, open_contract):
        uncertified = [s for s in open_contract["subgrants"] if not s["certified_dbe"]][0]
        client.patch(f"/api/v1/subgrants/{uncertified['id']}/certified-dbe", headers=member_headers,
                     json={"certified_dbe": True})
        body = client.get("/api/v1/reports/dbe-participation", headers=member_headers).json()
        assert Decimal(body["totals"]["dbe_subcontracts"]["amount"]) == Decimal("10000")

    def test_requires_sign_in(self, client):
        assert client.get("/api/v1/reports/dbe-participation").status_code == 401


class TestEthnicityGenderReport:
    def test_rows(self, client, member_headers, closed_contract, open_contract):
        resp = client.get("/api/v1/reports/ethnicity-gender", headers=member_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 2
        categories = {row["contract_number"]: row["ethnicity_gender"] for row in body["rows"]}
        assert categories == {
            "AER-1001": "Black American/Female",
            "AER-2002": "Asian-Pacific American/Male",
        }
