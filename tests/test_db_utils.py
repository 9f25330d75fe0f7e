"""
Tests for database display/export/clear helpers and the admin endpoints.
"""
import json

import pytest

from backend.dbe_tracker.models.contract import Contract
from backend.dbe_tracker.models.subgrant import Subgrant
from backend.dbe_tracker.models.user import User
from backend.dbe_tracker.schemas.contract import ContractCreate
from backend.dbe_tracker.services import contract_service
from backend.dbe_tracker.utils.db_utils import (
    clear_database,
    display_all_database_content,
    export_database_to_json,
    get_database_stats,
)

from conftest import contract_payload, subgrant_payload


@pytest.fixture()
def seeded(db, member):
    data = ContractCreate(**contract_payload(subgrants=[subgrant_payload()]))
    return contract_service.create_contract(db, member, data)


class TestHelpers:
    def test_stats(self, db, seeded):
        stats = get_database_stats(db)
        assert stats["users"] == 1
        assert stats["contracts"] == 1
        assert stats["subgrants"] == 1
        assert stats["total"] == stats["users"] + stats["sessions"] + stats["contracts"] + stats["subgrants"]

    def test_display(self, db, seeded):
        text = display_all_database_content(db)
        assert "CONTRACTS: 1 record(s)" in text
        assert "AER-1001" in text
        assert "password_hash" not in text

    def test_export_hides_secrets(self, db, seeded, tmp_path):
        target = tmp_path / "export.json"
        result = export_database_to_json(db=db, file_path=str(target))
        assert result["status"] == "success"

        written = json.loads(target.read_text(encoding="utf-8"))
        assert written["contracts"][0]["contract_number"] == "AER-1001"
        assert written["subgrants"][0]["naics_code"] == "237310"
        assert "password_hash" not in written["users"][0]

    def test_clear_requires_confirm(self, db, seeded):
        result = clear_database(db=db)
        assert result["status"] == "error"
        assert db.query(Contract).count() == 1

    def test_clear_keeps_users(self, db, seeded):
        result = clear_database(db=db, confirm=True)
        assert result["status"] == "success"
        assert result["deletion_counts"] == {"subgrants": 1, "contracts": 1}
        assert db.query(Subgrant).count() == 0
        assert db.query(User).count() == 1

    def test_clear_everything(self, db, seeded):
        clear_database(db=db, confirm=True, keep_users=False)
        assert db.query(User).count() == 0


class TestAdminEndpoints:
    def test_stats_for_admin(self, client, admin_headers):
        resp = client.get("/api/v1/utils/db/stats", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["stats"]["users"] == 1

    def test_members_forbidden(self, client, member_headers):
        resp = client.get("/api/v1/utils/db/stats", headers=member_headers)
        assert resp.status_code == 403

    def test_display_json(self, client, admin_headers):
        resp = client.get("/api/v1/utils/db/display", headers=admin_headers, params={"format": "json"})
        assert resp.status_code == 200
        assert "users" in resp.json()["data"]

    def test_clear_without_confirm(self, client, admin_headers):
        resp = client.post("/api/v1/utils/db/clear", headers=admin_headers, params={"confirm": False})
        assert resp.status_code == 400

    def test_clear(self, client, admin_headers, member_headers):
        client.post("/api/v1/contracts", headers=member_headers, json=contract_payload())
        resp = client.post("/api/v1/utils/db/clear", headers=admin_headers, params={"confirm": True})
        assert resp.status_code == 200
        assert resp.json()["deletion_counts"]["contracts"] == 1

    def test_export(self, client, admin_headers):
        resp = client.get("/api/v1/utils/db/export", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == "success"


class TestHealth:
    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
