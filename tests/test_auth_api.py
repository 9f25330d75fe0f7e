"""
Tests for sign-up, sign-in, session state and sign-out.
"""
from sqlalchemy import text

from backend.dbe_tracker.models.session import Session as SessionModel

from conftest import PASSWORD


class TestRegister:
    def test_register_creates_member(self, client):
        resp = client.post("/api/v1/auth/register", json={
            "email": "New.User@Aeronautics.example.gov",
            "password": PASSWORD,
            "full_name": "New User",
        })
        assert resp.status_code == 201
        body = resp.json()
        assert body["email"] == "new.user@aeronautics.example.gov"
        assert body["role"] == "member"
        assert "password_hash" not in body

    def test_weak_password_rejected(self, client):
        resp = client.post("/api/v1/auth/register", json={"email": "weak@example.gov", "password": "password"})
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"

    def test_duplicate_email_rejected(self, client, member):
        resp = client.post("/api/v1/auth/register", json={"email": member.email, "password": PASSWORD})
        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == "email_taken"
        assert body["details"]["field"] == "email"

    def test_insert_conflict_returns_error_body(self, client, engine):
        with engine.begin() as conn:
            conn.execute(text(
                "CREATE TRIGGER simultaneous_sign_up BEFORE INSERT ON users "
                "WHEN NEW.email = 'race@aeronautics.example.gov' "
                "BEGIN SELECT RAISE(ABORT, 'UNIQUE constraint failed: users.email'); END"
            ))
        resp = client.post("/api/v1/auth/register", json={"email": "race@aeronautics.example.gov", "password": PASSWORD})
        assert resp.status_code == 409
        assert resp.json()["code"] == "conflict"


class TestLogin:
    def test_login_returns_tokens(self, client, member):
        resp = client.post("/api/v1/auth/login", json={"email": member.email, "password": PASSWORD})
        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["refresh_token"]

    def test_unknown_email_suggests_sign_up(self, client):
        resp = client.post("/api/v1/auth/login", json={"email": "nobody@example.gov", "password": PASSWORD})
        assert resp.status_code == 401
        body = resp.json()
        assert body["code"] == "account_not_found"
        assert body["details"]["suggest_sign_up"] is True

    def test_wrong_password(self, client, member):
        resp = client.post("/api/v1/auth/login", json={"email": member.email, "password": "Wr0ng!pass"})
        assert resp.status_code == 401
        assert resp.json()["code"] == "invalid_credentials"

    def test_inactive_user_forbidden(self, client, db, member):
        member.is_active = False
        db.commit()
        resp = client.post("/api/v1/auth/login", json={"email": member.email, "password": PASSWORD})
        assert resp.status_code == 403

    def test_two_logins_get_distinct_sessions(self, client, db, member):
        first = client.post("/api/v1/auth/login", json={"email": member.email, "password": PASSWORD}).json()
        second = client.post("/api/v1/auth/login", json={"email": member.email, "password": PASSWORD}).json()
        assert first["access_token"] != second["access_token"]
        assert db.query(SessionModel).filter(SessionModel.user_id == member.id).count() == 2


class TestSession:
    def test_me(self, client, member, member_headers):
        resp = client.get("/api/v1/auth/me", headers=member_headers)
        assert resp.status_code == 200
        assert resp.json()["email"] == member.email

    def test_session_state(self, client, member_headers):
        resp = client.get("/api/v1/auth/session", headers=member_headers)
        assert resp.status_code == 200
        assert resp.json()["active"] is True

    def test_missing_token(self, client):
        resp = client.get("/api/v1/auth/me")
        assert resp.status_code == 401
        assert resp.json()["code"] == "not_authenticated"
        assert resp.headers["www-authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        resp = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert resp.json()["code"] == "invalid_token"

    def test_logout_ends_session(self, client, member_headers):
        resp = client.post("/api/v1/auth/logout", headers=member_headers)
        assert resp.status_code == 200

        resp = client.get("/api/v1/auth/me", headers=member_headers)
        assert resp.status_code == 401
        assert resp.json()["code"] == "session_inactive"

    def test_refresh_rotates_tokens(self, client, member):
        tokens = client.post("/api/v1/auth/login", json={"email": member.email, "password": PASSWORD}).json()
        resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert resp.status_code == 200
        new_tokens = resp.json()
        assert new_tokens["access_token"] != tokens["access_token"]

        # Old access token no longer belongs to the session
        old = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
        assert old.status_code == 401
        new = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {new_tokens['access_token']}"})
        assert new.status_code == 200

    def test_access_token_cannot_refresh(self, client, member):
        tokens = client.post("/api/v1/auth/login", json={"email": member.email, "password": PASSWORD}).json()
        resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
        assert resp.status_code == 401
