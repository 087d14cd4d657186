import logging
from datetime import timedelta

import pytest

from medportal.core.errors import RecordConflict
from medportal.core.security import hash_password, verify_password
from medportal.models.orm.base import utcnow
from medportal.models.orm.user import SessionORM, UserRole
from medportal.repositories.user_repo import SessionRepository
from medportal.services.auth_service import AuthService

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, REP_EMAIL, REP_PASSWORD


def count_sessions(db_session):
    db_session.expire_all()
    return db_session.query(SessionORM).count()


def test_password_hashing():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


def test_sign_in_returns_token_and_session(client, portal):
    response = client.post("/auth/sign-in", json={"email": " Admin@Example.com ", "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    body = response.json()

    assert body["ok"] is True
    assert body["error"] is None
    assert body["access_token"]
    assert body["session"]["role"] == "super_admin"
    assert body["session"]["user"]["email"] == ADMIN_EMAIL


def test_wrong_password_creates_no_session(client, portal, db_session):
    before = count_sessions(db_session)

    response = client.post("/auth/sign-in", json={"email": ADMIN_EMAIL, "password": "nope"})

    assert response.status_code == 200
    assert response.json() == {
        "ok": False,
        "error": "Invalid email or password",
        "access_token": None,
        "token_type": "bearer",
        "session": None,
    }
    assert count_sessions(db_session) == before


def test_token_endpoint_rejects_bad_credentials(client, portal):
    response = client.post("/auth/token", data={"username": "ghost@example.com", "password": "x"})
    assert response.status_code == 401
    assert response.json()["code"] == "not_authenticated"


def test_session_of_a_representative(client, portal, rep_headers):
    response = client.get("/auth/session", headers=rep_headers)
    assert response.status_code == 200
    body = response.json()

    assert body["role"] == "rep"
    assert body["representative_id"] == portal.rep.id
    assert body["manager_id"] is None


def test_session_of_a_manager(client, portal, manager_headers):
    body = client.get("/auth/session", headers=manager_headers).json()
    assert body["role"] == "manager"
    assert body["manager_id"] == portal.manager.id


def test_unknown_token_is_rejected(client, portal):
    response = client.get("/auth/session", headers={"Authorization": "Bearer made-up"})
    assert response.status_code == 401


def test_sign_out_ends_the_session(client, rep_headers):
    assert client.post("/auth/sign-out", headers=rep_headers).status_code == 204
    assert client.get("/auth/session", headers=rep_headers).status_code == 401


def test_expired_session_is_deleted(client, portal, db_session):
    SessionRepository(db_session).create_session(
        token="stale-token", user_id=portal.admin.id, expires_at=utcnow() - timedelta(minutes=1)
    )

    response = client.get("/auth/session", headers={"Authorization": "Bearer stale-token"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Session expired"
    db_session.expunge_all()
    assert SessionRepository(db_session).get_by_id("stale-token") is None


def test_rep_without_profile_signs_in_with_empty_scope(client, portal, db_session, login, caplog):
    AuthService(db_session).create_account("loose@example.com", "loose-pass", UserRole.REP)

    with caplog.at_level(logging.WARNING, logger="medportal"):
        headers = login("loose@example.com", "loose-pass")

    assert "No representative profile linked" in caplog.text
    session = client.get("/auth/session", headers=headers).json()
    assert session["representative_id"] is None
    assert client.get("/assignments", headers=headers).json() == []


def test_duplicate_account_is_a_conflict(db_session, portal):
    with pytest.raises(RecordConflict):
        AuthService(db_session).create_account(REP_EMAIL.upper(), REP_PASSWORD, UserRole.REP)
