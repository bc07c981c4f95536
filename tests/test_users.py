"""Login, welcome and refresh endpoints."""

from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from app.core.security import TokenSigningError
from app.main import create_app
from app.repositories.user_repo import UserRepository
from app.schemas.user import LoginRequest
from app.services.user_service import UserService


def _cookie_attributes(set_cookie: str) -> tuple[str, dict[str, str]]:
    first, *rest = [part.strip() for part in set_cookie.split(";")]
    name, _, value = first.partition("=")
    assert name == "token"
    attrs = {}
    for part in rest:
        key, _, val = part.partition("=")
        attrs[key.lower()] = val
    return value, attrs


class TestLogin:
    @pytest.mark.usefixtures("seeded")
    def test_login_sets_cookie(self, client, context):
        response = client.post("/login", json={"username": "alice", "password": "pw"})

        assert response.status_code == 200
        assert response.content == b""

        token, attrs = _cookie_attributes(response.headers["set-cookie"])
        assert context.sessions.verify(token).username == "alice"

        expires = parsedate_to_datetime(attrs["expires"])
        expected = datetime.now(timezone.utc) + timedelta(minutes=10)
        assert abs((expires - expected).total_seconds()) < 5

        assert "httponly" not in attrs
        assert "secure" not in attrs
        assert "samesite" not in attrs

    @pytest.mark.usefixtures("seeded")
    def test_wrong_password(self, client):
        response = client.post("/login", json={"username": "alice", "password": "wrong"})

        assert response.status_code == 401
        assert response.text == "Invalid credentials"
        assert "set-cookie" not in response.headers

    @pytest.mark.usefixtures("seeded")
    def test_unknown_user(self, client):
        response = client.post("/login", json={"username": "bob", "password": "pw"})
        assert response.status_code == 401

    def test_malformed_body(self, client):
        response = client.post(
            "/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.text == "Invalid request"

    @pytest.mark.usefixtures("seeded")
    def test_missing_password_is_empty(self, client):
        response = client.post("/login", json={"username": "alice"})

        assert response.status_code == 401
        assert response.text == "Invalid credentials"

    @pytest.mark.usefixtures("seeded")
    def test_empty_object_is_unknown_user(self, client):
        response = client.post("/login", json={})

        assert response.status_code == 401
        assert response.text == "User not found"

    def test_wrong_field_type(self, client):
        response = client.post("/login", json={"username": ["alice"], "password": "pw"})
        assert response.status_code == 400

    def test_store_failure(self, client, engine):
        SQLModel.metadata.tables["order_app_api_user"].drop(engine)

        response = client.post("/login", json={"username": "alice", "password": "pw"})

        assert response.status_code == 500
        assert response.text == "Server error"

    @pytest.mark.usefixtures("seeded")
    def test_hardened_cookie(self, context, settings_factory):
        context.settings = settings_factory(COOKIE_HARDENED=True)
        with TestClient(create_app(context)) as client:
            response = client.post("/login", json={"username": "alice", "password": "pw"})

        _, attrs = _cookie_attributes(response.headers["set-cookie"])
        assert "httponly" in attrs
        assert "secure" in attrs
        assert attrs["samesite"].lower() == "lax"

    def test_signing_failure_is_server_error(self, db):
        class BrokenAuthority:
            def mint(self, user_name, ttl):
                raise TokenSigningError("no key")

        class StubRepo(UserRepository):
            def get_password(self, session, user_name):
                return "pw"

        service = UserService(StubRepo())
        with pytest.raises(HTTPException) as exc:
            service.login(
                db,
                BrokenAuthority(),
                LoginRequest(username="alice", password="pw"),
                ttl=timedelta(minutes=10),
            )
        assert exc.value.status_code == 500


class TestWelcome:
    @pytest.mark.usefixtures("seeded")
    def test_welcome_after_login(self, client):
        client.post("/login", json={"username": "alice", "password": "pw"})

        response = client.get("/welcome")

        assert response.status_code == 200
        assert response.text == "Welcome, alice!"

    def test_without_cookie(self, client):
        response = client.get("/welcome")

        assert response.status_code == 401
        assert response.text == "Unauthorized"

    def test_garbage_cookie(self, client):
        client.cookies.set("token", "garbage")

        response = client.get("/welcome")

        assert response.status_code == 400
        assert response.text == "Bad request"

    def test_expired_cookie(self, client, context):
        past = datetime.now(timezone.utc) - timedelta(minutes=20)
        client.cookies.set("token", context.sessions.mint("alice", timedelta(minutes=10), now=past).token)

        response = client.get("/welcome")

        assert response.status_code == 401


class TestRefresh:
    def test_refresh_issues_five_minute_cookie(self, client, context, auth):
        response = client.post("/refresh")

        assert response.status_code == 200
        assert response.content == b""

        token, attrs = _cookie_attributes(response.headers["set-cookie"])
        assert context.sessions.verify(token).username == "alice"

        expires = parsedate_to_datetime(attrs["expires"])
        expected = datetime.now(timezone.utc) + timedelta(minutes=5)
        assert abs((expires - expected).total_seconds()) < 5

    def test_previous_token_still_valid(self, client, context, auth):
        client.post("/refresh")
        assert context.sessions.verify(auth.token).username == "alice"

    def test_refresh_right_after_login(self, client, auth):
        # no minimum token age
        assert client.post("/refresh").status_code == 200

    def test_without_cookie(self, client):
        assert client.post("/refresh").status_code == 401
