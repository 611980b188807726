"""Tests for token issuance, logout and the access gate over HTTP."""

from datetime import timedelta
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from conftest import TEST_SECRET
from foodgarden.app import App
from foodgarden.config import Config
from foodgarden.core.modules.session.tokens import issue_token
from foodgarden.utils import now
from foodgarden.web.server import create_fastapi_app

PROTECTED_ROUTES = [
    ("POST", "/foods", {"name": "Tomato"}),
    ("PUT", f"/foods/{ObjectId()}", {"name": "Tomato"}),
    ("DELETE", f"/foods/{ObjectId()}", None),
    ("POST", f"/foods/notes/{ObjectId()}", {"note": "ripe"}),
]


def cookie_attributes(response) -> tuple[str, set[str]]:
    """Split a Set-Cookie header into the cookie name and its lowercased attributes."""
    pair, *attributes = response.headers["set-cookie"].split(";")
    return pair.split("=", 1)[0], {attribute.strip().lower() for attribute in attributes}


def test_health(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "foodgarden"}


class TestIssueToken:
    def test_sets_session_cookie(self, client):
        response = client.post("/jwt", json={"email": "u@example.com"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "Token issued"}
        assert "token" in client.cookies
        name, attributes = cookie_attributes(response)
        assert name == "token"
        assert {"httponly", "max-age=7200", "path=/", "samesite=strict"} <= attributes
        assert "secure" not in attributes

    def test_production_cookie_flags(self, database):
        config = Config(
            database_url="mongodb://localhost:27017/foodsdb_test",
            jwt_secret=TEST_SECRET,
            production=True,
            _env_file=None,
        )
        with TestClient(create_fastapi_app(App(config, database), config)) as client:
            response = client.post("/jwt", json={"email": "u@example.com"})

        _, attributes = cookie_attributes(response)
        assert {"secure", "samesite=none", "httponly"} <= attributes

    @pytest.mark.parametrize("body", [{}, {"email": ""}, {"email": "  "}, {"email": None}])
    def test_missing_email(self, client, body):
        response = client.post("/jwt", json=body)

        assert response.status_code == 400
        assert response.json() == {"ok": False, "message": "Email is required", "type": "validation_error"}
        assert "set-cookie" not in response.headers


class TestAccessGate:
    @pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ROUTES)
    def test_no_token(self, client, foods, method, path, body):
        response = client.request(method, path, json=body)

        assert response.status_code == 401
        assert response.json() == {
            "ok": False,
            "message": "Unauthorized, no token found",
            "type": "authentication_error",
            "reason": "no_token",
        }
        assert foods.docs == []

    @pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ROUTES)
    def test_expired_token(self, client, method, path, body):
        expired = issue_token(secret=TEST_SECRET, email="u@example.com", issued_at=now() - timedelta(hours=2, seconds=5))
        client.cookies.set("token", expired)

        response = client.request(method, path, json=body)

        assert response.status_code == 401
        assert response.json()["reason"] == "expired_token"

    @pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ROUTES)
    def test_token_signed_with_other_secret(self, client, method, path, body):
        client.cookies.set("token", issue_token(secret="some-other-secret-0123456789abcd", email="u@example.com"))

        response = client.request(method, path, json=body)

        assert response.status_code == 401
        assert response.json()["reason"] == "invalid_token"

    def test_malformed_token(self, client):
        client.cookies.set("token", "not-a-jwt")

        response = client.post("/foods", json={"name": "Tomato"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_issued_token_is_accepted(self, client, login, foods):
        login("u@example.com")

        response = client.post("/foods", json={"name": "Tomato"})

        assert response.status_code == 201
        assert len(foods.docs) == 1


class TestLogout:
    def test_clears_cookie(self, client, login):
        login()

        response = client.post("/logout")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "Logged out"}
        name, attributes = cookie_attributes(response)
        assert name == "token"
        assert {"max-age=0", "httponly", "path=/", "samesite=strict"} <= attributes

    def test_gate_rejects_after_logout(self, client, login):
        login()
        client.post("/logout")

        response = client.post("/foods", json={"name": "Tomato"})

        assert response.status_code == 401
        assert response.json()["reason"] == "no_token"

    def test_succeeds_without_session(self, client):
        response = client.post("/logout")

        assert response.status_code == 200


def test_openapi_marks_public_routes(client):
    schema = client.get("/openapi.json").json()

    assert schema["components"]["securitySchemes"]["TokenCookie"]["name"] == "token"
    assert schema["paths"]["/jwt"]["post"]["security"] == []
    assert schema["paths"]["/foods"]["get"]["security"] == []
    assert schema["paths"]["/foods"]["post"]["security"] == [{"TokenCookie": []}]
