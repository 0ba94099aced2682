"""Integration tests for the auth endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api.routes import router
from identity.user.user import User
from protean import current_domain
from shared.http import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(router)
    return TestClient(app, raise_server_exceptions=False)


def _register(client, email="jane@example.com", user_type="buyer"):
    return client.post(
        "/auth/register",
        json={"email": email, "password": "s3cret-pass", "userType": user_type, "fullName": "Jane Doe"},
    )


class TestRegisterEndpoint:
    def test_register(self, client):
        response = _register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["token"]
        assert body["user"]["user_type"] == "buyer"
        assert "password_hash" not in body["user"]
        assert current_domain.repository_for(User).find_by_email("jane@example.com") is not None

    def test_missing_fields(self, client):
        response = client.post("/auth/register", json={"email": "jane@example.com"})

        assert response.status_code == 400
        assert response.json()["missing"] == ["password", "userType", "fullName"]

    def test_duplicate_email(self, client):
        _register(client)
        response = _register(client, user_type="seller")
        assert response.status_code == 400


class TestLoginEndpoint:
    def test_login(self, client):
        _register(client)

        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "s3cret-pass"})

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"

    def test_bad_credentials(self, client):
        _register(client)

        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestMeEndpoint:
    def test_me(self, client):
        token = _register(client).json()["token"]

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["email"] == "jane@example.com"

    def test_without_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
