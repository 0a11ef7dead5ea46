"""
API tests for authentication endpoints.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.core.security import create_access_token
TEST_PASSWORD = "password123"


@pytest.mark.api
class TestAuthEndpoints:
    """Test authentication API endpoints."""

    async def test_login_success(self, client: AsyncClient, admin_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": admin_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == admin_user.email
        assert data["user"]["role"] == "ADMIN"
        assert data["user"]["tenant_id"] == admin_user.tenant_id
        assert "hashed_password" not in data["user"]

    async def test_login_wrong_password(self, client: AsyncClient, admin_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": admin_user.email, "password": "WrongPassword123!"},
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    async def test_login_unknown_email_same_answer(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@ecosolutions.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    async def test_login_invalid_body(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        assert "errors" in response.json()

    async def test_register_member(self, client: AsyncClient, test_tenant):
        response = await client.post(
            "/api/auth/register",
            json={
                "email": "newuser@ecosolutions.com",
                "password": "NewUser123!",
                "name": "New User",
                "tenant_id": test_tenant.id,
            },
        )

        assert response.status_code == 201
        assert response.json()["user_id"]

    async def test_register_weak_password(self, client: AsyncClient, test_tenant):
        response = await client.post(
            "/api/auth/register",
            json={
                "email": "newuser@ecosolutions.com",
                "password": "weak",
                "name": "New User",
                "tenant_id": test_tenant.id,
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("password:")

    async def test_me(self, client: AsyncClient, admin_user, admin_headers):
        response = await client.get("/api/auth/me", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == admin_user.id
        assert data["home_path"] == "/dashboard"
        assert "users:manage" in data["permissions"]
        assert data["tenant_company_name"] == "EcoSolutions Inc."

    async def test_me_super_admin(self, client: AsyncClient, super_admin_headers):
        response = await client.get("/api/auth/me", headers=super_admin_headers)

        assert response.status_code == 200
        assert response.json()["home_path"] == "/superadmin/dashboard"
        assert response.json()["tenant_id"] is None

    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401

    async def test_malformed_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_expired_token(self, client: AsyncClient, admin_user):
        token = create_access_token(subject=admin_user.id, expires_delta=timedelta(seconds=-5))

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    async def test_token_for_deleted_user(self, client: AsyncClient):
        token = create_access_token(subject="00000000-0000-0000-0000-000000000000")

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
