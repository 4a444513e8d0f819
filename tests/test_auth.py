# ==============================================================================
# AUTH ENDPOINT TESTS
# ==============================================================================
# Tests for registration and token issuance
# ==============================================================================

import pytest
from httpx import AsyncClient

from thinklock.core.security import decode_token


@pytest.fixture
def sample_account_data() -> dict:
    """Generate sample registration data."""
    return {
        "id": "uid-new-student",
        "password": "SecurePass123!",
        "role": "student",
        "name": "New Student",
        "email": "new.student@example.com",
    }


class TestRegistration:
    """Tests for account registration endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, sample_account_data: dict):
        response = await client.post("/users", json=sample_account_data)

        assert response.status_code == 201
        data = response.json()

        assert data["success"] is True
        assert data["data"]["id"] == sample_account_data["id"]
        assert data["data"]["role"] == "student"
        assert data["data"]["courses"] == []
        assert "hashed_password" not in data["data"]
        assert "password" not in data["data"]

    @pytest.mark.asyncio
    async def test_register_instructor(self, client: AsyncClient, sample_account_data: dict):
        sample_account_data["role"] = "instructor"
        response = await client.post("/users", json=sample_account_data)

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "instructor"

    @pytest.mark.asyncio
    async def test_register_duplicate_identifier(self, client: AsyncClient, sample_account_data: dict):
        response1 = await client.post("/users", json=sample_account_data)
        assert response1.status_code == 201

        response2 = await client.post("/users", json=sample_account_data)
        assert response2.status_code == 409
        assert response2.json()["error"]["code"] == "ALREADY_EXISTS"

    @pytest.mark.asyncio
    async def test_register_cannot_claim_admin(self, client: AsyncClient, sample_account_data: dict):
        sample_account_data["role"] = "admin"
        response = await client.post("/users", json=sample_account_data)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient, sample_account_data: dict):
        sample_account_data["password"] = "short"
        response = await client.post("/users", json=sample_account_data)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient, sample_account_data: dict):
        sample_account_data["email"] = "not-an-email"
        response = await client.post("/users", json=sample_account_data)
        assert response.status_code == 422


class TestTokenIssuance:
    """Tests for the /jwt endpoint."""

    @pytest.mark.asyncio
    async def test_token_after_registration(self, client: AsyncClient, sample_account_data: dict):
        await client.post("/users", json=sample_account_data)

        response = await client.post(
            "/jwt",
            json={"id": sample_account_data["id"], "password": sample_account_data["password"]},
        )

        assert response.status_code == 200
        token = response.json()["data"]
        assert token["token_type"] == "bearer"
        assert token["expires_in"] == 3600

        claims = decode_token(token["access_token"])
        assert claims["sub"] == sample_account_data["id"]
        assert claims["role"] == "student"

    @pytest.mark.asyncio
    async def test_token_wrong_password(self, client: AsyncClient, student: dict):
        response = await client.post("/jwt", json={"id": student["id"], "password": "WrongPass123!"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    @pytest.mark.asyncio
    async def test_token_unknown_identifier(self, client: AsyncClient):
        response = await client.post("/jwt", json={"id": "ghost", "password": "Whatever123!"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_issued_token_opens_guarded_route(self, client: AsyncClient, student: dict):
        from tests.conftest import TEST_PASSWORD

        response = await client.post("/jwt", json={"id": student["id"], "password": TEST_PASSWORD})
        token = response.json()["data"]["access_token"]

        me = await client.get(
            f"/users/{student['id']}",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert me.status_code == 200
        assert me.json()["data"]["id"] == student["id"]
