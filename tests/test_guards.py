# ==============================================================================
# AUTHORIZATION CHAIN TESTS
# ==============================================================================
# Token verification, stored-role checks and identity checks
# ==============================================================================

from datetime import timedelta

import pytest
from httpx import AsyncClient

from thinklock.core.constants import Role
from thinklock.core.security import create_access_token
from tests.conftest import bearer


class TestTokenVerification:
    """Missing headers are 401; unusable tokens are 403."""

    @pytest.mark.asyncio
    async def test_missing_header(self, client: AsyncClient, admin: dict):
        response = await client.get("/users")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    @pytest.mark.asyncio
    async def test_non_bearer_header(self, client: AsyncClient, admin: dict):
        response = await client.get("/users", headers={"Authorization": "Basic YWRtaW46cHc="})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token(self, client: AsyncClient, admin: dict):
        response = await client.get("/users", headers={"Authorization": "Bearer not.a.jwt"})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"

    @pytest.mark.asyncio
    async def test_expired_token(self, client: AsyncClient, admin: dict):
        token = create_access_token(admin["id"], Role.ADMIN.value, expires_delta=timedelta(seconds=-1))
        response = await client.get("/users", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403


class TestRoleGuard:
    """Role checks use the role stored on the account."""

    @pytest.mark.asyncio
    async def test_wrong_role(self, client: AsyncClient, student: dict):
        response = await client.get("/users", headers=student["headers"])
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_token_role_claim_is_not_trusted(self, client: AsyncClient, student: dict):
        forged = bearer(student["id"], Role.ADMIN.value)
        response = await client.get("/users", headers=forged)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_role_change_applies_to_existing_token(
        self, client: AsyncClient, admin: dict, student: dict
    ):
        response = await client.put(
            f"/users/{student['id']}",
            json={"role": "instructor"},
            headers=admin["headers"],
        )
        assert response.status_code == 200

        # Same token, issued while the account was a student
        basket = await client.get(
            f"/student/{student['id']}/booked-courses", headers=student["headers"]
        )
        assert basket.status_code == 403

        courses = await client.get(
            f"/instructor/{student['id']}/courses", headers=student["headers"]
        )
        assert courses.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_account(self, client: AsyncClient):
        response = await client.get("/users", headers=bearer("ghost", Role.ADMIN.value))
        assert response.status_code == 403


class TestSelfGuard:
    """Per-account routes admit only the named account."""

    @pytest.mark.asyncio
    async def test_other_account(self, client: AsyncClient, student: dict, make_account):
        other = await make_account("student-2", Role.STUDENT)

        response = await client.get(
            f"/student/{other['id']}/booked-courses", headers=student["headers"]
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_other_user_record(self, client: AsyncClient, student: dict, instructor: dict):
        response = await client.get(f"/users/{instructor['id']}", headers=student["headers"])
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_other_instructor_courses(
        self, client: AsyncClient, instructor: dict, make_account
    ):
        other = await make_account("instructor-2", Role.INSTRUCTOR)

        response = await client.get(
            f"/instructor/{instructor['id']}/courses", headers=other["headers"]
        )
        assert response.status_code == 403
