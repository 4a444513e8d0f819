# ==============================================================================
# USER & INSTRUCTOR ENDPOINT TESTS
# ==============================================================================

import pytest
from httpx import AsyncClient

from thinklock.core.constants import Role


class TestUserEndpoints:
    """Tests for account endpoints."""

    @pytest.mark.asyncio
    async def test_admin_lists_accounts(
        self, client: AsyncClient, admin: dict, instructor: dict, student: dict
    ):
        response = await client.get("/users", headers=admin["headers"])

        assert response.status_code == 200
        accounts = response.json()["data"]
        assert {a["id"] for a in accounts} == {admin["id"], instructor["id"], student["id"]}
        assert all("hashed_password" not in a for a in accounts)

    @pytest.mark.asyncio
    async def test_get_own_account(self, client: AsyncClient, student: dict):
        response = await client.get(f"/users/{student['id']}", headers=student["headers"])

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == student["id"]
        assert data["role"] == "student"
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_admin_updates_role(self, client: AsyncClient, admin: dict, student: dict):
        response = await client.put(
            f"/users/{student['id']}",
            json={"role": "instructor", "name": "Promoted"},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["role"] == "instructor"
        assert data["name"] == "Promoted"

    @pytest.mark.asyncio
    async def test_admin_update_missing_account(self, client: AsyncClient, admin: dict):
        response = await client.put(
            "/users/nobody", json={"name": "X"}, headers=admin["headers"]
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_non_admin_cannot_update(self, client: AsyncClient, student: dict):
        response = await client.put(
            f"/users/{student['id']}", json={"role": "admin"}, headers=student["headers"]
        )
        assert response.status_code == 403


class TestInstructorProfiles:
    """Public and admin instructor lookups."""

    @pytest.mark.asyncio
    async def test_list_instructors(self, client: AsyncClient, instructor: dict, student: dict):
        response = await client.get("/instructors")

        assert response.status_code == 200
        profiles = response.json()["data"]
        assert [p["id"] for p in profiles] == [instructor["id"]]
        assert profiles[0]["name"] == "Ada Lovelace"
        assert "courses" not in profiles[0]
        assert "role" not in profiles[0]

    @pytest.mark.asyncio
    async def test_get_instructor(self, client: AsyncClient, instructor: dict):
        response = await client.get(f"/instructors/{instructor['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "instructor-1@example.com"

    @pytest.mark.asyncio
    async def test_student_is_not_an_instructor(self, client: AsyncClient, student: dict):
        response = await client.get(f"/instructors/{student['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_admin_full_record(self, client: AsyncClient, admin: dict, instructor: dict):
        response = await client.get(
            f"/admin/instructors/{instructor['id']}", headers=admin["headers"]
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["role"] == "instructor"
        assert data["courses"] == []
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_admin_record_requires_admin(
        self, client: AsyncClient, instructor: dict, make_account
    ):
        other = await make_account("instructor-2", Role.INSTRUCTOR)
        response = await client.get(
            f"/admin/instructors/{instructor['id']}", headers=other["headers"]
        )
        assert response.status_code == 403


class TestAdminBootstrap:
    """The configured admin account is ensured at startup."""

    @pytest.mark.asyncio
    async def test_bootstrap_creates_admin(self, client: AsyncClient, adapter, monkeypatch):
        from thinklock import main
        from thinklock.core.settings import settings

        monkeypatch.setattr(settings, "INITIAL_ADMIN_ID", "root")
        monkeypatch.setattr(settings, "INITIAL_ADMIN_PASSWORD", "RootPassword123!")
        await main.bootstrap_admin(adapter)
        await main.bootstrap_admin(adapter)

        token = await client.post("/jwt", json={"id": "root", "password": "RootPassword123!"})
        assert token.status_code == 200

        headers = {"Authorization": f"Bearer {token.json()['data']['access_token']}"}
        response = await client.get("/users", headers=headers)

        assert response.status_code == 200
        assert [a["role"] for a in response.json()["data"]] == ["admin"]

    @pytest.mark.asyncio
    async def test_bootstrap_leaves_existing_account(
        self, client: AsyncClient, adapter, student: dict, monkeypatch
    ):
        from thinklock import main
        from thinklock.core.settings import settings

        monkeypatch.setattr(settings, "INITIAL_ADMIN_ID", student["id"])
        monkeypatch.setattr(settings, "INITIAL_ADMIN_PASSWORD", "RootPassword123!")
        await main.bootstrap_admin(adapter)

        response = await client.get(f"/users/{student['id']}", headers=student["headers"])
        assert response.json()["data"]["role"] == "student"
