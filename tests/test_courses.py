# ==============================================================================
# COURSE ENDPOINT TESTS
# ==============================================================================
# Catalogue listings, instructor authoring and admin review
# ==============================================================================

import pytest
from httpx import AsyncClient

from thinklock.core.constants import CourseStatus, Role


class TestCatalogue:
    """Public course listings."""

    @pytest.mark.asyncio
    async def test_only_approved_courses_listed(self, client: AsyncClient, make_course):
        approved = await make_course(name="Approved")
        await make_course(name="Pending", status=CourseStatus.PENDING)
        await make_course(name="Rejected", status=CourseStatus.REJECTED)

        response = await client.get("/courses")

        assert response.status_code == 200
        courses = response.json()["data"]
        assert [c["id"] for c in courses] == [approved]
        assert courses[0]["purchase"] == 0

    @pytest.mark.asyncio
    async def test_popular_order_and_free_seats(self, client: AsyncClient, make_course):
        low = await make_course(name="Low", purchase=1)
        high = await make_course(name="High", purchase=8)
        await make_course(name="Full", seat=5, purchase=5)
        await make_course(name="Hidden", purchase=9, status=CourseStatus.PENDING)

        response = await client.get("/courses/popular")

        assert response.status_code == 200
        assert [c["id"] for c in response.json()["data"]] == [high, low]

    @pytest.mark.asyncio
    async def test_popular_limit(self, client: AsyncClient, make_course):
        for i in range(8):
            await make_course(name=f"Course {i}", purchase=i)

        response = await client.get("/courses/popular")

        purchases = [c["purchase"] for c in response.json()["data"]]
        assert purchases == [7, 6, 5, 4, 3, 2]

    @pytest.mark.asyncio
    async def test_popular_full_courses_do_not_take_slots(
        self, client: AsyncClient, make_course
    ):
        for i in range(6):
            await make_course(name=f"Full {i}", seat=50, purchase=50)
        open_ids = [await make_course(name=f"Open {i}", purchase=i) for i in range(3)]

        response = await client.get("/courses/popular")

        assert [c["id"] for c in response.json()["data"]] == open_ids[::-1]


class TestInstructorAuthoring:
    """Instructors manage their own courses."""

    @pytest.mark.asyncio
    async def test_create_course(
        self, client: AsyncClient, instructor: dict, sample_course_data: dict
    ):
        response = await client.post(
            "/new-course", json=sample_course_data, headers=instructor["headers"]
        )

        assert response.status_code == 201
        course = response.json()["data"]
        assert course["status"] == "pending"
        assert course["purchase"] == 0
        assert course["instructor_id"] == instructor["id"]
        assert course["instructor_name"] == "Ada Lovelace"

        public = await client.get("/courses")
        assert public.json()["data"] == []

    @pytest.mark.asyncio
    async def test_student_cannot_create(
        self, client: AsyncClient, student: dict, sample_course_data: dict
    ):
        response = await client.post(
            "/new-course", json=sample_course_data, headers=student["headers"]
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_seat(
        self, client: AsyncClient, instructor: dict, sample_course_data: dict
    ):
        sample_course_data["seat"] = 0
        response = await client.post(
            "/new-course", json=sample_course_data, headers=instructor["headers"]
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_own_courses(
        self, client: AsyncClient, instructor: dict, make_course
    ):
        mine = await make_course(name="Mine")
        await make_course(name="Theirs", instructor_id="instructor-2")

        response = await client.get(
            f"/instructor/{instructor['id']}/courses", headers=instructor["headers"]
        )

        assert response.status_code == 200
        assert [c["id"] for c in response.json()["data"]] == [mine]

    @pytest.mark.asyncio
    async def test_get_own_course(self, client: AsyncClient, instructor: dict, make_course):
        course_id = await make_course(name="Mine")

        response = await client.get(
            f"/instructor/{instructor['id']}/courses/{course_id}",
            headers=instructor["headers"],
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Mine"

    @pytest.mark.asyncio
    async def test_foreign_course_not_found(
        self, client: AsyncClient, instructor: dict, make_course
    ):
        course_id = await make_course(name="Theirs", instructor_id="instructor-2")

        get = await client.get(
            f"/instructor/{instructor['id']}/courses/{course_id}",
            headers=instructor["headers"],
        )
        put = await client.put(
            f"/instructor/{instructor['id']}/courses/{course_id}",
            json={"price": 1},
            headers=instructor["headers"],
        )

        assert get.status_code == 404
        assert put.status_code == 404

    @pytest.mark.asyncio
    async def test_update_own_course(self, client: AsyncClient, instructor: dict, make_course):
        course_id = await make_course(name="Mine", purchase=3)

        response = await client.put(
            f"/instructor/{instructor['id']}/courses/{course_id}",
            json={"price": 25.0, "seat": 3},
            headers=instructor["headers"],
        )

        assert response.status_code == 200
        course = response.json()["data"]
        assert course["price"] == 25.0
        assert course["seat"] == 3
        assert course["purchase"] == 3

    @pytest.mark.asyncio
    async def test_seat_below_purchase(self, client: AsyncClient, instructor: dict, make_course):
        course_id = await make_course(name="Mine", seat=10, purchase=4)

        response = await client.put(
            f"/instructor/{instructor['id']}/courses/{course_id}",
            json={"seat": 3},
            headers=instructor["headers"],
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "BUSINESS_RULE_ERROR"

    @pytest.mark.asyncio
    async def test_instructor_cannot_change_status(
        self, client: AsyncClient, instructor: dict, make_course
    ):
        course_id = await make_course(name="Mine", status=CourseStatus.PENDING)

        response = await client.put(
            f"/instructor/{instructor['id']}/courses/{course_id}",
            json={"status": "approved", "name": "Renamed"},
            headers=instructor["headers"],
        )

        assert response.status_code == 200
        course = response.json()["data"]
        assert course["status"] == "pending"
        assert course["name"] == "Renamed"


class TestAdminReview:
    """Admins approve, reject and edit any course."""

    @pytest.mark.asyncio
    async def test_admin_lists_all(self, client: AsyncClient, admin: dict, make_course):
        await make_course(name="A")
        await make_course(name="B", status=CourseStatus.PENDING)

        response = await client.get("/admin/courses", headers=admin["headers"])

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    @pytest.mark.asyncio
    async def test_approve_course(self, client: AsyncClient, admin: dict, make_course):
        course_id = await make_course(name="New", status=CourseStatus.PENDING)

        response = await client.put(
            f"/admin/courses/{course_id}",
            json={"status": "approved", "feedback": "Looks good"},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        course = response.json()["data"]
        assert course["status"] == "approved"
        assert course["feedback"] == "Looks good"

        public = await client.get("/courses")
        assert [c["id"] for c in public.json()["data"]] == [course_id]

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, admin: dict, make_course):
        course_id = await make_course(name="New", status=CourseStatus.PENDING)

        response = await client.put(
            f"/admin/courses/{course_id}", json={"status": "published"}, headers=admin["headers"]
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_course(self, client: AsyncClient, admin: dict):
        response = await client.put(
            "/admin/courses/65f1c0ffee0000000000beef",
            json={"status": "approved"},
            headers=admin["headers"],
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id(self, client: AsyncClient, admin: dict):
        response = await client.put(
            "/admin/courses/not-an-object-id",
            json={"status": "approved"},
            headers=admin["headers"],
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_instructor_cannot_review(
        self, client: AsyncClient, instructor: dict, make_course
    ):
        course_id = await make_course(name="Mine", status=CourseStatus.PENDING)

        response = await client.put(
            f"/admin/courses/{course_id}",
            json={"status": "approved"},
            headers=instructor["headers"],
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_promoted_instructor_authors(
        self, client: AsyncClient, admin: dict, make_account, sample_course_data: dict
    ):
        account = await make_account("student-9", Role.STUDENT, name="Grace")
        await client.put(
            f"/users/{account['id']}", json={"role": "instructor"}, headers=admin["headers"]
        )

        response = await client.post(
            "/new-course", json=sample_course_data, headers=account["headers"]
        )

        assert response.status_code == 201
        assert response.json()["data"]["instructor_name"] == "Grace"
