# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures: in-memory MongoDB, mocked Stripe and ImageKit,
# seeded accounts with bearer tokens
# ==============================================================================

from __future__ import annotations

import itertools
import os
from typing import Any, AsyncGenerator, Dict, Optional
from urllib.parse import parse_qsl

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Set test environment before importing the application
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars!"
os.environ["MONGODB_TRANSACTIONS"] = "false"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_thinklock"
os.environ["IMAGEKIT_PRIVATE_KEY"] = "private_test_thinklock"
os.environ["LOG_LEVEL"] = "WARNING"

from thinklock.clients.image_storage import ImageStorage  # noqa: E402
from thinklock.clients.payment_gateway import PaymentGateway  # noqa: E402
from thinklock.core.constants import CourseStatus, Role  # noqa: E402
from thinklock.core.security import create_access_token, hash_password  # noqa: E402
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter  # noqa: E402
from thinklock.database.repositories import (  # noqa: E402
    AccountRepository,
    CourseRepository,
)
from thinklock.main import create_app  # noqa: E402

TEST_PASSWORD = "TestPassword123!"


# ==============================================================================
# FAKE PROVIDERS
# ==============================================================================

class FakeStripe:
    """In-memory stand-in for the Stripe payment intents API."""

    def __init__(self) -> None:
        self.intents: Dict[str, Dict[str, Any]] = {}
        self.fail = False
        self._ids = itertools.count(1)

    def add_intent(
        self,
        amount: int,
        student_id: str,
        status: str = "succeeded",
        currency: str = "usd",
    ) -> Dict[str, Any]:
        intent_id = f"pi_test{next(self._ids)}"
        intent = {
            "id": intent_id,
            "object": "payment_intent",
            "amount": amount,
            "currency": currency,
            "status": status,
            "client_secret": f"{intent_id}_secret_x",
            "metadata": {"student_id": student_id},
        }
        self.intents[intent_id] = intent
        return intent

    def succeed(self, intent_id: str) -> None:
        self.intents[intent_id]["status"] = "succeeded"

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail:
            return httpx.Response(500, json={"error": {"message": "stripe is down"}})

        path = request.url.path
        if request.method == "POST" and path.endswith("/payment_intents"):
            form = dict(parse_qsl(request.content.decode()))
            intent = self.add_intent(
                amount=int(form["amount"]),
                student_id=form.get("metadata[student_id]", ""),
                status="requires_payment_method",
                currency=form["currency"],
            )
            return httpx.Response(200, json=intent)

        if request.method == "GET" and "/payment_intents/" in path:
            intent = self.intents.get(path.rsplit("/", 1)[-1])
            if intent is None:
                return httpx.Response(404, json={"error": {"message": "No such payment_intent"}})
            return httpx.Response(200, json=intent)

        return httpx.Response(404, json={"error": {"message": "unknown route"}})


class FakeImageKit:
    """Records uploads and answers like the ImageKit upload API."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            200,
            json={
                "fileId": f"file{len(self.requests)}",
                "name": "upload.png",
                "url": "https://ik.imagekit.io/test/upload.png",
            },
        )


# ==============================================================================
# APPLICATION FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def adapter() -> AsyncGenerator[MongoDBAdapter, None]:
    """In-memory MongoDB adapter with indexes ensured."""
    mongo_adapter = MongoDBAdapter.from_client(AsyncMongoMockClient(), "thinklock_test")
    await mongo_adapter.ensure_indexes()
    yield mongo_adapter


@pytest.fixture
def stripe() -> FakeStripe:
    return FakeStripe()


@pytest.fixture
def imagekit() -> FakeImageKit:
    return FakeImageKit()


@pytest_asyncio.fixture
async def client(
    adapter: MongoDBAdapter,
    stripe: FakeStripe,
    imagekit: FakeImageKit,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app(
        adapter=adapter,
        payment_gateway=PaymentGateway(transport=httpx.MockTransport(stripe.handler)),
        image_storage=ImageStorage(transport=httpx.MockTransport(imagekit.handler)),
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    await app.state.payment_gateway.close()
    await app.state.image_storage.close()


# ==============================================================================
# ACCOUNT FIXTURES
# ==============================================================================

def bearer(account_id: str, role: str) -> Dict[str, str]:
    """Authorization header for a freshly issued token."""
    return {"Authorization": f"Bearer {create_access_token(account_id, role)}"}


async def seed_account(
    adapter: MongoDBAdapter,
    account_id: str,
    role: Role,
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> Dict[str, Any]:
    """Store an account and return it with ready-made auth headers."""
    await AccountRepository(adapter).insert({
        "_id": account_id,
        "role": role.value,
        "name": name or account_id.title(),
        "email": email or f"{account_id}@example.com",
        "photo": f"https://img.example.com/{account_id}.png",
        "courses": [],
        "hashed_password": hash_password(TEST_PASSWORD),
    })
    return {"id": account_id, "headers": bearer(account_id, role.value)}


@pytest_asyncio.fixture
async def admin(adapter: MongoDBAdapter) -> Dict[str, Any]:
    return await seed_account(adapter, "admin-1", Role.ADMIN)


@pytest_asyncio.fixture
async def instructor(adapter: MongoDBAdapter) -> Dict[str, Any]:
    return await seed_account(adapter, "instructor-1", Role.INSTRUCTOR, name="Ada Lovelace")


@pytest_asyncio.fixture
async def student(adapter: MongoDBAdapter) -> Dict[str, Any]:
    return await seed_account(adapter, "student-1", Role.STUDENT)


# ==============================================================================
# COURSE FIXTURES
# ==============================================================================

async def seed_course(
    adapter: MongoDBAdapter,
    name: str = "Course",
    instructor_id: str = "instructor-1",
    seat: int = 10,
    purchase: int = 0,
    price: float = 10.0,
    status: CourseStatus = CourseStatus.APPROVED,
) -> str:
    """Store a course and return its id."""
    course = await CourseRepository(adapter).insert({
        "instructor_id": instructor_id,
        "instructor_name": "Ada Lovelace",
        "instructor_email": f"{instructor_id}@example.com",
        "name": name,
        "description": f"About {name}",
        "seat": seat,
        "purchase": purchase,
        "price": price,
        "image": f"https://img.example.com/{name}.png",
        "status": status.value,
        "feedback": None,
    })
    return course["id"]


@pytest.fixture
def sample_course_data() -> dict:
    """Generate sample course creation data."""
    return {
        "name": "Intro to Locks",
        "description": "Pin tumblers from first principles",
        "seat": 20,
        "price": 49.5,
        "image": "https://img.example.com/locks.png",
    }


@pytest.fixture
def make_course(adapter: MongoDBAdapter):
    """Factory fixture: ``await make_course(name=..., seat=..., ...)`` returns the course id."""

    async def _make(**kwargs: Any) -> str:
        return await seed_course(adapter, **kwargs)

    return _make


@pytest.fixture
def make_account(adapter: MongoDBAdapter):
    """Factory fixture: ``await make_account("id", Role.STUDENT)`` returns id and headers."""

    async def _make(account_id: str, role: Role, **kwargs: Any) -> Dict[str, Any]:
        return await seed_account(adapter, account_id, role, **kwargs)

    return _make
