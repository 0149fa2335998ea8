"""Pytest configuration and fixtures for venuehub.

HTTP tests run venuehub.main:app over ASGI against a fresh in-memory
document store per test. The environment is set before the app is imported
so settings never reach for Firestore, Redis, or an exporter.
"""

import os

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["SECRET_KEY"] = "test-secret-key-for-venuehub-tests-only"
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ARCHIVE_DEPENDENCY_CHECKS"] = "partner,role"

import uuid  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from venuehub.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from venuehub.application.services.permission_service import PermissionService  # noqa: E402
from venuehub.infrastructure.database import set_document_store  # noqa: E402
from venuehub.infrastructure.exceptions import DocumentExistsError  # noqa: E402
from venuehub.infrastructure.memory import MemoryDocumentStore  # noqa: E402
from venuehub.infrastructure.repositories.permission_repo import PermissionRepository  # noqa: E402
from venuehub.infrastructure.services import DEFAULT_PERMISSIONS  # noqa: E402
from venuehub.main import app  # noqa: E402
from venuehub.shared.context import clear_request_context  # noqa: E402

API = "/api/v1"
DEFAULT_PASSWORD = "s3cret-password"


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Fresh in-memory store installed as the process-wide store."""
    memory = MemoryDocumentStore()
    set_document_store(memory)
    yield memory
    set_document_store(None)
    clear_request_context()


@pytest.fixture
async def catalog(store: MemoryDocumentStore) -> MemoryDocumentStore:
    """Store with the default permission catalog seeded."""
    service = PermissionService(
        PermissionRepository(store), duplicate_errors=(DocumentExistsError,)
    )
    await service.ensure_catalog(list(DEFAULT_PERMISSIONS))
    return store


@pytest.fixture
async def client(catalog: MemoryDocumentStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_business(
    client: AsyncClient, business_name: str = "Lakeside Hall", email: str | None = None
) -> dict:
    """Register a business through the API; returns the response body plus headers."""
    email = email or f"owner-{uuid.uuid4().hex[:8]}@example.com"
    response = await client.post(
        f"{API}/auth/register",
        json={
            "business_name": business_name,
            "name": "Owner",
            "email": email,
            "password": DEFAULT_PASSWORD,
        },
    )
    assert response.status_code == 201, response.text
    body = response.json()
    body["headers"] = bearer(body["access_token"])
    body["email"] = email
    return body


async def add_member(client: AsyncClient, owner: dict, role_name: str) -> dict:
    """Create a user with the named default role and log in as them."""
    roles = await client.get(f"{API}/roles", headers=owner["headers"])
    role_id = next(r["id"] for r in roles.json()["items"] if r["name"] == role_name)
    email = f"{role_name.lower()}-{uuid.uuid4().hex[:8]}@example.com"
    created = await client.post(
        f"{API}/users",
        headers=owner["headers"],
        json={
            "name": role_name,
            "email": email,
            "password": DEFAULT_PASSWORD,
            "role_id": role_id,
        },
    )
    assert created.status_code == 201, created.text
    login = await client.post(
        f"{API}/auth/login", json={"email": email, "password": DEFAULT_PASSWORD}
    )
    assert login.status_code == 200, login.text
    return {
        "user": created.json(),
        "headers": bearer(login.json()["access_token"]),
    }


@pytest.fixture
async def owner(client: AsyncClient) -> dict:
    """A registered business with its owner's auth headers."""
    return await register_business(client)
