import os
import re
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from fakeso.core import db as db_module
from fakeso.core.security import hash_password
from fakeso.main import app
from fakeso.models.user import User
from fakeso.services import accounts


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh database for tests that talk to stores / services directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.fixture
def outbox(monkeypatch):
    """
    Capture emails sent by the account service instead of delivering them.
    Each entry: {"to": ..., "subject": ..., "body": ...}
    """
    sent = []

    async def _fake_send(to_email: str, subject: str, body_text: str) -> None:
        sent.append({"to": to_email, "subject": subject, "body": body_text})

    monkeypatch.setattr(accounts, "send_email", _fake_send)
    return sent


@pytest.fixture
def token_from():
    """
    Pull the token out of a verification / reset link in a captured email.
    Usage: token_from(outbox[-1], "verify-email")
    """

    def _token_from(message: dict, path: str) -> str:
        match = re.search(rf"/{path}/([0-9a-f]+)", message["body"])
        assert match, f"no /{path}/ link in: {message['body']}"
        return match.group(1)

    return _token_from


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create activated users directly via ORM.
    """

    async def _create_user(password: str = "UserPass!23", **fields) -> tuple[User, str]:
        username = fields.pop("username", f"user_{uuid.uuid4().hex[:6]}")
        user = await User.create(
            username=username,
            email=fields.pop("email", f"{username}@example.com"),
            password_hash=hash_password(password),
            **fields,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(username: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
