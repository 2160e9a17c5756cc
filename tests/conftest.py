"""
Shared fixtures.

Every test runs against a fresh SQLite file; the environment is pointed at it
before the application modules are imported.
"""

import asyncio
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="campaign-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["APP_ENV"] = "testing"
os.environ["SESSION_SECRET"] = "test-session-secret"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from core.config import Settings, get_settings
from core.database import AsyncSessionLocal, create_tables, drop_tables
from main import app

TEST_PHONE = "+913333333331"
TEST_OTP = "123456"

VALID_HASHTAGS = ["#GlossyTransition", "#LorealIndia", "#GlycolicGloss"]
YOUTUBE_URL = "https://www.youtube.com/watch?v=abc123"
INSTAGRAM_URL = "https://www.instagram.com/reel/glossy_creator/"

VALID_ADDRESS = {
    "name": "Priya Sharma",
    "phoneNumber": "+919876543210",
    "street": "12 MG Road, Indiranagar",
    "city": "Bengaluru",
    "pincode": "560038",
    "state": "Karnataka",
}


@pytest.fixture
def settings():
    """Fresh settings per test; tests may flip flags on it."""
    return Settings()


@pytest.fixture
def client(settings):
    asyncio.run(drop_tables())
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def login(client, phone=TEST_PHONE):
    response = client.post("/api/auth/send-otp", json={"phoneNumber": phone})
    assert response.status_code == 200
    otp = response.json()["otp"]
    response = client.post("/api/auth/verify-otp", json={"phoneNumber": phone, "otp": otp})
    assert response.status_code == 200
    return response.json()["user"]


@pytest.fixture
def auth_client(client):
    """Client logged in as the fixed-code test phone number."""
    login(client)
    return client


@pytest_asyncio.fixture
async def db_session():
    await drop_tables()
    await create_tables()
    async with AsyncSessionLocal() as session:
        yield session
