"""Pytest configuration and fixtures for the signup backend tests.

Provides fake collaborators (session provider, Bursa API, media store,
Redis), signed test tokens, and an HTTP client wired to the app through
dependency overrides.
"""

import time
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from bursa_signup.auth import deps
from bursa_signup.auth import revocation
from bursa_signup.auth.session import Session
from bursa_signup.catalog import FormVariant
from bursa_signup.config import settings
from bursa_signup.main import app
from bursa_signup.schemas.submission import StatusUser, SubmissionStatus
from bursa_signup.wizard.machine import SubmissionWizard
from bursa_signup.wizard.registry import WizardRegistry

from fakes import (
    FakeBursaApi,
    FakeMediaStore,
    FakeRedis,
    FakeSessionProvider,
    fill_valid,
)


# ── Data fixtures ────────────────────────────────────────────

@pytest.fixture
def status_user() -> StatusUser:
    return StatusUser(email="ani@example.com", name="Bu Ani")


@pytest.fixture
def open_status(status_user) -> SubmissionStatus:
    return SubmissionStatus(
        user=status_user, submissions=[], can_submit_more=True, remaining_slots=5
    )


@pytest.fixture
def test_session() -> Session:
    return Session(
        access_token="token-abc",
        user_id="user-1",
        email="ani@example.com",
        name="Bu Ani",
        expires_at=time.time() + 3600,
    )


@pytest.fixture
def make_token():
    """Build a Supabase-style access token signed with the test secret."""

    def _make(sub="user-1", email="ani@example.com", name="Bu Ani", expires_in=3600, **claims):
        payload = {
            "sub": sub,
            "email": email,
            "aud": settings.jwt_audience,
            "exp": int(time.time()) + expires_in,
            "user_metadata": {"full_name": name} if name else {},
        }
        payload.update(claims)
        return jwt.encode(payload, settings.supabase_jwt_secret, algorithm=settings.jwt_algorithm)

    return _make


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch) -> FakeRedis:
    """Keep every test off a real Redis."""
    fake = FakeRedis()

    async def _get_redis():
        return fake

    monkeypatch.setattr(revocation, "get_redis", _get_redis)
    return fake


# ── Wizard fixtures ──────────────────────────────────────────

@pytest.fixture
def wizard(status_user) -> SubmissionWizard:
    return SubmissionWizard(status_user, remaining_slots=5, variant=FormVariant.FULL)


@pytest.fixture
def filled_wizard(wizard) -> SubmissionWizard:
    fill_valid(wizard)
    return wizard


# ── HTTP client ──────────────────────────────────────────────

@pytest.fixture
def session_provider(test_session) -> FakeSessionProvider:
    return FakeSessionProvider(test_session)


@pytest.fixture
def bursa_api(open_status) -> FakeBursaApi:
    return FakeBursaApi(open_status)


@pytest.fixture
def media_store() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture
def registry() -> WizardRegistry:
    return WizardRegistry()


@pytest_asyncio.fixture
async def client(
    session_provider, bursa_api, media_store, registry
) -> AsyncGenerator[AsyncClient, None]:
    """Test client with every collaborator overridden (no lifespan runs)."""
    app.dependency_overrides[deps.get_session_provider] = lambda: session_provider
    app.dependency_overrides[deps.get_bursa_api] = lambda: bursa_api
    app.dependency_overrides[deps.get_media_store] = lambda: media_store
    app.dependency_overrides[deps.get_wizard_registry] = lambda: registry
    app.dependency_overrides[deps.get_variant] = lambda: FormVariant.FULL

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Markers ─────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: HTTP endpoint tests")
    config.addinivalue_line("markers", "auth: Authentication tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
