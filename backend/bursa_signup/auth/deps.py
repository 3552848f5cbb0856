"""FastAPI dependencies for sessions and collaborators.

Dependencies:
  get_session_provider → request-scoped SessionProvider (bearer or cookie)
  require_session      → the Session, or a silent redirect to sign-in
  get_bursa_api        → Status + Submission Service client
  get_media_store      → Supabase Storage uploader for the signed-in user
  get_current_wizard   → the caller's live wizard (404 if none mounted)

Tests swap collaborators through ``app.dependency_overrides``.
"""

import httpx
from fastapi import Depends, Request

from bursa_signup.auth.session import (
    Session,
    SessionProvider,
    TokenSessionProvider,
    token_from_request,
)
from bursa_signup.auth.supabase import SupabaseAuthClient
from bursa_signup.catalog import FormVariant
from bursa_signup.config import settings
from bursa_signup.middleware.exceptions import ResourceNotFoundError, SessionRequiredError
from bursa_signup.services.bursa_api import BursaApiClient
from bursa_signup.services.media_store import MediaStore, SupabaseMediaStore
from bursa_signup.wizard.machine import SubmissionWizard
from bursa_signup.wizard.registry import WizardRegistry


# ── Shared clients (created in the app lifespan) ────────────

def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_bursa_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.bursa_client


def get_wizard_registry(request: Request) -> WizardRegistry:
    return request.app.state.wizards


def get_variant() -> FormVariant:
    return FormVariant(settings.wizard_variant)


def get_auth_client(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> SupabaseAuthClient:
    return SupabaseAuthClient(client)


def get_bursa_api(
    client: httpx.AsyncClient = Depends(get_bursa_http_client),
    variant: FormVariant = Depends(get_variant),
) -> BursaApiClient:
    return BursaApiClient(client, variant)


# ── Session ─────────────────────────────────────────────────

def get_session_provider(
    request: Request,
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> SessionProvider:
    return TokenSessionProvider(token_from_request(request), auth_client)


async def require_session(
    sessions: SessionProvider = Depends(get_session_provider),
) -> Session:
    """Missing or expired sessions are a redirect, never an error body."""
    session = await sessions.get_session()
    if session is None:
        raise SessionRequiredError()
    return session


def get_media_store(
    session: Session = Depends(require_session),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> MediaStore:
    return SupabaseMediaStore(client, session.access_token)


# ── Wizard ──────────────────────────────────────────────────

async def get_current_wizard(
    session: Session = Depends(require_session),
    registry: WizardRegistry = Depends(get_wizard_registry),
) -> SubmissionWizard:
    wizard = registry.get(session.user_id)
    if wizard is None:
        raise ResourceNotFoundError("Registration in progress", session.user_id)
    return wizard
