"""Sign-in / sign-out against Supabase Auth.

Endpoints:
  GET  /api/auth/signin    → redirect to the OAuth provider (PKCE)
  GET  /api/auth/callback  → exchange the code, set the session cookie
  POST /api/auth/signout   → revoke the token, drop the wizard, clear cookie
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from bursa_signup.auth.deps import (
    get_auth_client,
    get_session_provider,
    get_wizard_registry,
)
from bursa_signup.auth.session import SessionProvider
from bursa_signup.auth.supabase import AuthExchangeError, SupabaseAuthClient, new_code_verifier
from bursa_signup.config import settings
from bursa_signup.wizard.registry import WizardRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


def _secure_cookies() -> bool:
    return settings.environment == "production"


@router.get("/signin")
async def sign_in(auth_client: SupabaseAuthClient = Depends(get_auth_client)):
    verifier = new_code_verifier()
    redirect_to = f"{settings.site_url}/api/auth/callback"
    response = RedirectResponse(
        auth_client.authorize_url(verifier, redirect_to),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
    response.set_cookie(
        settings.pkce_cookie_name,
        verifier,
        max_age=settings.pkce_cookie_max_age_seconds,
        httponly=True,
        secure=_secure_cookies(),
        samesite="lax",
    )
    return response


@router.get("/callback")
async def auth_callback(
    request: Request,
    code: str | None = None,
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
):
    verifier = request.cookies.get(settings.pkce_cookie_name)
    if not code or not verifier:
        return RedirectResponse(
            f"{settings.signin_path}?error=auth", status_code=status.HTTP_303_SEE_OTHER
        )

    try:
        tokens = await auth_client.exchange_code(code, verifier)
    except AuthExchangeError as e:
        logger.warning(f"OAuth callback failed: {e}")
        return RedirectResponse(
            f"{settings.signin_path}?error=auth", status_code=status.HTTP_303_SEE_OTHER
        )

    response = RedirectResponse(settings.wizard_path, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        tokens["access_token"],
        max_age=int(tokens.get("expires_in") or 3600),
        httponly=True,
        secure=_secure_cookies(),
        samesite="lax",
    )
    response.delete_cookie(settings.pkce_cookie_name)
    return response


@router.post("/signout")
async def sign_out(
    sessions: SessionProvider = Depends(get_session_provider),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    session = await sessions.get_session()
    if session is not None:
        registry.discard(session.user_id)
        await sessions.sign_out()
        logger.info(f"Signed out {session.email}")

    response = RedirectResponse(settings.signin_path, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response
