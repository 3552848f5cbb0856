"""Supabase Auth (GoTrue) calls used for redirect-based OAuth sign-in.

Flow (PKCE):
  1. /api/auth/signin   → redirect to {supabase}/auth/v1/authorize with a
                          code_challenge; the verifier goes in a cookie
  2. provider → Supabase → /api/auth/callback?code=...
  3. callback           → POST /auth/v1/token?grant_type=pkce to get tokens
"""

import base64
import hashlib
import logging
import secrets
from urllib.parse import urlencode

import httpx

from bursa_signup.config import settings

logger = logging.getLogger(__name__)


class AuthExchangeError(Exception):
    """Supabase refused the authorization code."""


def new_code_verifier() -> str:
    return secrets.token_urlsafe(48)


def code_challenge(verifier: str) -> str:
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


class SupabaseAuthClient:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": settings.supabase_anon_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def authorize_url(self, verifier: str, redirect_to: str) -> str:
        query = urlencode({
            "provider": settings.oauth_provider,
            "redirect_to": redirect_to,
            "code_challenge": code_challenge(verifier),
            "code_challenge_method": "s256",
        })
        return f"{settings.supabase_url}/auth/v1/authorize?{query}"

    async def exchange_code(self, code: str, verifier: str) -> dict:
        """Trade the callback code for a session (access_token, expires_at, user)."""
        try:
            response = await self.client.post(
                f"{settings.supabase_url}/auth/v1/token",
                params={"grant_type": "pkce"},
                json={"auth_code": code, "code_verifier": verifier},
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise AuthExchangeError(str(e)) from e

        if response.is_error:
            raise AuthExchangeError(f"Token exchange failed: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise AuthExchangeError("Token exchange returned a non-JSON body") from e
        if not isinstance(data, dict) or not data.get("access_token"):
            raise AuthExchangeError("Token exchange returned no access token")
        return data

    async def sign_out(self, access_token: str) -> None:
        """Best effort: the local revocation still applies if this fails."""
        try:
            response = await self.client.post(
                f"{settings.supabase_url}/auth/v1/logout",
                headers=self._headers(access_token),
            )
            if response.is_error:
                logger.warning(f"Supabase logout returned {response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"Supabase logout failed: {e}")
