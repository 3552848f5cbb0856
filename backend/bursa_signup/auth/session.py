"""Session provider: on-demand access to the signed-in user's session.

The wizard never reads ambient auth state; it is handed a provider and
asks it for the session (and its bearer token) when it needs one.
"""

from typing import Protocol

from fastapi import Request
from pydantic import BaseModel

from bursa_signup.auth.jwt import decode_token, display_name
from bursa_signup.auth.revocation import TokenRevocation
from bursa_signup.auth.supabase import SupabaseAuthClient
from bursa_signup.config import settings


class Session(BaseModel):
    access_token: str
    user_id: str
    email: str | None = None
    name: str | None = None
    expires_at: float


class SessionProvider(Protocol):
    async def get_session(self) -> Session | None: ...

    async def sign_out(self) -> None: ...


def token_from_request(request: Request) -> str | None:
    """Bearer header first, then the session cookie set by the callback."""
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(settings.session_cookie_name) or None


class TokenSessionProvider:
    """Session provider backed by a Supabase access token."""

    def __init__(self, token: str | None, auth_client: SupabaseAuthClient | None = None):
        self.token = token
        self.auth_client = auth_client

    async def get_session(self) -> Session | None:
        if not self.token:
            return None
        claims = decode_token(self.token)
        if not claims.get("sub") or claims.get("exp") is None:
            return None
        if await TokenRevocation.is_revoked(self.token):
            return None
        return Session(
            access_token=self.token,
            user_id=claims["sub"],
            email=claims.get("email"),
            name=display_name(claims),
            expires_at=float(claims["exp"]),
        )

    async def sign_out(self) -> None:
        session = await self.get_session()
        if session is None:
            self.token = None
            return
        if self.auth_client is not None:
            await self.auth_client.sign_out(session.access_token)
        await TokenRevocation.revoke_token(session.access_token, session.expires_at)
        self.token = None
