"""Decoding of Supabase access tokens.

Claims read:
  - sub:            Supabase user ID
  - email:          account email
  - user_metadata:  provider profile (full_name / name)
  - aud:            "authenticated" for signed-in users
  - exp:            expiry timestamp
"""

from jose import JWTError, jwt

from bursa_signup.config import settings


def decode_token(token: str) -> dict:
    """Decode and validate a JWT. Returns empty dict on failure."""
    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError:
        return {}


def display_name(claims: dict) -> str | None:
    metadata = claims.get("user_metadata") or {}
    return metadata.get("full_name") or metadata.get("name") or None
