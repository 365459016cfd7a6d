"""Password hashing (passlib/bcrypt) and signed session tokens (PyJWT).

Every token's ``sub`` claim is a user id rendered as a string, and its
``type`` claim tells access tokens from refresh tokens so that one can
never stand in for the other.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _sign(claims: dict[str, Any], lifetime: timedelta, secret_key: str, algorithm: str) -> str:
    claims["exp"] = datetime.now(UTC) + lifetime
    return jwt.encode(claims, secret_key, algorithm=algorithm)


def create_access_token(
    subject: str,
    role: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 30,
) -> str:
    """Short-lived bearer token for API calls.

    ``role`` is informational for clients; authorization always re-reads
    the role from the stored user.
    """
    claims = {"sub": subject, "role": role, "type": ACCESS_TOKEN_TYPE}
    return _sign(claims, timedelta(minutes=expires_minutes), secret_key, algorithm)


def create_refresh_token(
    subject: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_days: int = 7,
) -> str:
    """Long-lived token accepted only by the refresh endpoint."""
    claims = {"sub": subject, "type": REFRESH_TOKEN_TYPE}
    return _sign(claims, timedelta(days=expires_days), secret_key, algorithm)


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
    *,
    expected_type: str | None = None,
) -> dict:
    """Verify a token's signature and expiry and return its claims.

    Raises:
        jwt.ExpiredSignatureError: The token is past its ``exp``.
        jwt.InvalidTokenError: Bad signature, malformed token, or a
            ``type`` claim other than ``expected_type``.
    """
    claims = jwt.decode(token, secret_key, algorithms=[algorithm])
    if expected_type is not None and claims.get("type") != expected_type:
        msg = f"Expected {expected_type} token"
        raise jwt.InvalidTokenError(msg)
    return claims
