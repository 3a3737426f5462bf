# File: app/core/security.py

"""
Password hashing and access tokens.

Passwords are hashed with bcrypt; `verify_password` relies on
`bcrypt.checkpw`, which compares in constant time. Tokens are HS256 JWTs
carrying `userId` and `email`, valid for `ACCESS_TOKEN_EXPIRE_MINUTES`.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import JWTError, jwt

from app.core.config import Settings


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


# bcrypt only reads the first 72 bytes of a secret; newer releases raise
# ValueError past that instead of truncating
BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(_secret(password), hashed_password.encode("utf-8"))


def create_access_token(
    settings: Settings,
    *,
    user_id: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode: dict[str, Any] = {"userId": user_id, "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises TokenError for anything that is not a valid, unexpired token
    issued with our key.
    """
    try:
        payload = jwt.decode(token, settings.JWT_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise TokenError(str(exc)) from exc

    if not payload.get("userId"):
        raise TokenError("Token is missing the userId claim")
    return payload
