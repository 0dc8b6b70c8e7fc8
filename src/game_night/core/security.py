"""Password hashing and token helpers."""
from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from game_night.core.errors import AuthenticationError
from game_night.core.settings import settings

_PBKDF2_ITERATIONS = 240_000
_ACCESS_TOKEN_TYPE = "access"
_UPLOAD_TOKEN_TYPE = "upload"


def hash_password(password: str) -> str:
    """Return a salted PBKDF2-SHA256 hash encoded as ``iterations$salt$digest``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), _PBKDF2_ITERATIONS
    )
    return f"{_PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check ``password`` against a hash produced by :func:`hash_password`."""
    try:
        iterations_raw, salt, expected = encoded.split("$")
        iterations = int(iterations_raw)
        salt_bytes = bytes.fromhex(salt)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt_bytes, iterations)
    return hmac.compare_digest(digest.hex(), expected)


def _encode(claims: dict[str, Any], lifetime: timedelta) -> str:
    now = datetime.now(UTC)
    payload = {**claims, "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def _decode(token: str, expected_type: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise AuthenticationError("Could not validate credentials") from err
    if payload.get("typ") != expected_type or payload.get("sub") is None:
        raise AuthenticationError("Could not validate credentials")
    return payload


def create_access_token(user_id: int) -> str:
    """Create a JWT bearer token whose subject is ``user_id``."""
    return _encode(
        {"sub": str(user_id), "typ": _ACCESS_TOKEN_TYPE},
        timedelta(minutes=settings.access_token_expire_minutes),
    )


def decode_access_token(token: str) -> int:
    """Return the user id carried by an access token."""
    payload = _decode(token, _ACCESS_TOKEN_TYPE)
    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as err:
        raise AuthenticationError("Could not validate credentials") from err


def create_upload_token(user_id: int, storage_id: str) -> str:
    """Create a short-lived token authorizing one upload into ``storage_id``."""
    return _encode(
        {"sub": str(user_id), "typ": _UPLOAD_TOKEN_TYPE, "sid": storage_id},
        timedelta(seconds=settings.upload_handle_ttl_seconds),
    )


def decode_upload_token(token: str) -> tuple[int, str]:
    """Return ``(user_id, storage_id)`` from an upload token."""
    payload = _decode(token, _UPLOAD_TOKEN_TYPE)
    storage_id = payload.get("sid")
    if not isinstance(storage_id, str) or not storage_id:
        raise AuthenticationError("Invalid upload handle")
    return int(payload["sub"]), storage_id
