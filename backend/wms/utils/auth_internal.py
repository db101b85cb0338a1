"""
Internal authentication: password hashing (bcrypt) and JWT access tokens.
Uses bcrypt directly to avoid passlib/bcrypt 4.x compatibility issues.
"""
from datetime import datetime, timezone, timedelta
from typing import Optional
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from wms.config import settings

# Bcrypt max password length (bytes)
BCRYPT_MAX_PASSWORD_BYTES = 72

# JWT claim names
CLAIM_SUB = "sub"
CLAIM_EMAIL = "email"
CLAIM_TYPE = "type"
CLAIM_EXP = "exp"
CLAIM_ISS = "iss"
CLAIM_JTI = "jti"

TYPE_ACCESS = "access"
ISSUER_INTERNAL = "wms-ledger"


def _password_bytes(password: str, max_bytes: int = BCRYPT_MAX_PASSWORD_BYTES) -> bytes:
    """Encode password to bytes and truncate to bcrypt limit (72 bytes) to avoid ValueError."""
    raw = password.encode("utf-8")
    return raw[:max_bytes] if len(raw) > max_bytes else raw


def hash_password(password: str) -> str:
    """Return bcrypt hash of password."""
    pw = _password_bytes(password)
    return bcrypt.hashpw(pw, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("ascii")


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """Return True if plain_password matches password_hash. False if hash is None or invalid."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), password_hash.encode("ascii"))
    except ValueError:
        return False


def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signed access token; `sub` carries the user id."""
    now = datetime.now(timezone.utc)
    delta = expires_delta if expires_delta is not None else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        CLAIM_SUB: str(user_id),
        CLAIM_EMAIL: email,
        CLAIM_JTI: str(uuid4()),
        CLAIM_TYPE: TYPE_ACCESS,
        CLAIM_ISS: ISSUER_INTERNAL,
        CLAIM_EXP: now + delta,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify an access token. Returns payload dict or None if invalid/expired."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            issuer=ISSUER_INTERNAL,
        )
    except JWTError:
        return None
    if payload.get(CLAIM_TYPE) != TYPE_ACCESS:
        return None
    return payload


def user_id_from_token(token: str) -> Optional[int]:
    """Principal id carried by a valid access token, else None"""
    payload = decode_access_token(token)
    if not payload:
        return None
    try:
        return int(payload.get(CLAIM_SUB))
    except (TypeError, ValueError):
        return None
