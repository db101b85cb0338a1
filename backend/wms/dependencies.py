"""
FastAPI dependencies: database session, current principal, response cache.

Auth: Bearer access token issued by /auth/login. The token's user must
still exist and be active; its id is the audit actor of every mutation.
"""
import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from wms.config import settings
from wms.database import get_db
from wms.models import User
from wms.services.cache import ResponseCache
from wms.utils.auth_internal import user_id_from_token

logger = logging.getLogger(__name__)

__all__ = ["get_db", "get_current_user_id", "get_current_user", "get_cache"]


def _bearer_token(request: Request):
    auth = request.headers.get("Authorization") or ""
    return (auth[7:].strip() if auth.startswith("Bearer ") else None) or None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Require a valid Bearer token whose user is active."""
    token = _bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = user_id_from_token(token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = db.query(User).filter(User.id == user_id, User.deleted_at.is_(None)).first()
    if user is None or not user.is_active:
        logger.warning("Token for unknown or inactive user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    return user.id


def get_cache(request: Request) -> ResponseCache:
    """Process-wide response cache created on startup (see main.py)."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        cache = ResponseCache(ttl_seconds=settings.CACHE_TTL_SECONDS, enabled=settings.CACHE_ENABLED)
        request.app.state.cache = cache
    return cache
