"""
Typed exceptions raised by services and mapped to HTTP responses.

    WMSError (base)
    +-- ValidationError   400  missing/zero required field, bad value
    +-- AuthError         401  missing/invalid token or actor
    +-- NotFoundError     404  target or referenced entity absent
    +-- ConflictError     409  uniqueness or concurrent-update violation
    +-- InternalError     500  unclassified failure (detail never exposed)
"""
from typing import Any, Optional


class WMSError(Exception):
    """Base class for all errors the API knows how to render."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Any = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(WMSError):
    status_code = 400
    default_message = "Validation failed"


class AuthError(WMSError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(WMSError):
    status_code = 404
    default_message = "Not found"


class ConflictError(WMSError):
    status_code = 409
    default_message = "Conflict"


class InternalError(WMSError):
    status_code = 500
