"""
Shared columns for mutable (audited, soft-deletable) rows and track rows
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Float, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

# Track.action values
TRACK_ACTION_CREATE = "CREATED"
TRACK_ACTION_UPDATE = "UPDATED"
TRACK_ACTION_DELETE = "DELETED"
TRACK_ACTION_RESTORE = "RESTORED"

# Track.operation values
OPERATION_PLUS = "Plus"
OPERATION_MINUS = "Minus"
OPERATION_IN = "In"
OPERATION_OUT = "Out"
OPERATIONS = (OPERATION_PLUS, OPERATION_MINUS, OPERATION_IN, OPERATION_OUT)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditMixin:
    """
    Identity, timestamps, soft-delete marker and audit stamps.

    user_ins / user_updt are weak references to users.id (no FK): audit
    history must survive user removal.
    """
    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(TIMESTAMP(timezone=True), nullable=True, index=True)  # NULL = active
    user_ins = Column(Integer, nullable=True)
    user_updt = Column(Integer, nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class TrackMixin(AuditMixin):
    """One immutable-intent history row for one ledger mutation."""
    date = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, index=True)
    action = Column(String(10), nullable=False)  # CREATED, UPDATED, DELETED, RESTORED
    operation = Column(String(10), nullable=False)  # Plus, Minus, In, Out
    quantity = Column(Float, nullable=False, default=0)  # magnitude of the change
    stock = Column(Float, nullable=False, default=0)  # resulting absolute level
    description = Column(Text, nullable=False)
