"""
Soft-delete aware persistence helpers shared by every audited entity.

Repositories only flush; the caller's unit of work owns the commit.
SQLAlchemy errors propagate unchanged.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, inspect
from sqlalchemy.orm import Query, Session

from wms.models.base import utcnow


class SoftDeleteRepository:
    """Lookup / create / update-by-map / soft-delete / restore for one model"""

    model = None

    def __init__(self, db: Session):
        self.db = db

    # ---- queries -------------------------------------------------------

    def active(self) -> Query:
        return self.db.query(self.model).filter(self.model.deleted_at.is_(None))

    def deleted(self) -> Query:
        return self.db.query(self.model).filter(self.model.deleted_at.isnot(None))

    def get(self, entity_id: int):
        return self.active().filter(self.model.id == entity_id).first()

    def get_deleted(self, entity_id: int):
        return self.deleted().filter(self.model.id == entity_id).first()

    def list_all(self) -> List:
        return self.active().order_by(self.model.id).all()

    def list_deleted(self) -> List:
        return self.deleted().order_by(self.model.deleted_at.desc(), self.model.id).all()

    def list_by(self, **filters) -> List:
        return self.active().filter_by(**filters).order_by(self.model.id).all()

    def exists(self, model, entity_id: Optional[int]) -> bool:
        """True if an active row of `model` has this id"""
        if not entity_id:
            return False
        return self.db.query(model.id).filter(
            model.id == entity_id,
            model.deleted_at.is_(None),
        ).first() is not None

    def name_taken(self, name: str, exclude_id: Optional[int] = None, **scope) -> bool:
        """
        Case-insensitive name match among ALL rows, soft-deleted included,
        so a deleted name cannot be reused and later collide on restore.
        """
        q = self.db.query(self.model.id).filter(
            func.lower(self.model.name) == name.strip().lower()
        )
        if scope:
            q = q.filter_by(**scope)
        if exclude_id is not None:
            q = q.filter(self.model.id != exclude_id)
        return q.first() is not None

    # ---- response shapes (row + names from related tables) --------------

    def detail_query(self) -> Query:
        """Override to add joined name columns; the entity stays first"""
        return self.db.query(self.model)

    def _with_state(self, q: Query, deleted: bool) -> Query:
        if deleted:
            return q.filter(self.model.deleted_at.isnot(None))
        return q.filter(self.model.deleted_at.is_(None))

    @staticmethod
    def _split(row):
        if hasattr(row, "_fields"):
            values = tuple(row)
            return values[0], dict(zip(row._fields[1:], values[1:]))
        return row, {}

    def fetch_detail(self, entity_id: int, deleted: bool = False):
        """(entity, names) for one row, or None"""
        row = self._with_state(self.detail_query(), deleted).filter(self.model.id == entity_id).first()
        return self._split(row) if row is not None else None

    def fetch_details(self, deleted: bool = False, **filters) -> List:
        q = self._with_state(self.detail_query(), deleted)
        for field, value in filters.items():
            q = q.filter(getattr(self.model, field) == value)
        return [self._split(row) for row in q.order_by(self.model.id).all()]

    # ---- writes --------------------------------------------------------

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def apply_changes(self, obj, changes: Dict[str, Any], actor_id: int):
        """Apply a sparse field map and stamp the updater"""
        for field, value in changes.items():
            setattr(obj, field, value)
        obj.user_updt = actor_id
        self.db.flush()
        return obj

    def soft_delete(self, obj, actor_id: int):
        # Stamp and delete in one UPDATE
        now = utcnow()
        obj.user_updt = actor_id
        obj.updated_at = now
        obj.deleted_at = now
        self.db.flush()
        return obj

    def restore(self, obj, actor_id: int):
        obj.user_updt = actor_id
        obj.updated_at = utcnow()
        obj.deleted_at = None
        self.db.flush()
        return obj

    @staticmethod
    def snapshot(obj) -> Dict[str, Any]:
        """Column values of a row, detached from the session"""
        return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
