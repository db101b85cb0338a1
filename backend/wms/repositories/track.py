"""
Track repositories: append, query and admin-correct history rows
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func

from wms.models import (
    OPERATION_MINUS, OPERATION_PLUS,
    ProductBatchTrack, ProductItemTrack, ProductStockTrack, ProductUnitTrack,
)
from wms.repositories.base import SoftDeleteRepository


class TrackRepository(SoftDeleteRepository):
    """History rows of one family; `parent_field` names the ledger FK column"""

    parent_field = None

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_field)

    def list_all(self) -> List:
        return self.active().order_by(self.model.date.desc(), self.model.id.desc()).all()

    def list_by_parent(self, parent_id: int) -> List:
        return self.active().filter(self.parent_column == parent_id).order_by(self.model.id).all()

    def list_by_product(self, product_id: int) -> List:
        return self.active().filter(self.model.product_id == product_id).order_by(self.model.id).all()

    def list_by_user(self, user_id: int) -> List:
        return self.active().filter(self.model.user_ins == user_id).order_by(self.model.id).all()

    def list_between(self, start: datetime, end: datetime) -> List:
        return self.active().filter(
            self.model.date >= start,
            self.model.date <= end,
        ).order_by(self.model.date, self.model.id).all()

    def latest(self, parent_id: int) -> Optional[object]:
        return self.active().filter(self.parent_column == parent_id).order_by(self.model.id.desc()).first()

    def count(self, parent_id: int) -> int:
        return self.active().filter(self.parent_column == parent_id).count()

    def signed_totals(self, parent_id: int):
        """(sum of Plus quantities, sum of Minus quantities) over active tracks"""
        rows = self.db.query(
            self.model.operation,
            func.coalesce(func.sum(self.model.quantity), 0),
        ).filter(
            self.parent_column == parent_id,
            self.model.deleted_at.is_(None),
            self.model.operation.in_((OPERATION_PLUS, OPERATION_MINUS)),
        ).group_by(self.model.operation).all()
        totals = {op: float(total) for op, total in rows}
        return totals.get(OPERATION_PLUS, 0.0), totals.get(OPERATION_MINUS, 0.0)


class ProductBatchTrackRepository(TrackRepository):
    model = ProductBatchTrack
    parent_field = "product_batch_id"


class ProductStockTrackRepository(TrackRepository):
    model = ProductStockTrack
    parent_field = "product_stock_id"


class ProductItemTrackRepository(TrackRepository):
    model = ProductItemTrack
    parent_field = "product_item_id"


class ProductUnitTrackRepository(TrackRepository):
    model = ProductUnitTrack
    parent_field = "product_unit_id"
