"""
Track services - turn one ledger mutation into one history row

A Tracker never commits. It adds the track row to the caller's session so
the ledger write and its history commit (or roll back) together.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from wms.database import unit_of_work
from wms.exceptions import NotFoundError, ValidationError
from wms.models import (
    OPERATION_IN, OPERATION_MINUS, OPERATION_OUT, OPERATION_PLUS, OPERATIONS,
    TRACK_ACTION_CREATE, TRACK_ACTION_DELETE, TRACK_ACTION_RESTORE, TRACK_ACTION_UPDATE,
    ProductStock,
)
from wms.repositories.track import (
    ProductBatchTrackRepository,
    ProductItemTrackRepository,
    ProductStockTrackRepository,
    ProductUnitTrackRepository,
    TrackRepository,
)
from wms.services.change_description import (
    BATCH_DESCRIBER, ITEM_DESCRIBER, STOCK_DESCRIBER, UNIT_DESCRIBER, ChangeDescriber,
)

logger = logging.getLogger(__name__)

# (operation, quantity, stock)
Measure = Tuple[str, float, float]

_REVERSE = {
    OPERATION_PLUS: OPERATION_MINUS,
    OPERATION_MINUS: OPERATION_PLUS,
    OPERATION_IN: OPERATION_OUT,
    OPERATION_OUT: OPERATION_IN,
}


def infer_item_operation(stock_in: Optional[float], stock_out: Optional[float]) -> str:
    """Out when anything leaves, otherwise In"""
    return OPERATION_OUT if (stock_out or 0) > 0 else OPERATION_IN


def _signed(delta: float) -> Tuple[str, float]:
    return (OPERATION_PLUS if delta >= 0 else OPERATION_MINUS), abs(delta)


def _num(value: Any) -> float:
    return float(value) if value is not None else 0.0


class Tracker:
    """
    Generic tracker for one ledger family.

    Subclasses declare the track repository, the describer, how the parent
    row is referenced (`parent_refs`) and the quantity/stock measure of each
    action (`measure_*`).
    """

    repository_class = TrackRepository
    describer: ChangeDescriber = None
    allowed_operations = (OPERATION_PLUS, OPERATION_MINUS)

    def __init__(self, db: Session):
        self.db = db
        self.repo = self.repository_class(db)

    # ---- family hooks --------------------------------------------------

    def parent_refs(self, entity) -> Dict[str, Any]:
        raise NotImplementedError

    def measure_create(self, entity) -> Measure:
        return OPERATION_PLUS, 0.0, 0.0

    def measure_update(self, old: Mapping[str, Any], entity) -> Measure:
        return OPERATION_PLUS, 0.0, 0.0

    def measure_delete(self, entity) -> Measure:
        return OPERATION_MINUS, 0.0, 0.0

    def measure_restore(self, entity) -> Measure:
        return OPERATION_PLUS, 0.0, 0.0

    def extra_fields(self, entity) -> Dict[str, Any]:
        return {}

    # ---- recording -----------------------------------------------------

    def record_create(self, entity, actor_id: int, operation: Optional[str] = None,
                      stock: Optional[float] = None, description: Optional[str] = None):
        measure = self._override(self.measure_create(entity), operation, stock)
        return self._write(entity, TRACK_ACTION_CREATE, measure,
                           description or self.describer.describe_create(entity), actor_id)

    def record_update(self, changes: Mapping[str, Any], old: Mapping[str, Any], entity, actor_id: int,
                      operation: Optional[str] = None, stock: Optional[float] = None):
        """`old` is the pre-update snapshot; `changes` is the map just persisted"""
        measure = self._override(self.measure_update(old, entity), operation, stock)
        return self._write(entity, TRACK_ACTION_UPDATE, measure,
                           self.describer.describe_update(changes, old), actor_id)

    def record_delete(self, entity, actor_id: int):
        return self._write(entity, TRACK_ACTION_DELETE, self.measure_delete(entity),
                           self.describer.describe_delete(entity), actor_id)

    def record_restore(self, entity, actor_id: int):
        return self._write(entity, TRACK_ACTION_RESTORE, self.measure_restore(entity),
                           self.describer.describe_restore(entity), actor_id)

    def _override(self, measure: Measure, operation: Optional[str], stock: Optional[float]) -> Measure:
        op, quantity, level = measure
        if operation is not None:
            self.check_operation(operation)
            op = operation
        if stock is not None:
            level = stock
        return op, quantity, level

    def check_operation(self, operation: str) -> None:
        if operation not in self.allowed_operations:
            raise ValidationError("operation must be one of: %s" % ", ".join(self.allowed_operations))

    def _write(self, entity, action: str, measure: Measure, description: str, actor_id: int):
        operation, quantity, stock = measure
        track = self.repo.model(
            action=action,
            operation=operation,
            quantity=quantity,
            stock=stock,
            description=description,
            user_ins=actor_id,
            user_updt=actor_id,
            **self.parent_refs(entity),
            **self.extra_fields(entity),
        )
        self.repo.add(track)
        logger.debug("%s track %s: %s", action, track.id, description)
        return track


class BatchTracker(Tracker):
    """Batches carry no quantity; their tracks are change notes"""

    repository_class = ProductBatchTrackRepository
    describer = BATCH_DESCRIBER

    def parent_refs(self, entity):
        return {"product_batch_id": entity.id, "product_id": entity.product_id}


class StockTracker(Tracker):
    """Plus/Minus by the signed quantity delta; stock is the new level"""

    repository_class = ProductStockTrackRepository
    describer = STOCK_DESCRIBER

    def parent_refs(self, entity):
        return {
            "product_stock_id": entity.id,
            "product_batch_id": entity.product_batch_id,
            "product_id": entity.product_id,
            "location_id": entity.location_id,
        }

    def measure_create(self, entity):
        q = _num(entity.quantity)
        return OPERATION_PLUS, q, q

    def measure_update(self, old, entity):
        q = _num(entity.quantity)
        op, delta = _signed(q - _num(old.get("quantity")))
        return op, delta, q

    def measure_delete(self, entity):
        return OPERATION_MINUS, _num(entity.quantity), 0.0

    def measure_restore(self, entity):
        q = _num(entity.quantity)
        return OPERATION_PLUS, q, q

    def record_movement(self, stock: ProductStock, operation: str, quantity: float,
                        description: str, actor_id: int):
        """History row for a movement applied to stock.quantity (already updated)"""
        self.check_operation(operation)
        return self._write(stock, TRACK_ACTION_UPDATE, (operation, abs(quantity), _num(stock.quantity)),
                           description, actor_id)


class ItemTracker(Tracker):
    """
    In/Out inferred from stock_in/stock_out; stock is the parent stock level.
    Item tracks also copy the batch unit price.
    """

    repository_class = ProductItemTrackRepository
    describer = ITEM_DESCRIBER
    allowed_operations = OPERATIONS

    def parent_refs(self, entity):
        return {
            "product_item_id": entity.id,
            "product_stock_id": entity.product_stock_id,
            "product_batch_id": entity.product_batch_id,
            "product_id": entity.product_id,
        }

    def extra_fields(self, entity):
        batch = entity.product_stock.product_batch if entity.product_stock is not None else None
        return {"unit_price": batch.unit_price if batch is not None else None}

    def _stock_level(self, entity) -> float:
        return _num(entity.product_stock.quantity) if entity.product_stock is not None else 0.0

    def measure_create(self, entity):
        op = infer_item_operation(entity.stock_in, entity.stock_out)
        return op, abs(_num(entity.quantity)), self._stock_level(entity)

    def measure_update(self, old, entity):
        op = infer_item_operation(entity.stock_in, entity.stock_out)
        delta = abs(_num(entity.quantity) - _num(old.get("quantity")))
        return op, delta, self._stock_level(entity)

    def measure_delete(self, entity):
        op = _REVERSE[infer_item_operation(entity.stock_in, entity.stock_out)]
        return op, abs(_num(entity.quantity)), self._stock_level(entity)

    def measure_restore(self, entity):
        return self.measure_create(entity)


class UnitTracker(Tracker):
    """Like stock, measured on the unit's conversion quantity"""

    repository_class = ProductUnitTrackRepository
    describer = UNIT_DESCRIBER

    def parent_refs(self, entity):
        return {
            "product_unit_id": entity.id,
            "product_id": entity.product_id,
            "location_id": entity.location_id,
            "product_batch_id": entity.product_batch_id,
        }

    def measure_create(self, entity):
        q = _num(entity.quantity)
        return OPERATION_PLUS, q, q

    def measure_update(self, old, entity):
        q = _num(entity.quantity)
        op, delta = _signed(q - _num(old.get("quantity")))
        return op, delta, q

    def measure_delete(self, entity):
        return OPERATION_MINUS, _num(entity.quantity), 0.0

    def measure_restore(self, entity):
        q = _num(entity.quantity)
        return OPERATION_PLUS, q, q


class TrackQueryService:
    """Read and admin-correct the history of one family"""

    def __init__(self, db: Session, tracker_class):
        self.db = db
        self.tracker = tracker_class(db)
        self.repo: TrackRepository = self.tracker.repo

    def list_all(self) -> List:
        return self.repo.list_all()

    def get(self, track_id: int):
        track = self.repo.get(track_id)
        if track is None:
            raise NotFoundError("Track %s not found" % track_id)
        return track

    def list_by_parent(self, parent_id: int) -> List:
        return self.repo.list_by_parent(parent_id)

    def list_by_product(self, product_id: int) -> List:
        return self.repo.list_by_product(product_id)

    def list_by_user(self, user_id: int) -> List:
        return self.repo.list_by_user(user_id)

    def latest(self, parent_id: int):
        track = self.repo.latest(parent_id)
        if track is None:
            raise NotFoundError("No track found for %s %s" % (self.repo.parent_field, parent_id))
        return track

    def count(self, parent_id: int) -> int:
        return self.repo.count(parent_id)

    def list_between(self, start: datetime, end: datetime) -> List:
        if start > end:
            raise ValidationError("start date must be before end date")
        return self.repo.list_between(start, end)

    def update(self, track_id: int, changes: Mapping[str, Any], actor_id: int):
        """Admin correction: quantity > 0, stock >= 0, operation in the family's set"""
        if not actor_id:
            raise ValidationError("user id is required")
        changes = {k: v for k, v in changes.items() if v is not None}
        if "quantity" in changes and changes["quantity"] <= 0:
            raise ValidationError("quantity must be greater than 0")
        if "stock" in changes and changes["stock"] < 0:
            raise ValidationError("stock cannot be negative")
        if "operation" in changes:
            self.tracker.check_operation(changes["operation"])
        with unit_of_work(self.db):
            track = self.get(track_id)
            self.repo.apply_changes(track, changes, actor_id)
        logger.info("%s %s corrected by user %s", self.repo.model.__name__, track_id, actor_id)
        return track

    def delete(self, track_id: int, actor_id: int) -> None:
        if not actor_id:
            raise ValidationError("user id is required")
        with unit_of_work(self.db):
            track = self.get(track_id)
            self.repo.soft_delete(track, actor_id)
        logger.info("%s %s deleted by user %s", self.repo.model.__name__, track_id, actor_id)
