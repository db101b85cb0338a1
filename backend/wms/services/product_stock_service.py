"""
Product Stock Service - stock levels, movements and reconciliation

Stock quantity changes only through this service, and every change writes
a Plus/Minus stock track, so the active tracks of a stock row always sum
to its current quantity.
"""
import logging
from typing import List, Optional, Tuple

from wms.database import unit_of_work
from wms.exceptions import ConflictError, NotFoundError, ValidationError
from wms.models import (
    OPERATION_MINUS, OPERATION_PLUS,
    Location, Product, ProductBatch, ProductItem, ProductStock,
)
from wms.repositories.ledger import ProductItemRepository, ProductStockRepository
from wms.repositories.track import ProductStockTrackRepository
from wms.schemas.product_stock import ProductStockResponse, StockMovementCreate, StockReconciliation
from wms.services.ledger_service import LedgerService, require_actor, require_id, require_non_negative
from wms.services.tracking import ItemTracker, StockTracker

logger = logging.getLogger(__name__)

# Float tolerance when comparing summed history with the stored quantity
RECONCILE_TOLERANCE = 1e-6


class ProductStockService(LedgerService):
    """Quantity of one batch of one product at one location"""

    repository_class = ProductStockRepository
    tracker_class = StockTracker
    response_schema = ProductStockResponse
    label = "Product stock"
    resource = "product_stock"
    cache_details = True

    def _check_refs(self, batch_id: int, product_id: int, location_id: int) -> None:
        self.check_exists(Product, product_id, "Product")
        self.check_exists(Location, location_id, "Location")
        batch = self.db.query(ProductBatch).filter(
            ProductBatch.id == batch_id,
            ProductBatch.deleted_at.is_(None),
        ).first()
        if batch is None:
            raise NotFoundError("Product batch %s not found" % batch_id)
        if batch.product_id != product_id:
            raise ValidationError("Product batch %s does not belong to product %s" % (batch_id, product_id))

    def _check_unique(self, batch_id: int, product_id: int, location_id: int, exclude_id: Optional[int] = None):
        other = self.repo.find_triple(batch_id, product_id, location_id, exclude_id=exclude_id)
        if other is not None:
            raise ConflictError(
                "Stock for batch %s of product %s at location %s already exists (id %s)"
                % (batch_id, product_id, location_id, other.id)
            )

    def prepare_create(self, data):
        batch_id = require_id(data.get("product_batch_id"), "product_batch_id")
        product_id = require_id(data.get("product_id"), "product_id")
        location_id = require_id(data.get("location_id"), "location_id")
        if data.get("quantity") is None:
            data["quantity"] = 0.0
        require_non_negative(data, "quantity")
        self._check_refs(batch_id, product_id, location_id)
        self._check_unique(batch_id, product_id, location_id)
        return data

    def prepare_update(self, entity, changes):
        require_non_negative(changes, "quantity")
        ref_fields = ("product_batch_id", "product_id", "location_id")
        if any(f in changes and changes[f] != getattr(entity, f) for f in ref_fields):
            merged = {f: changes.get(f, getattr(entity, f)) for f in ref_fields}
            self._check_refs(merged["product_batch_id"], merged["product_id"], merged["location_id"])
            self._check_unique(
                merged["product_batch_id"], merged["product_id"], merged["location_id"], exclude_id=entity.id
            )
        return changes

    def before_restore(self, entity):
        self._check_unique(entity.product_batch_id, entity.product_id, entity.location_id, exclude_id=entity.id)

    def list_by_product(self, product_id: int) -> List[ProductStockResponse]:
        return self.list(product_id=product_id)

    def list_by_batch(self, product_batch_id: int) -> List[ProductStockResponse]:
        return self.list(product_batch_id=product_batch_id)

    def list_by_location(self, location_id: int) -> List[ProductStockResponse]:
        return self.list(location_id=location_id)

    def process_stock_movement(
        self,
        stock_id: int,
        movement: StockMovementCreate,
        actor_id: int,
    ) -> Tuple[ProductItem, ProductStock]:
        """
        Record an inbound or outbound movement: create the product item,
        apply the signed delta to the stock quantity, and write one item
        track plus one stock track, all in one transaction.
        """
        require_actor(actor_id)
        stock_in = movement.stock_in or 0.0
        stock_out = movement.stock_out or 0.0
        require_non_negative({"stock_in": stock_in, "stock_out": stock_out}, "stock_in", "stock_out")
        if (stock_in > 0) == (stock_out > 0):
            raise ValidationError("exactly one of stock_in or stock_out must be positive")

        delta = stock_in - stock_out
        item_repo = ProductItemRepository(self.db)
        item_tracker = ItemTracker(self.db)
        with unit_of_work(self.db):
            stock = self.get(stock_id)
            new_quantity = (stock.quantity or 0.0) + delta
            if new_quantity < 0:
                raise ValidationError(
                    "insufficient stock: %.2f available, %.2f requested" % (stock.quantity or 0.0, stock_out)
                )
            item = item_repo.add(ProductItem(
                product_stock_id=stock.id,
                product_batch_id=stock.product_batch_id,
                product_id=stock.product_id,
                stock_in=stock_in or None,
                stock_out=stock_out or None,
                quantity=delta,
                description=movement.description,
                user_ins=actor_id,
                user_updt=actor_id,
            ))
            self.repo.apply_changes(stock, {"quantity": new_quantity}, actor_id)
            operation = OPERATION_PLUS if delta > 0 else OPERATION_MINUS
            self.tracker.record_movement(
                stock, operation, delta,
                "Stock %s of %.2f recorded by product item %s" % ("in" if delta > 0 else "out", abs(delta), item.id),
                actor_id,
            )
            item_tracker.record_create(item, actor_id)
        logger.info(
            "Stock movement %+.2f on product stock %s (item %s) by user %s",
            delta, stock_id, item.id, actor_id,
        )
        self.refresh_cache(stock_id)
        return item, stock

    def reconcile(self, stock_id: int) -> StockReconciliation:
        """Compare the stored quantity with the sum of its active Plus/Minus tracks"""
        stock = self.get(stock_id)
        track_repo = ProductStockTrackRepository(self.db)
        total_plus, total_minus = track_repo.signed_totals(stock_id)
        tracked = total_plus - total_minus
        quantity = stock.quantity or 0.0
        result = StockReconciliation(
            product_stock_id=stock_id,
            quantity=quantity,
            total_plus=total_plus,
            total_minus=total_minus,
            tracked_quantity=tracked,
            track_count=track_repo.count(stock_id),
            is_consistent=abs(tracked - quantity) <= RECONCILE_TOLERANCE,
        )
        if not result.is_consistent:
            logger.warning(
                "Product stock %s out of balance: quantity %.2f, history %.2f",
                stock_id, quantity, tracked,
            )
        return result
