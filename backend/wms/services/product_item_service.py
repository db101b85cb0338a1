"""
Product Item Service
"""
from typing import Any, Dict, List

from wms.exceptions import NotFoundError, ValidationError
from wms.models import Product, ProductBatch, ProductStock
from wms.repositories.ledger import ProductItemRepository
from wms.schemas.product_item import ProductItemResponse
from wms.services.ledger_service import LedgerService, require_id, require_non_negative
from wms.services.tracking import ItemTracker


def derive_quantity(stock_in, stock_out, explicit=None):
    """
    stock_in and stock_out are exclusive. Inbound -> stock_in, outbound ->
    -stock_out, neither -> the explicit quantity.
    """
    stock_in = stock_in or 0.0
    stock_out = stock_out or 0.0
    if stock_in > 0 and stock_out > 0:
        raise ValidationError("stock_in and stock_out cannot both be positive")
    if stock_in > 0:
        return stock_in
    if stock_out > 0:
        return -stock_out
    return explicit


class ProductItemService(LedgerService):
    """Movement records against a stock row (history only, quantity is not applied)"""

    repository_class = ProductItemRepository
    tracker_class = ItemTracker
    response_schema = ProductItemResponse
    label = "Product item"
    resource = "product_item"

    def _check_chain(self, stock_id: int, batch_id: int, product_id: int) -> None:
        self.check_exists(Product, product_id, "Product")
        self.check_exists(ProductBatch, batch_id, "Product batch")
        stock = self.db.query(ProductStock).filter(
            ProductStock.id == stock_id,
            ProductStock.deleted_at.is_(None),
        ).first()
        if stock is None:
            raise NotFoundError("Product stock %s not found" % stock_id)
        if stock.product_id != product_id or stock.product_batch_id != batch_id:
            raise ValidationError(
                "Product stock %s does not hold batch %s of product %s" % (stock_id, batch_id, product_id)
            )

    def prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        stock_id = require_id(data.get("product_stock_id"), "product_stock_id")
        batch_id = require_id(data.get("product_batch_id"), "product_batch_id")
        product_id = require_id(data.get("product_id"), "product_id")
        require_non_negative(data, "stock_in", "stock_out")
        data["quantity"] = derive_quantity(data.get("stock_in"), data.get("stock_out"), data.get("quantity"))
        self._check_chain(stock_id, batch_id, product_id)
        return data

    def prepare_update(self, entity, changes):
        require_non_negative(changes, "stock_in", "stock_out")
        # A stored quantity derived from a movement side is not an explicit value
        had_movement = (entity.stock_in or 0) > 0 or (entity.stock_out or 0) > 0
        fallback = None if had_movement else entity.quantity
        changes["quantity"] = derive_quantity(
            changes.get("stock_in", entity.stock_in),
            changes.get("stock_out", entity.stock_out),
            changes.get("quantity", fallback),
        )
        return changes

    def list_by_stock(self, product_stock_id: int) -> List[ProductItemResponse]:
        return self.list(product_stock_id=product_stock_id)

    def list_by_product(self, product_id: int) -> List[ProductItemResponse]:
        return self.list(product_id=product_id)

    def list_by_batch(self, product_batch_id: int) -> List[ProductItemResponse]:
        return self.list(product_batch_id=product_batch_id)
