"""
Product Batch Service
"""
from typing import List

from wms.exceptions import ConflictError, ValidationError
from wms.models import Product, ProductItem, ProductStock, ProductUnit
from wms.repositories.ledger import ProductBatchRepository
from wms.schemas.product_batch import ProductBatchResponse
from wms.services.ledger_service import (
    LedgerService, blank_to_none, require_id, require_non_negative,
)
from wms.services.tracking import BatchTracker


class ProductBatchService(LedgerService):
    """Batches of a product; every change is mirrored by a batch track"""

    repository_class = ProductBatchRepository
    tracker_class = BatchTracker
    response_schema = ProductBatchResponse
    label = "Product batch"
    resource = "product_batch"
    cache_details = True
    dependent_field = "product_batch_id"

    def prepare_create(self, data):
        require_id(data.get("product_id"), "product_id")
        if data.get("exp_date") is None:
            raise ValidationError("exp_date is required")
        require_non_negative(data, "unit_price")
        self.check_exists(Product, data["product_id"], "Product")
        return blank_to_none(data, "code_batch", "description")

    def prepare_update(self, entity, changes):
        require_non_negative(changes, "unit_price")
        if "product_id" in changes and changes["product_id"] != entity.product_id:
            self.check_exists(Product, changes["product_id"], "Product")
            self._check_no_children(entity)
        return blank_to_none(changes, "code_batch", "description")

    def list_by_product(self, product_id: int) -> List[ProductBatchResponse]:
        return self.list(product_id=product_id)

    def _check_no_children(self, entity) -> None:
        """Active stocks, items and units pin a batch to its product"""
        for model, label in ((ProductStock, "stock"), (ProductItem, "item"), (ProductUnit, "unit")):
            child = self.db.query(model.id).filter(
                model.product_batch_id == entity.id,
                model.deleted_at.is_(None),
            ).first()
            if child is not None:
                raise ConflictError(
                    "Product batch %s still has active product %s %s; it cannot move to another product"
                    % (entity.id, label, child.id)
                )
