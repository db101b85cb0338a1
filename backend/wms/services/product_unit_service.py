"""
Product Unit Service - units of measure and barcode resolution
"""
from typing import List, Optional

from wms.exceptions import ConflictError, NotFoundError, ValidationError
from wms.models import Location, Product, ProductBatch, ProductUnit
from wms.repositories.ledger import ProductUnitRepository
from wms.schemas.product_unit import ProductUnitResponse
from wms.services.ledger_service import (
    LedgerService, blank_to_none, require_id, require_non_negative,
)
from wms.services.tracking import UnitTracker

PRICE_FIELDS = ("quantity", "unit_price", "unit_price_retail")


class ProductUnitService(LedgerService):
    repository_class = ProductUnitRepository
    tracker_class = UnitTracker
    response_schema = ProductUnitResponse
    label = "Product unit"
    resource = "product_unit"

    def resolve_barcode(self, barcode: Optional[str], product_id: int, location_id: int, name: str,
                        exclude_id: Optional[int] = None) -> None:
        """
        An active barcode may be shared only by units of the same product,
        and never by two units with the same location and name.
        """
        if not barcode:
            return
        for hit in self.repo.active_by_barcode(barcode, exclude_id=exclude_id):
            if hit.product_id != product_id:
                raise ConflictError("barcode belongs to another product")
            if hit.location_id == location_id and (hit.name or "").lower() == (name or "").strip().lower():
                raise ConflictError("duplicate unit")

    def _check_batch(self, batch_id: Optional[int], product_id: int) -> None:
        if not batch_id:
            return
        batch = self.db.query(ProductBatch).filter(
            ProductBatch.id == batch_id,
            ProductBatch.deleted_at.is_(None),
        ).first()
        if batch is None:
            raise NotFoundError("Product batch %s not found" % batch_id)
        if batch.product_id != product_id:
            raise ValidationError("Product batch %s does not belong to product %s" % (batch_id, product_id))

    def _check_name(self, name: str, product_id: int, location_id: int, exclude_id: Optional[int] = None):
        if self.repo.name_taken(name, exclude_id=exclude_id, product_id=product_id, location_id=location_id):
            raise ConflictError("Unit '%s' already exists for this product and location" % name)

    def prepare_create(self, data):
        product_id = require_id(data.get("product_id"), "product_id")
        location_id = require_id(data.get("location_id"), "location_id")
        if not (data.get("name") or "").strip():
            raise ValidationError("name is required")
        data["name"] = data["name"].strip()
        require_non_negative(data, *PRICE_FIELDS)
        blank_to_none(data, "barcode", "description")
        self.check_exists(Product, product_id, "Product")
        self.check_exists(Location, location_id, "Location")
        self._check_batch(data.get("product_batch_id"), product_id)
        self.resolve_barcode(data.get("barcode"), product_id, location_id, data["name"])
        self._check_name(data["name"], product_id, location_id)
        return data

    def prepare_update(self, entity, changes):
        require_non_negative(changes, *PRICE_FIELDS)
        blank_to_none(changes, "barcode", "description")
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        merged = {
            f: changes.get(f, getattr(entity, f))
            for f in ("product_id", "location_id", "product_batch_id", "name", "barcode")
        }
        if "product_id" in changes and changes["product_id"] != entity.product_id:
            self.check_exists(Product, changes["product_id"], "Product")
        if "location_id" in changes and changes["location_id"] != entity.location_id:
            self.check_exists(Location, changes["location_id"], "Location")
        if any(f in changes for f in ("product_id", "product_batch_id")):
            self._check_batch(merged["product_batch_id"], merged["product_id"])

        identity_changed = any(
            f in changes and changes[f] != getattr(entity, f)
            for f in ("product_id", "location_id", "name", "barcode")
        )
        if identity_changed:
            self.resolve_barcode(
                merged["barcode"], merged["product_id"], merged["location_id"], merged["name"],
                exclude_id=entity.id,
            )
        if any(f in changes and changes[f] != getattr(entity, f) for f in ("product_id", "location_id", "name")):
            self._check_name(merged["name"], merged["product_id"], merged["location_id"], exclude_id=entity.id)
        return changes

    def before_restore(self, entity):
        self.resolve_barcode(entity.barcode, entity.product_id, entity.location_id, entity.name,
                             exclude_id=entity.id)

    def list_by_product(self, product_id: int) -> List[ProductUnitResponse]:
        return self.list(product_id=product_id)

    def list_by_location(self, location_id: int) -> List[ProductUnitResponse]:
        return self.list(location_id=location_id)

    def get_by_barcode(self, barcode: str) -> List[ProductUnitResponse]:
        units = self.list(barcode=barcode)
        if not units:
            raise NotFoundError("No product unit with barcode %s" % barcode)
        return units
