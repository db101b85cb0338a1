"""
Ledger repositories and their joined response-shape queries
"""
from typing import List

from sqlalchemy.orm import Query

from wms.models import Location, Product, ProductBatch, ProductItem, ProductStock, ProductUnit
from wms.repositories.base import SoftDeleteRepository


class ProductBatchRepository(SoftDeleteRepository):
    model = ProductBatch

    def detail_query(self) -> Query:
        return self.db.query(
            ProductBatch,
            Product.name.label("product_name"),
        ).outerjoin(Product, Product.id == ProductBatch.product_id)


class ProductStockRepository(SoftDeleteRepository):
    model = ProductStock

    def detail_query(self) -> Query:
        return self.db.query(
            ProductStock,
            Product.name.label("product_name"),
            Location.name.label("location_name"),
            ProductBatch.code_batch.label("code_batch"),
            ProductBatch.exp_date.label("exp_date"),
        ).outerjoin(
            Product, Product.id == ProductStock.product_id
        ).outerjoin(
            Location, Location.id == ProductStock.location_id
        ).outerjoin(
            ProductBatch, ProductBatch.id == ProductStock.product_batch_id
        )

    def find_triple(self, product_batch_id: int, product_id: int, location_id: int, exclude_id=None):
        """Active stock row for a (batch, product, location) triple"""
        q = self.active().filter(
            ProductStock.product_batch_id == product_batch_id,
            ProductStock.product_id == product_id,
            ProductStock.location_id == location_id,
        )
        if exclude_id is not None:
            q = q.filter(ProductStock.id != exclude_id)
        return q.first()


class ProductItemRepository(SoftDeleteRepository):
    model = ProductItem

    def detail_query(self) -> Query:
        return self.db.query(
            ProductItem,
            Product.name.label("product_name"),
            ProductBatch.code_batch.label("code_batch"),
        ).outerjoin(
            Product, Product.id == ProductItem.product_id
        ).outerjoin(
            ProductBatch, ProductBatch.id == ProductItem.product_batch_id
        )


class ProductUnitRepository(SoftDeleteRepository):
    model = ProductUnit

    def detail_query(self) -> Query:
        return self.db.query(
            ProductUnit,
            Product.name.label("product_name"),
            Location.name.label("location_name"),
        ).outerjoin(
            Product, Product.id == ProductUnit.product_id
        ).outerjoin(
            Location, Location.id == ProductUnit.location_id
        )

    def active_by_barcode(self, barcode: str, exclude_id=None) -> List[ProductUnit]:
        q = self.active().filter(ProductUnit.barcode == barcode)
        if exclude_id is not None:
            q = q.filter(ProductUnit.id != exclude_id)
        return q.order_by(ProductUnit.id).all()
