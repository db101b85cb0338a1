"""
ProductStock - quantity of one batch of one product held at one location
ProductStockTrack - movement history of a stock row
"""
from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, Integer
from sqlalchemy.orm import relationship

from wms.database import Base
from wms.models.base import AuditMixin, TrackMixin


class ProductStock(AuditMixin, Base):
    """
    Stock level of a (batch, product, location) triple.

    Only one ACTIVE row per triple; quantity never goes negative.
    """
    __tablename__ = "product_stocks"

    product_batch_id = Column(Integer, ForeignKey("product_batches.id", ondelete="RESTRICT"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=0)
    version = Column(Integer, nullable=False)

    product_batch = relationship("ProductBatch")
    product = relationship("Product")
    location = relationship("Location")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="product_stock_quantity_non_negative"),
    )


class ProductStockTrack(TrackMixin, Base):
    """History row for one ProductStock mutation or movement"""
    __tablename__ = "product_stock_tracks"

    product_stock_id = Column(Integer, ForeignKey("product_stocks.id", ondelete="CASCADE"), nullable=False, index=True)
    # Denormalized chain for query convenience
    product_batch_id = Column(Integer, nullable=False)
    product_id = Column(Integer, nullable=False, index=True)
    location_id = Column(Integer, nullable=False)
