"""
ProductItem - one discrete stock movement against a ProductStock row
ProductItemTrack - history of item records
"""
from sqlalchemy import Column, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from wms.database import Base
from wms.models.base import AuditMixin, TrackMixin


class ProductItem(AuditMixin, Base):
    """
    Stock movement record.

    stock_in and stock_out are never both positive. quantity is stock_in
    for inbound, -stock_out for outbound, or the explicit value otherwise.
    """
    __tablename__ = "product_items"

    product_stock_id = Column(Integer, ForeignKey("product_stocks.id", ondelete="RESTRICT"), nullable=False, index=True)
    product_batch_id = Column(Integer, ForeignKey("product_batches.id", ondelete="RESTRICT"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    stock_in = Column(Float, nullable=True)
    stock_out = Column(Float, nullable=True)
    quantity = Column(Float, nullable=True)
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False)

    product_stock = relationship("ProductStock")

    __mapper_args__ = {"version_id_col": version}


class ProductItemTrack(TrackMixin, Base):
    """History row for one ProductItem mutation; carries the batch unit price"""
    __tablename__ = "product_item_tracks"

    product_item_id = Column(Integer, ForeignKey("product_items.id", ondelete="CASCADE"), nullable=False, index=True)
    product_stock_id = Column(Integer, nullable=False, index=True)
    product_batch_id = Column(Integer, nullable=False)
    product_id = Column(Integer, nullable=False, index=True)
    unit_price = Column(Float, nullable=True)
