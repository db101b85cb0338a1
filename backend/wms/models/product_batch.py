"""
ProductBatch - one procurement/expiry batch of a product
ProductBatchTrack - history of every batch change
"""
from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from wms.database import Base
from wms.models.base import AuditMixin, TrackMixin


class ProductBatch(AuditMixin, Base):
    """
    Product batch

    exp_date is always set at creation. Rows are soft-deleted only.
    """
    __tablename__ = "product_batches"

    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    code_batch = Column(String(200), nullable=True)
    unit_price = Column(Float, nullable=True)
    exp_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False)

    product = relationship("Product")

    __mapper_args__ = {"version_id_col": version}


class ProductBatchTrack(TrackMixin, Base):
    """History row for one ProductBatch mutation"""
    __tablename__ = "product_batch_tracks"

    product_batch_id = Column(Integer, ForeignKey("product_batches.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)  # denormalized from the batch
