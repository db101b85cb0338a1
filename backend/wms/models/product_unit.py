"""
ProductUnit - alternate unit of measure (e.g. "Box of 12") for a product at a location
ProductUnitTrack - history of unit definitions
"""
from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from wms.database import Base
from wms.models.base import AuditMixin, TrackMixin


class ProductUnit(AuditMixin, Base):
    """
    Unit of measure definition.

    barcode is significant across products: an active barcode may only be
    reused by units of the same product.
    """
    __tablename__ = "product_units"

    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False, index=True)
    product_batch_id = Column(Integer, ForeignKey("product_batches.id", ondelete="RESTRICT"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    quantity = Column(Float, nullable=False, default=0)  # conversion factor to base units
    unit_price = Column(Float, nullable=False, default=0)
    unit_price_retail = Column(Float, nullable=False, default=0)
    barcode = Column(String(100), nullable=True, index=True)
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False)

    product = relationship("Product")
    location = relationship("Location")

    __mapper_args__ = {"version_id_col": version}


class ProductUnitTrack(TrackMixin, Base):
    """History row for one ProductUnit mutation"""
    __tablename__ = "product_unit_tracks"

    product_unit_id = Column(Integer, ForeignKey("product_units.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    location_id = Column(Integer, nullable=False)
    product_batch_id = Column(Integer, nullable=True)
