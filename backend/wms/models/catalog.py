"""
Catalog models: Brand > Category > Product, and Location
"""
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from wms.database import Base
from wms.models.base import AuditMixin

LOCATION_TYPES = ("warehouse", "reseller")


class Brand(AuditMixin, Base):
    """Brand. Name is unique case-insensitively across active and deleted rows."""
    __tablename__ = "brands"

    name = Column(String(255), nullable=False)
    description = Column(Text)

    categories = relationship("Category", back_populates="brand")


class Category(AuditMixin, Base):
    """Product category, unique by name within a brand"""
    __tablename__ = "categories"

    brand_id = Column(Integer, ForeignKey("brands.id", ondelete="RESTRICT"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    brand = relationship("Brand", back_populates="categories")
    products = relationship("Product", back_populates="category")


class Product(AuditMixin, Base):
    """Product, unique by name within a category"""
    __tablename__ = "products"

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    category = relationship("Category", back_populates="products")


class Location(AuditMixin, Base):
    """Physical place that holds stock (warehouse or reseller)"""
    __tablename__ = "locations"

    user_id = Column(Integer, nullable=False)  # Owner
    name = Column(String(100), nullable=False)
    address = Column(Text)
    phone_number = Column(String(20))
    type = Column(String(20), nullable=False, default="warehouse")

    __table_args__ = (
        CheckConstraint("type IN ('warehouse', 'reseller')", name="location_type_valid"),
    )
