"""
Database models for the WMS ledger
"""
from wms.database import Base

# Import all models
from .base import (
    AuditMixin, TrackMixin,
    TRACK_ACTION_CREATE, TRACK_ACTION_UPDATE, TRACK_ACTION_DELETE, TRACK_ACTION_RESTORE,
    OPERATION_PLUS, OPERATION_MINUS, OPERATION_IN, OPERATION_OUT, OPERATIONS,
)
from .user import User
from .catalog import Brand, Category, Product, Location, LOCATION_TYPES
from .product_batch import ProductBatch, ProductBatchTrack
from .product_stock import ProductStock, ProductStockTrack
from .product_item import ProductItem, ProductItemTrack
from .product_unit import ProductUnit, ProductUnitTrack

__all__ = [
    "Base",
    "AuditMixin",
    "TrackMixin",
    "TRACK_ACTION_CREATE",
    "TRACK_ACTION_UPDATE",
    "TRACK_ACTION_DELETE",
    "TRACK_ACTION_RESTORE",
    "OPERATION_PLUS",
    "OPERATION_MINUS",
    "OPERATION_IN",
    "OPERATION_OUT",
    "OPERATIONS",
    "User",
    "Brand",
    "Category",
    "Product",
    "Location",
    "LOCATION_TYPES",
    "ProductBatch",
    "ProductBatchTrack",
    "ProductStock",
    "ProductStockTrack",
    "ProductItem",
    "ProductItemTrack",
    "ProductUnit",
    "ProductUnitTrack",
]
