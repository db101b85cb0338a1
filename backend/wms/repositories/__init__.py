"""
Persistence layer: one repository per audited model
"""
from .base import SoftDeleteRepository
from .catalog import BrandRepository, CategoryRepository, ProductRepository, LocationRepository, UserRepository
from .ledger import ProductBatchRepository, ProductStockRepository, ProductItemRepository, ProductUnitRepository
from .track import (
    TrackRepository,
    ProductBatchTrackRepository,
    ProductStockTrackRepository,
    ProductItemTrackRepository,
    ProductUnitTrackRepository,
)

__all__ = [
    "SoftDeleteRepository",
    "BrandRepository",
    "CategoryRepository",
    "ProductRepository",
    "LocationRepository",
    "UserRepository",
    "ProductBatchRepository",
    "ProductStockRepository",
    "ProductItemRepository",
    "ProductUnitRepository",
    "TrackRepository",
    "ProductBatchTrackRepository",
    "ProductStockTrackRepository",
    "ProductItemTrackRepository",
    "ProductUnitTrackRepository",
]
