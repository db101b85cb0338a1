"""
Business logic services for the WMS ledger
"""
from .auth_service import AuthService
from .cache import ResponseCache
from .catalog_service import BrandService, CategoryService, ProductService, LocationService
from .product_batch_service import ProductBatchService
from .product_stock_service import ProductStockService
from .product_item_service import ProductItemService
from .product_unit_service import ProductUnitService
from .tracking import TrackQueryService

__all__ = [
    "AuthService",
    "ResponseCache",
    "BrandService",
    "CategoryService",
    "ProductService",
    "LocationService",
    "ProductBatchService",
    "ProductStockService",
    "ProductItemService",
    "ProductUnitService",
    "TrackQueryService",
]
