"""
Pydantic schemas for request/response validation
"""
from .user import UserRegister, UserLogin, UserResponse, TokenResponse
from .catalog import (
    AuditFields,
    BrandCreate, BrandUpdate, BrandResponse,
    CategoryCreate, CategoryUpdate, CategoryResponse,
    ProductCreate, ProductUpdate, ProductResponse,
    LocationCreate, LocationUpdate, LocationResponse,
)
from .product_batch import ProductBatchCreate, ProductBatchUpdate, ProductBatchResponse
from .product_stock import (
    ProductStockCreate, ProductStockUpdate, ProductStockResponse,
    StockMovementCreate, StockReconciliation,
)
from .product_item import ProductItemCreate, ProductItemUpdate, ProductItemResponse
from .product_unit import ProductUnitCreate, ProductUnitUpdate, ProductUnitResponse
from .track import (
    TrackResponse, TrackUpdate, TrackCount,
    ProductBatchTrackResponse, ProductStockTrackResponse,
    ProductItemTrackResponse, ProductUnitTrackResponse,
)

__all__ = [
    "UserRegister", "UserLogin", "UserResponse", "TokenResponse",
    "AuditFields",
    "BrandCreate", "BrandUpdate", "BrandResponse",
    "CategoryCreate", "CategoryUpdate", "CategoryResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse",
    "LocationCreate", "LocationUpdate", "LocationResponse",
    "ProductBatchCreate", "ProductBatchUpdate", "ProductBatchResponse",
    "ProductStockCreate", "ProductStockUpdate", "ProductStockResponse",
    "StockMovementCreate", "StockReconciliation",
    "ProductItemCreate", "ProductItemUpdate", "ProductItemResponse",
    "ProductUnitCreate", "ProductUnitUpdate", "ProductUnitResponse",
    "TrackResponse", "TrackUpdate", "TrackCount",
    "ProductBatchTrackResponse", "ProductStockTrackResponse",
    "ProductItemTrackResponse", "ProductUnitTrackResponse",
]
