"""
API routes for the WMS ledger
"""
from .auth import router as auth_router
from .catalog import router as catalog_router
from .product_batches import router as product_batches_router
from .product_stocks import router as product_stocks_router
from .product_items import router as product_items_router
from .product_units import router as product_units_router
from .tracks import router as tracks_router

__all__ = [
    "auth_router",
    "catalog_router",
    "product_batches_router",
    "product_stocks_router",
    "product_items_router",
    "product_units_router",
    "tracks_router",
]
