"""
Product stock API routes, including stock movements and reconciliation
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wms.api.crud import add_crud_routes
from wms.api.responses import created, ok
from wms.dependencies import get_cache, get_current_user_id, get_db
from wms.schemas.product_stock import ProductStockCreate, ProductStockUpdate, StockMovementCreate
from wms.services.cache import ResponseCache
from wms.services.product_item_service import ProductItemService
from wms.services.product_stock_service import ProductStockService

router = APIRouter()


def get_stock_service(
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_cache),
) -> ProductStockService:
    return ProductStockService(db, cache)


add_crud_routes(router, "/product-stocks", get_stock_service, ProductStockCreate, ProductStockUpdate, "Product stock")


@router.post("/product-stocks/{stock_id}/movements", status_code=status.HTTP_201_CREATED)
def create_stock_movement(
    stock_id: int,
    movement: StockMovementCreate,
    service: ProductStockService = Depends(get_stock_service),
    user_id: int = Depends(get_current_user_id),
):
    """
    Record stock in or stock out.

    Creates the product item and moves the stock quantity in one
    transaction. Returns both the item and the updated stock.
    """
    item, stock = service.process_stock_movement(stock_id, movement, user_id)
    item_service = ProductItemService(service.db)
    return created(
        {
            "product_item": item_service.get_detail(item.id),
            "product_stock": service.get_detail(stock.id),
        },
        "Stock movement recorded",
    )


@router.get("/product-stocks/{stock_id}/reconcile")
def reconcile_stock(
    stock_id: int,
    service: ProductStockService = Depends(get_stock_service),
    user_id: int = Depends(get_current_user_id),
):
    """Current quantity against the sum of its movement history"""
    return ok(service.reconcile(stock_id), "Stock reconciled")


@router.get("/products/{product_id}/product-stocks")
def list_stocks_by_product(
    product_id: int,
    service: ProductStockService = Depends(get_stock_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_product(product_id), "Product stocks retrieved")


@router.get("/product-batches/{product_batch_id}/product-stocks")
def list_stocks_by_batch(
    product_batch_id: int,
    service: ProductStockService = Depends(get_stock_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_batch(product_batch_id), "Product stocks retrieved")


@router.get("/locations/{location_id}/product-stocks")
def list_stocks_by_location(
    location_id: int,
    service: ProductStockService = Depends(get_stock_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_location(location_id), "Product stocks retrieved")
