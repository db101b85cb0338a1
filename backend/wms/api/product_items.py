"""
Product item API routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wms.api.crud import add_crud_routes
from wms.api.responses import ok
from wms.dependencies import get_current_user_id, get_db
from wms.schemas.product_item import ProductItemCreate, ProductItemUpdate
from wms.services.product_item_service import ProductItemService

router = APIRouter()


def get_item_service(db: Session = Depends(get_db)) -> ProductItemService:
    return ProductItemService(db)


add_crud_routes(router, "/product-items", get_item_service, ProductItemCreate, ProductItemUpdate, "Product item")


@router.get("/product-stocks/{product_stock_id}/product-items")
def list_items_by_stock(
    product_stock_id: int,
    service: ProductItemService = Depends(get_item_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_stock(product_stock_id), "Product items retrieved")


@router.get("/products/{product_id}/product-items")
def list_items_by_product(
    product_id: int,
    service: ProductItemService = Depends(get_item_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_product(product_id), "Product items retrieved")


@router.get("/product-batches/{product_batch_id}/product-items")
def list_items_by_batch(
    product_batch_id: int,
    service: ProductItemService = Depends(get_item_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_batch(product_batch_id), "Product items retrieved")
