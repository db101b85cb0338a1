"""
Product batch API routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wms.api.crud import add_crud_routes
from wms.api.responses import ok
from wms.dependencies import get_cache, get_current_user_id, get_db
from wms.schemas.product_batch import ProductBatchCreate, ProductBatchUpdate
from wms.services.cache import ResponseCache
from wms.services.product_batch_service import ProductBatchService

router = APIRouter()


def get_batch_service(
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_cache),
) -> ProductBatchService:
    return ProductBatchService(db, cache)


add_crud_routes(router, "/product-batches", get_batch_service, ProductBatchCreate, ProductBatchUpdate, "Product batch")


@router.get("/products/{product_id}/product-batches")
def list_batches_by_product(
    product_id: int,
    service: ProductBatchService = Depends(get_batch_service),
    user_id: int = Depends(get_current_user_id),
):
    """All active batches of a product"""
    return ok(service.list_by_product(product_id), "Product batches retrieved")
