"""
Product unit API routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wms.api.crud import add_crud_routes
from wms.api.responses import ok
from wms.dependencies import get_current_user_id, get_db
from wms.schemas.product_unit import ProductUnitCreate, ProductUnitUpdate
from wms.services.product_unit_service import ProductUnitService

router = APIRouter()


def get_unit_service(db: Session = Depends(get_db)) -> ProductUnitService:
    return ProductUnitService(db)


@router.get("/product-units/barcode/{barcode}")
def get_units_by_barcode(
    barcode: str,
    service: ProductUnitService = Depends(get_unit_service),
    user_id: int = Depends(get_current_user_id),
):
    """Units sharing a barcode (all belong to one product)"""
    return ok(service.get_by_barcode(barcode), "Product units retrieved")


add_crud_routes(router, "/product-units", get_unit_service, ProductUnitCreate, ProductUnitUpdate, "Product unit")


@router.get("/products/{product_id}/product-units")
def list_units_by_product(
    product_id: int,
    service: ProductUnitService = Depends(get_unit_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_product(product_id), "Product units retrieved")


@router.get("/locations/{location_id}/product-units")
def list_units_by_location(
    location_id: int,
    service: ProductUnitService = Depends(get_unit_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_location(location_id), "Product units retrieved")
