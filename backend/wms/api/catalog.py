"""
Catalog API routes: brands, categories, products, locations
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wms.api.crud import add_crud_routes
from wms.api.responses import ok
from wms.dependencies import get_cache, get_current_user_id, get_db
from wms.schemas.catalog import (
    BrandCreate, BrandUpdate,
    CategoryCreate, CategoryUpdate,
    LocationCreate, LocationUpdate,
    ProductCreate, ProductUpdate,
)
from wms.services.cache import ResponseCache
from wms.services.catalog_service import BrandService, CategoryService, LocationService, ProductService

router = APIRouter()


def get_brand_service(db: Session = Depends(get_db)) -> BrandService:
    return BrandService(db)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_product_service(
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_cache),
) -> ProductService:
    return ProductService(db, cache)


def get_location_service(
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_cache),
) -> LocationService:
    return LocationService(db, cache)


add_crud_routes(router, "/brands", get_brand_service, BrandCreate, BrandUpdate, "Brand")
add_crud_routes(router, "/categories", get_category_service, CategoryCreate, CategoryUpdate, "Category")
add_crud_routes(router, "/products", get_product_service, ProductCreate, ProductUpdate, "Product")
add_crud_routes(router, "/locations", get_location_service, LocationCreate, LocationUpdate, "Location")


@router.get("/brands/{brand_id}/categories")
def list_brand_categories(
    brand_id: int,
    service: CategoryService = Depends(get_category_service),
    user_id: int = Depends(get_current_user_id),
):
    """Categories of one brand"""
    return ok(service.list_by_parent(brand_id), "Categories retrieved")


@router.get("/categories/{category_id}/products")
def list_category_products(
    category_id: int,
    service: ProductService = Depends(get_product_service),
    user_id: int = Depends(get_current_user_id),
):
    """Products of one category"""
    return ok(service.list_by_parent(category_id), "Products retrieved")


@router.get("/users/{owner_id}/locations")
def list_user_locations(
    owner_id: int,
    service: LocationService = Depends(get_location_service),
    user_id: int = Depends(get_current_user_id),
):
    return ok(service.list_by_owner(owner_id), "Locations retrieved")
