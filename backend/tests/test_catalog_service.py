"""
Tests for the catalog services: brands, categories, products, locations.
"""

import pytest

from wms.exceptions import ConflictError, NotFoundError, ValidationError
from wms.schemas import (
    BrandCreate,
    BrandUpdate,
    CategoryCreate,
    CategoryUpdate,
    LocationCreate,
    LocationUpdate,
    ProductCreate,
)
from wms.services import BrandService, CategoryService, LocationService, ProductService


class TestNameUniqueness:
    def test_brand_names_are_case_insensitive(self, session, catalog, actor_id):
        with pytest.raises(ConflictError):
            BrandService(session).create(BrandCreate(name="  ACME "), actor_id)

    def test_deleted_brand_name_stays_reserved(self, session, catalog, actor_id):
        service = BrandService(session)
        other = service.create(BrandCreate(name="Globex"), actor_id)
        service.delete(other.id, actor_id)
        with pytest.raises(ConflictError):
            service.create(BrandCreate(name="globex"), actor_id)

    def test_category_name_scoped_to_brand(self, session, catalog, actor_id):
        other_brand = BrandService(session).create(BrandCreate(name="Globex"), actor_id)
        service = CategoryService(session)
        same_name = service.create(CategoryCreate(brand_id=other_brand.id, name="Beverages"), actor_id)
        assert same_name.brand_id == other_brand.id
        with pytest.raises(ConflictError):
            service.create(CategoryCreate(brand_id=catalog.brand.id, name="beverages"), actor_id)

    def test_rename_into_taken_name(self, session, catalog, actor_id):
        service = BrandService(session)
        other = service.create(BrandCreate(name="Globex"), actor_id)
        with pytest.raises(ConflictError):
            service.update(other.id, BrandUpdate(name="Acme"), actor_id)

    def test_case_only_rename_is_allowed(self, session, catalog, actor_id):
        renamed = BrandService(session).update(catalog.brand.id, BrandUpdate(name="ACME"), actor_id)
        assert renamed.name == "ACME"

    def test_location_names_may_repeat(self, session, catalog, actor_id):
        again = LocationService(session).create(LocationCreate(name="Main Warehouse"), actor_id)
        assert again.id != catalog.location.id


class TestParents:
    def test_unknown_brand(self, session, actor_id):
        with pytest.raises(NotFoundError):
            CategoryService(session).create(CategoryCreate(brand_id=999, name="Dairy"), actor_id)

    def test_deleted_category_cannot_take_products(self, session, catalog, actor_id):
        CategoryService(session).delete(catalog.category.id, actor_id)
        with pytest.raises(NotFoundError):
            ProductService(session).create(ProductCreate(category_id=catalog.category.id, name="Tea"), actor_id)

    def test_move_category_to_unknown_brand(self, session, catalog, actor_id):
        with pytest.raises(NotFoundError):
            CategoryService(session).update(catalog.category.id, CategoryUpdate(brand_id=999), actor_id)

    def test_list_by_parent(self, session, catalog):
        products = ProductService(session).list_by_parent(catalog.category.id)
        assert [p.name for p in products] == ["Mineral Water 600ml", "Orange Juice 1L"]


class TestLocations:
    def test_owner_defaults_to_actor(self, session, catalog, actor_id):
        assert catalog.location.user_id == actor_id
        assert [loc.id for loc in LocationService(session).list_by_owner(actor_id)] == [
            catalog.location.id,
            catalog.other_location.id,
        ]

    def test_unknown_type_is_rejected(self, session, catalog, actor_id):
        with pytest.raises(ValidationError):
            LocationService(session).update(catalog.location.id, LocationUpdate(type="depot"), actor_id)


class TestCatalogSoftDelete:
    def test_delete_and_restore(self, session, catalog, actor_id):
        service = BrandService(session)
        service.delete(catalog.brand.id, actor_id)
        assert service.list() == []
        assert [b.id for b in service.list_deleted()] == [catalog.brand.id]
        with pytest.raises(NotFoundError):
            service.get(catalog.brand.id)

        restored = service.restore(catalog.brand.id, actor_id)
        assert restored.deleted_at is None
        assert service.list_deleted() == []

    def test_restore_active_row_is_not_found(self, session, catalog, actor_id):
        with pytest.raises(NotFoundError):
            BrandService(session).restore(catalog.brand.id, actor_id)

    def test_blank_name_is_rejected(self, session, actor_id):
        with pytest.raises(ValidationError):
            BrandService(session).create(BrandCreate(name="   "), actor_id)
