"""
Catalog Service - brands, categories, products and locations

Audited and soft-deletable like the ledger, but without a track family.
Names are unique case-insensitively within their parent, counting
soft-deleted rows too.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from wms.database import unit_of_work
from wms.exceptions import ConflictError, NotFoundError, ValidationError
from wms.models import LOCATION_TYPES, Brand, Category
from wms.repositories.catalog import BrandRepository, CategoryRepository, LocationRepository, ProductRepository
from wms.schemas.catalog import BrandResponse, CategoryResponse, LocationResponse, ProductResponse
from wms.services.cache import ResponseCache
from wms.services.ledger_service import evict_dependent_details, require_actor, require_id

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Generic catalog CRUD.

    `scope_field` / `parent_model` name the parent foreign key (None for
    top-level entities); `unique_names` turns the name check on.
    """

    repository_class = BrandRepository
    response_schema = BrandResponse
    label = "Brand"
    scope_field: Optional[str] = None
    parent_model = None
    parent_label = ""
    unique_names = True
    # Foreign key ledger rows use to reference this entity, for cache eviction
    dependent_field: Optional[str] = None

    def __init__(self, db: Session, cache: Optional[ResponseCache] = None):
        self.db = db
        self.repo = self.repository_class(db)
        self.cache = cache

    def _check_parent(self, parent_id: Optional[int]) -> None:
        if self.parent_model is None:
            return
        require_id(parent_id, self.scope_field)
        if not self.repo.exists(self.parent_model, parent_id):
            raise NotFoundError("%s %s not found" % (self.parent_label, parent_id))

    def _check_name(self, name: str, scope_id: Optional[int], exclude_id: Optional[int] = None) -> None:
        if not self.unique_names:
            return
        scope = {self.scope_field: scope_id} if self.scope_field else {}
        if self.repo.name_taken(name, exclude_id=exclude_id, **scope):
            raise ConflictError("%s '%s' already exists" % (self.label, name))

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Extra per-entity rules; `data` is a create map or a change map"""
        return data

    def get(self, entity_id: int):
        entity = self.repo.get(entity_id)
        if entity is None:
            raise NotFoundError("%s %s not found" % (self.label, entity_id))
        return entity

    def to_response(self, entity):
        return self.response_schema.model_validate(entity)

    def get_detail(self, entity_id: int):
        return self.to_response(self.get(entity_id))

    def list(self) -> List:
        return [self.to_response(e) for e in self.repo.list_all()]

    def list_deleted(self) -> List:
        return [self.to_response(e) for e in self.repo.list_deleted()]

    def list_by_parent(self, parent_id: int) -> List:
        return [self.to_response(e) for e in self.repo.list_by(**{self.scope_field: parent_id})]

    def create(self, payload: BaseModel, actor_id: int):
        require_actor(actor_id)
        data = payload.model_dump(exclude_none=True)
        data["name"] = data["name"].strip()
        if not data["name"]:
            raise ValidationError("name is required")
        data = self.validate(data)
        scope_id = data.get(self.scope_field) if self.scope_field else None
        self._check_parent(scope_id)
        self._check_name(data["name"], scope_id)
        with unit_of_work(self.db):
            entity = self.repo.add(self.repo.model(**data, user_ins=actor_id, user_updt=actor_id))
        logger.info("%s %s created by user %s", self.label, entity.id, actor_id)
        return entity

    def update(self, entity_id: int, payload: BaseModel, actor_id: int):
        require_actor(actor_id)
        changes = payload.model_dump(exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            if not changes["name"]:
                raise ValidationError("name is required")
        changes = self.validate(changes)
        with unit_of_work(self.db):
            entity = self.get(entity_id)
            scope_id = getattr(entity, self.scope_field) if self.scope_field else None
            if self.scope_field and self.scope_field in changes and changes[self.scope_field] != scope_id:
                scope_id = changes[self.scope_field]
                self._check_parent(scope_id)
                self._check_name(changes.get("name", entity.name), scope_id, exclude_id=entity.id)
            elif "name" in changes and changes["name"].lower() != entity.name.lower():
                self._check_name(changes["name"], scope_id, exclude_id=entity.id)
            self.repo.apply_changes(entity, changes, actor_id)
        logger.info("%s %s updated by user %s", self.label, entity_id, actor_id)
        self.evict_dependents(entity_id)
        return entity

    def delete(self, entity_id: int, actor_id: int) -> None:
        require_actor(actor_id)
        with unit_of_work(self.db):
            entity = self.get(entity_id)
            self.repo.soft_delete(entity, actor_id)
        logger.info("%s %s deleted by user %s", self.label, entity_id, actor_id)
        self.evict_dependents(entity_id)

    def restore(self, entity_id: int, actor_id: int):
        require_actor(actor_id)
        with unit_of_work(self.db):
            entity = self.repo.get_deleted(entity_id)
            if entity is None:
                raise NotFoundError("%s %s not found in deleted records" % (self.label, entity_id))
            self.repo.restore(entity, actor_id)
        logger.info("%s %s restored by user %s", self.label, entity_id, actor_id)
        self.evict_dependents(entity_id)
        return entity

    def evict_dependents(self, entity_id: int) -> None:
        if self.dependent_field is not None:
            evict_dependent_details(self.db, self.cache, self.dependent_field, entity_id)


class BrandService(CatalogService):
    pass


class CategoryService(CatalogService):
    repository_class = CategoryRepository
    response_schema = CategoryResponse
    label = "Category"
    scope_field = "brand_id"
    parent_model = Brand
    parent_label = "Brand"


class ProductService(CatalogService):
    repository_class = ProductRepository
    response_schema = ProductResponse
    label = "Product"
    scope_field = "category_id"
    parent_model = Category
    parent_label = "Category"
    dependent_field = "product_id"


class LocationService(CatalogService):
    repository_class = LocationRepository
    response_schema = LocationResponse
    label = "Location"
    unique_names = False
    dependent_field = "location_id"

    def validate(self, data):
        if "type" in data and data["type"] not in LOCATION_TYPES:
            raise ValidationError("type must be one of: %s" % ", ".join(LOCATION_TYPES))
        return data

    def create(self, payload, actor_id):
        # Owner defaults to the creating user
        if getattr(payload, "user_id", None) is None:
            payload = payload.model_copy(update={"user_id": actor_id})
        return super().create(payload, actor_id)

    def list_by_owner(self, user_id: int) -> List:
        return [self.to_response(e) for e in self.repo.list_by(user_id=user_id)]
