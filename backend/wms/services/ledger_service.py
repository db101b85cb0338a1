"""
Ledger Service - shared create/update/delete/restore protocol for the
batch, stock, item and unit families.

Every mutation runs in one unit of work: the ledger row and its track row
commit together, or neither does. Reads exclude soft-deleted rows unless
asked for the deleted set explicitly.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from wms.database import unit_of_work
from wms.exceptions import ConflictError, NotFoundError, ValidationError
from wms.models import ProductBatch, ProductStock
from wms.repositories.base import SoftDeleteRepository
from wms.services.cache import ResponseCache, cache_key
from wms.services.tracking import Tracker

logger = logging.getLogger(__name__)


def require_actor(actor_id: Optional[int]) -> int:
    if not actor_id:
        raise ValidationError("user id is required")
    return actor_id


def require_id(value: Optional[int], field: str) -> int:
    if not value:
        raise ValidationError("%s is required" % field)
    return value


def require_non_negative(data: Dict[str, Any], *fields: str) -> None:
    for field in fields:
        value = data.get(field)
        if value is not None and value < 0:
            raise ValidationError("%s cannot be negative" % field)


def blank_to_none(data: Dict[str, Any], *fields: str) -> Dict[str, Any]:
    """An empty string clears an optional text field"""
    for field in fields:
        if field in data and isinstance(data[field], str):
            data[field] = data[field].strip() or None
    return data


# Cached detail shapes and the foreign keys whose rows they join names from
DETAIL_DEPENDENTS = (
    (ProductBatch, "product_batch", ("product_id",)),
    (ProductStock, "product_stock", ("product_id", "product_batch_id", "location_id")),
)


def evict_dependent_details(db: Session, cache: Optional[ResponseCache], field: str, parent_id: int) -> None:
    """Drop cached details that joined names from a changed parent row"""
    if cache is None:
        return
    try:
        for model, resource, fields in DETAIL_DEPENDENTS:
            if field not in fields:
                continue
            for (row_id,) in db.query(model.id).filter(getattr(model, field) == parent_id).all():
                cache.delete(cache_key(resource, row_id))
    except Exception as e:
        logger.warning("Cache eviction failed for %s %s: %s", field, parent_id, e)


class LedgerService:
    """
    Generic ledger service.

    Subclasses set `repository_class`, `tracker_class`, `response_schema`,
    `label` and `resource`, and validate through `prepare_create` /
    `prepare_update` / `before_restore`.
    """

    repository_class = SoftDeleteRepository
    tracker_class = Tracker
    response_schema = None
    label = "Record"
    resource = "record"
    cache_details = False
    # Foreign key other rows use to reference this family, for cache eviction
    dependent_field: Optional[str] = None

    def __init__(self, db: Session, cache: Optional[ResponseCache] = None):
        self.db = db
        self.repo = self.repository_class(db)
        self.tracker = self.tracker_class(db)
        self.cache = cache

    # ---- validation hooks ----------------------------------------------

    def prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def prepare_update(self, entity, changes: Dict[str, Any]) -> Dict[str, Any]:
        return changes

    def before_restore(self, entity) -> None:
        pass

    def check_exists(self, model, entity_id: int, label: str) -> None:
        if not self.repo.exists(model, entity_id):
            raise NotFoundError("%s %s not found" % (label, entity_id))

    # ---- reads ---------------------------------------------------------

    def get(self, entity_id: int):
        entity = self.repo.get(entity_id)
        if entity is None:
            raise NotFoundError("%s %s not found" % (self.label, entity_id))
        return entity

    def get_deleted(self, entity_id: int):
        entity = self.repo.get_deleted(entity_id)
        if entity is None:
            raise NotFoundError("%s %s not found in deleted records" % (self.label, entity_id))
        return entity

    def to_response(self, entity, names: Optional[Dict[str, Any]] = None):
        response = self.response_schema.model_validate(entity)
        return response.model_copy(update=names) if names else response

    def get_detail(self, entity_id: int):
        """Response shape with joined names; read-through cache when enabled"""
        key = cache_key(self.resource, entity_id)
        if self.cache is not None and self.cache_details:
            cached = self.cache.get(key)
            if cached is not None:
                return self.response_schema.model_validate(cached)
        found = self.repo.fetch_detail(entity_id)
        if found is None:
            raise NotFoundError("%s %s not found" % (self.label, entity_id))
        response = self.to_response(*found)
        if self.cache is not None and self.cache_details:
            self.cache.set(key, response.model_dump(mode="json"))
        return response

    def list(self, **filters) -> List:
        return [self.to_response(e, n) for e, n in self.repo.fetch_details(**filters)]

    def list_deleted(self) -> List:
        return [self.to_response(e, n) for e, n in self.repo.fetch_details(deleted=True)]

    # ---- mutations -----------------------------------------------------

    def create(self, payload: BaseModel, actor_id: int):
        require_actor(actor_id)
        data = payload.model_dump() if isinstance(payload, BaseModel) else dict(payload)
        with unit_of_work(self.db):
            data = self.prepare_create(data)
            entity = self.repo.add(self.repo.model(**data, user_ins=actor_id, user_updt=actor_id))
            self.tracker.record_create(entity, actor_id)
        logger.info("%s %s created by user %s", self.label, entity.id, actor_id)
        self.refresh_cache(entity.id)
        return entity

    def update(self, entity_id: int, payload: BaseModel, actor_id: int):
        """
        Sparse update: only non-null fields change. An optional `version`
        in the payload must match the stored row version.
        """
        require_actor(actor_id)
        changes = payload.model_dump(exclude_none=True) if isinstance(payload, BaseModel) else {
            k: v for k, v in dict(payload).items() if v is not None
        }
        expected_version = changes.pop("version", None)
        with unit_of_work(self.db):
            entity = self.get(entity_id)
            if expected_version is not None and expected_version != entity.version:
                raise ConflictError(
                    "%s %s was modified by another request (version %s, expected %s)"
                    % (self.label, entity_id, entity.version, expected_version)
                )
            old = self.repo.snapshot(entity)
            changes = self.prepare_update(entity, changes)
            self.repo.apply_changes(entity, changes, actor_id)
            self.tracker.record_update(changes, old, entity, actor_id)
        logger.info("%s %s updated by user %s", self.label, entity_id, actor_id)
        self.refresh_cache(entity_id)
        self.evict_dependents(entity_id)
        return entity

    def delete(self, entity_id: int, actor_id: int) -> None:
        require_actor(actor_id)
        with unit_of_work(self.db):
            entity = self.get(entity_id)
            self.tracker.record_delete(entity, actor_id)
            self.repo.soft_delete(entity, actor_id)
        logger.info("%s %s deleted by user %s", self.label, entity_id, actor_id)
        self.evict_cache(entity_id)
        self.evict_dependents(entity_id)

    def restore(self, entity_id: int, actor_id: int):
        require_actor(actor_id)
        with unit_of_work(self.db):
            entity = self.get_deleted(entity_id)
            self.before_restore(entity)
            self.repo.restore(entity, actor_id)
            self.tracker.record_restore(entity, actor_id)
        logger.info("%s %s restored by user %s", self.label, entity_id, actor_id)
        self.refresh_cache(entity_id)
        self.evict_dependents(entity_id)
        return entity

    # ---- cache (best effort) -------------------------------------------

    def refresh_cache(self, entity_id: int) -> None:
        """Write-through after commit; failures never reach the caller"""
        if self.cache is None or not self.cache_details:
            return
        key = cache_key(self.resource, entity_id)
        try:
            found = self.repo.fetch_detail(entity_id)
            if found is None:
                self.cache.delete(key)
                return
            self.cache.set(key, self.to_response(*found).model_dump(mode="json"))
        except Exception as e:
            logger.warning("Cache refresh failed for %s: %s", key, e)

    def evict_cache(self, entity_id: int) -> None:
        if self.cache is not None and self.cache_details:
            self.cache.delete(cache_key(self.resource, entity_id))

    def evict_dependents(self, entity_id: int) -> None:
        if self.dependent_field is not None:
            evict_dependent_details(self.db, self.cache, self.dependent_field, entity_id)
