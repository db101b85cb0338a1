"""
Standard route set shared by every audited resource:

    GET    {path}                 list active
    GET    {path}/deleted         list soft-deleted
    GET    {path}/{id}            get one
    POST   {path}                 create
    PUT    {path}/{id}            partial update
    PUT    {path}/{id}/restore    restore a soft-deleted row
    DELETE {path}/{id}            soft delete
"""
from typing import Callable, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from wms.api.responses import created, ok
from wms.dependencies import get_current_user_id


def _plural(label: str) -> str:
    if label.endswith("y"):
        return label[:-1] + "ies"
    if label.endswith(("s", "ch", "sh", "x")):
        return label + "es"
    return label + "s"


def add_crud_routes(
    router: APIRouter,
    path: str,
    get_service: Callable,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    label: str,
) -> None:
    """Register the standard routes on `router`; `get_service` is a FastAPI dependency"""
    plural = _plural(label)
    key = path.strip("/").replace("-", "_")

    @router.get(path, name="list_" + key)
    def list_records(service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(service.list(), "%s retrieved" % plural)

    # Registered before /{entity_id} so "deleted" is not parsed as an id
    @router.get(path + "/deleted", name="list_deleted_" + key)
    def list_deleted_records(service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(service.list_deleted(), "Deleted %s retrieved" % plural.lower())

    @router.get(path + "/{entity_id}", name="get_" + key)
    def get_record(entity_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(service.get_detail(entity_id), "%s retrieved" % label)

    @router.post(path, status_code=status.HTTP_201_CREATED, name="create_" + key)
    def create_record(
        payload: create_schema,
        service=Depends(get_service),
        user_id: int = Depends(get_current_user_id),
    ):
        entity = service.create(payload, user_id)
        return created(service.get_detail(entity.id), "%s created" % label)

    @router.put(path + "/{entity_id}", name="update_" + key)
    def update_record(
        entity_id: int,
        payload: update_schema,
        service=Depends(get_service),
        user_id: int = Depends(get_current_user_id),
    ):
        service.update(entity_id, payload, user_id)
        return ok(service.get_detail(entity_id), "%s updated" % label)

    @router.put(path + "/{entity_id}/restore", name="restore_" + key)
    def restore_record(entity_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        service.restore(entity_id, user_id)
        return ok(service.get_detail(entity_id), "%s restored" % label)

    @router.delete(path + "/{entity_id}", name="delete_" + key)
    def delete_record(entity_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        service.delete(entity_id, user_id)
        return ok(message="%s deleted" % label)
