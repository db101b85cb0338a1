"""
Track (history) API routes for the four ledger families
"""
from datetime import datetime
from typing import Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from wms.api.responses import ok
from wms.dependencies import get_current_user_id, get_db
from wms.schemas.track import (
    ProductBatchTrackResponse,
    ProductItemTrackResponse,
    ProductStockTrackResponse,
    ProductUnitTrackResponse,
    TrackCount,
    TrackUpdate,
)
from wms.services.tracking import BatchTracker, ItemTracker, StockTracker, TrackQueryService, UnitTracker

router = APIRouter()


def _add_track_routes(
    path: str,
    parent_path: str,
    tracker_class,
    schema: Type[BaseModel],
    label: str,
    editable: bool = False,
) -> None:
    """Read routes for one family, plus admin delete (and update when `editable`)"""

    def get_service(db: Session = Depends(get_db)) -> TrackQueryService:
        return TrackQueryService(db, tracker_class)

    def dump(rows):
        return [schema.model_validate(r) for r in rows]

    @router.get(path)
    def list_tracks(service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(dump(service.list_all()), "%s tracks retrieved" % label)

    @router.get(path + "/{track_id}")
    def get_track(track_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(schema.model_validate(service.get(track_id)), "%s track retrieved" % label)

    @router.get(path + "/product/{product_id}")
    def list_tracks_by_product(product_id: int, service=Depends(get_service),
                               user_id: int = Depends(get_current_user_id)):
        return ok(dump(service.list_by_product(product_id)), "%s tracks retrieved" % label)

    @router.get(path + "/user/{actor_id}")
    def list_tracks_by_user(actor_id: int, service=Depends(get_service),
                            user_id: int = Depends(get_current_user_id)):
        return ok(dump(service.list_by_user(actor_id)), "%s tracks retrieved" % label)

    @router.get(parent_path + "/{parent_id}/tracks")
    def list_tracks_by_parent(parent_id: int, service=Depends(get_service),
                              user_id: int = Depends(get_current_user_id)):
        return ok(dump(service.list_by_parent(parent_id)), "%s tracks retrieved" % label)

    @router.get(parent_path + "/{parent_id}/tracks/latest")
    def latest_track(parent_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(schema.model_validate(service.latest(parent_id)), "Latest %s track retrieved" % label.lower())

    @router.get(parent_path + "/{parent_id}/tracks/count")
    def count_tracks(parent_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        return ok(TrackCount(parent_id=parent_id, count=service.count(parent_id)), "%s tracks counted" % label)

    @router.delete(path + "/{track_id}")
    def delete_track(track_id: int, service=Depends(get_service), user_id: int = Depends(get_current_user_id)):
        service.delete(track_id, user_id)
        return ok(message="%s track deleted" % label)

    if editable:
        @router.put(path + "/{track_id}")
        def update_track(
            track_id: int,
            payload: TrackUpdate,
            service=Depends(get_service),
            user_id: int = Depends(get_current_user_id),
        ):
            track = service.update(track_id, payload.model_dump(exclude_none=True), user_id)
            return ok(schema.model_validate(track), "%s track updated" % label)


def get_item_track_service(db: Session = Depends(get_db)) -> TrackQueryService:
    return TrackQueryService(db, ItemTracker)


@router.get("/product-item-tracks/date-range")
def list_item_tracks_by_date(
    start: datetime = Query(..., description="Inclusive start (ISO 8601)"),
    end: datetime = Query(..., description="Inclusive end (ISO 8601)"),
    service: TrackQueryService = Depends(get_item_track_service),
    user_id: int = Depends(get_current_user_id),
):
    """Item tracks dated between start and end"""
    rows = service.list_between(start, end)
    return ok([ProductItemTrackResponse.model_validate(r) for r in rows], "Product item tracks retrieved")


_add_track_routes("/product-batch-tracks", "/product-batches", BatchTracker, ProductBatchTrackResponse, "Product batch")
_add_track_routes("/product-stock-tracks", "/product-stocks", StockTracker, ProductStockTrackResponse, "Product stock",
                  editable=True)
_add_track_routes("/product-item-tracks", "/product-items", ItemTracker, ProductItemTrackResponse, "Product item",
                  editable=True)
_add_track_routes("/product-unit-tracks", "/product-units", UnitTracker, ProductUnitTrackResponse, "Product unit")
