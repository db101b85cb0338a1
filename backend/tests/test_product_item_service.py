"""
Tests for ProductItemService: stock_in / stock_out exclusivity, derived
quantity, chain validation and item tracks.
"""

import pytest

from wms.exceptions import NotFoundError, ValidationError
from wms.models import ProductItemTrack
from wms.schemas import ProductItemCreate, ProductItemUpdate
from wms.services import ProductItemService
from wms.services.product_item_service import derive_quantity
from wms.services.tracking import infer_item_operation

from conftest import assert_restore_round_trip


def _item_payload(stock, **overrides):
    values = dict(
        product_stock_id=stock.id,
        product_batch_id=stock.product_batch_id,
        product_id=stock.product_id,
    )
    values.update(overrides)
    return ProductItemCreate(**values)


def _tracks(session, item_id):
    return (
        session.query(ProductItemTrack)
        .filter(ProductItemTrack.product_item_id == item_id)
        .order_by(ProductItemTrack.id)
        .all()
    )


class TestDeriveQuantity:
    def test_inbound(self):
        assert derive_quantity(50, None) == 50

    def test_outbound_is_negative(self):
        assert derive_quantity(None, 20) == -20

    def test_neither_uses_explicit(self):
        assert derive_quantity(None, None, 7) == 7
        assert derive_quantity(0, 0) is None

    def test_both_positive_is_rejected(self):
        with pytest.raises(ValidationError):
            derive_quantity(50, 20)


class TestInferOperation:
    def test_out_wins_when_positive(self):
        assert infer_item_operation(None, 3) == "Out"

    def test_in_otherwise(self):
        assert infer_item_operation(5, None) == "In"
        assert infer_item_operation(None, None) == "In"


class TestItemCreate:
    def test_stock_in_and_out_together_is_rejected(self, session, stock, actor_id):
        with pytest.raises(ValidationError):
            ProductItemService(session).create(_item_payload(stock, stock_in=50, stock_out=20), actor_id)
        assert session.query(ProductItemTrack).count() == 0

    def test_inbound_item(self, session, stock, actor_id):
        item = ProductItemService(session).create(_item_payload(stock, stock_in=50), actor_id)
        assert item.quantity == 50

        tracks = _tracks(session, item.id)
        assert len(tracks) == 1
        track = tracks[0]
        assert (track.action, track.operation, track.quantity) == ("CREATED", "In", 50)
        assert track.unit_price == 100.0
        assert track.product_stock_id == stock.id

    def test_item_track_stock_is_parent_level(self, session, stock, actor_id):
        item = ProductItemService(session).create(_item_payload(stock, stock_out=4), actor_id)
        track = _tracks(session, item.id)[0]
        assert track.operation == "Out"
        assert track.quantity == 4
        # Creating an item directly records history but leaves the stock level alone
        assert track.stock == 10

    def test_negative_stock_in_is_rejected(self, session, stock, actor_id):
        with pytest.raises(ValidationError):
            ProductItemService(session).create(_item_payload(stock, stock_in=-1), actor_id)

    def test_stock_must_hold_batch_of_product(self, session, catalog, stock, actor_id):
        with pytest.raises(ValidationError):
            ProductItemService(session).create(
                _item_payload(stock, product_id=catalog.other_product.id, stock_in=1), actor_id
            )

    def test_unknown_stock_is_not_found(self, session, stock, actor_id):
        with pytest.raises(NotFoundError):
            ProductItemService(session).create(_item_payload(stock, product_stock_id=999, stock_in=1), actor_id)


class TestItemUpdateDelete:
    @pytest.fixture
    def item(self, session, stock, actor_id):
        return ProductItemService(session).create(_item_payload(stock, stock_in=8), actor_id)

    def test_changing_side_rederives_quantity(self, session, item, actor_id):
        updated = ProductItemService(session).update(
            item.id, ProductItemUpdate(stock_in=0, stock_out=3), actor_id
        )
        assert updated.quantity == -3
        last = _tracks(session, item.id)[-1]
        assert last.action == "UPDATED"
        assert last.operation == "Out"

    def test_update_to_both_positive_is_rejected(self, session, item, actor_id):
        with pytest.raises(ValidationError):
            ProductItemService(session).update(item.id, ProductItemUpdate(stock_out=3), actor_id)
        session.refresh(item)
        assert item.stock_out is None
        assert len(_tracks(session, item.id)) == 1

    def test_quantity_only_update_keeps_derived_value(self, session, item, actor_id):
        updated = ProductItemService(session).update(item.id, ProductItemUpdate(quantity=999), actor_id)
        assert (updated.stock_in, updated.quantity) == (8, 8)
        assert _tracks(session, item.id)[-1].description == "Product item updated (no field changes detected)"

    def test_clearing_the_only_side_drops_derived_quantity(self, session, item, actor_id):
        updated = ProductItemService(session).update(item.id, ProductItemUpdate(stock_in=0), actor_id)
        assert updated.quantity is None

    def test_clearing_the_only_side_accepts_explicit_quantity(self, session, item, actor_id):
        updated = ProductItemService(session).update(item.id, ProductItemUpdate(stock_in=0, quantity=5), actor_id)
        assert updated.quantity == 5

    def test_explicit_quantity_without_movement(self, session, stock, actor_id):
        service = ProductItemService(session)
        item = service.create(_item_payload(stock, quantity=3), actor_id)
        assert service.update(item.id, ProductItemUpdate(description="recount"), actor_id).quantity == 3
        assert service.update(item.id, ProductItemUpdate(quantity=4), actor_id).quantity == 4

    def test_description_update_is_not_echoed(self, session, item, actor_id):
        ProductItemService(session).update(item.id, ProductItemUpdate(description="damaged pallet"), actor_id)
        assert _tracks(session, item.id)[-1].description == "Product item updated: added description"

    def test_delete_reverses_operation(self, session, item, actor_id):
        service = ProductItemService(session)
        service.delete(item.id, actor_id)
        last = _tracks(session, item.id)[-1]
        assert (last.action, last.operation, last.quantity) == ("DELETED", "Out", 8)
        assert service.list_by_stock(item.product_stock_id) == []

    def test_delete_then_restore_returns_same_row(self, session, item, other_actor_id):
        assert_restore_round_trip(ProductItemService(session), item, other_actor_id)

    def test_restore(self, session, item, actor_id):
        service = ProductItemService(session)
        service.delete(item.id, actor_id)
        restored = service.restore(item.id, actor_id)
        assert restored.deleted_at is None
        assert [t.action for t in _tracks(session, item.id)] == ["CREATED", "DELETED", "RESTORED"]


class TestItemListings:
    def test_filters(self, session, catalog, stock, actor_id):
        service = ProductItemService(session)
        item = service.create(_item_payload(stock, stock_in=2), actor_id)
        assert [i.id for i in service.list_by_stock(stock.id)] == [item.id]
        assert [i.id for i in service.list_by_product(catalog.product.id)] == [item.id]
        assert [i.id for i in service.list_by_batch(stock.product_batch_id)] == [item.id]
        assert service.list_by_product(catalog.other_product.id) == []
