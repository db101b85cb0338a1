"""
Tests for ProductUnitService: barcode resolution, name uniqueness and
unit tracks.
"""

import pytest

from wms.exceptions import ConflictError, NotFoundError, ValidationError
from wms.models import ProductUnitTrack
from wms.schemas import ProductUnitCreate, ProductUnitUpdate
from wms.services import ProductUnitService

from conftest import assert_restore_round_trip

BARCODE = "8991002101012"


def _unit(catalog, **overrides):
    values = dict(
        product_id=catalog.product.id,
        location_id=catalog.location.id,
        name="Box",
        quantity=12,
        unit_price=24.0,
        barcode=BARCODE,
    )
    values.update(overrides)
    return ProductUnitCreate(**values)


@pytest.fixture
def unit(session, catalog, actor_id):
    return ProductUnitService(session).create(_unit(catalog), actor_id)


class TestBarcodeResolution:
    def test_barcode_of_another_product_conflicts(self, session, catalog, unit, actor_id):
        with pytest.raises(ConflictError, match="barcode belongs to another product"):
            ProductUnitService(session).create(
                _unit(catalog, product_id=catalog.other_product.id, name="Crate"), actor_id
            )

    def test_same_product_same_location_same_name_is_duplicate(self, session, catalog, unit, actor_id):
        with pytest.raises(ConflictError, match="duplicate unit"):
            ProductUnitService(session).create(_unit(catalog, name="box"), actor_id)

    def test_same_product_other_location_shares_barcode(self, session, catalog, unit, actor_id):
        service = ProductUnitService(session)
        other = service.create(_unit(catalog, location_id=catalog.other_location.id), actor_id)
        assert other.barcode == unit.barcode
        assert {u.id for u in service.get_by_barcode(BARCODE)} == {unit.id, other.id}

    def test_deleted_unit_releases_barcode(self, session, catalog, unit, actor_id):
        service = ProductUnitService(session)
        service.delete(unit.id, actor_id)
        crate = service.create(_unit(catalog, product_id=catalog.other_product.id, name="Crate"), actor_id)
        assert crate.barcode == BARCODE

    def test_restore_rechecks_barcode(self, session, catalog, unit, actor_id):
        service = ProductUnitService(session)
        service.delete(unit.id, actor_id)
        service.create(_unit(catalog, product_id=catalog.other_product.id, name="Crate"), actor_id)
        with pytest.raises(ConflictError):
            service.restore(unit.id, actor_id)

    def test_update_to_taken_barcode_conflicts(self, session, catalog, unit, actor_id):
        service = ProductUnitService(session)
        crate = service.create(
            _unit(catalog, product_id=catalog.other_product.id, name="Crate", barcode="111"), actor_id
        )
        with pytest.raises(ConflictError):
            service.update(crate.id, ProductUnitUpdate(barcode=BARCODE), actor_id)

    def test_get_by_unknown_barcode(self, session, catalog):
        with pytest.raises(NotFoundError):
            ProductUnitService(session).get_by_barcode("000")


class TestUnitValidation:
    def test_name_unique_per_product_and_location(self, session, catalog, unit, actor_id):
        with pytest.raises(ConflictError):
            ProductUnitService(session).create(_unit(catalog, name="BOX", barcode=None), actor_id)

    def test_deleted_name_still_reserved(self, session, catalog, unit, actor_id):
        service = ProductUnitService(session)
        service.delete(unit.id, actor_id)
        with pytest.raises(ConflictError):
            service.create(_unit(catalog, barcode=None), actor_id)

    def test_negative_price_is_rejected(self, session, catalog, actor_id):
        with pytest.raises(ValidationError):
            ProductUnitService(session).create(_unit(catalog, unit_price=-1), actor_id)

    def test_batch_must_belong_to_product(self, session, catalog, batch, actor_id):
        with pytest.raises(ValidationError):
            ProductUnitService(session).create(
                _unit(catalog, product_id=catalog.other_product.id, product_batch_id=batch.id, barcode=None),
                actor_id,
            )

    def test_unknown_location(self, session, catalog, actor_id):
        with pytest.raises(NotFoundError):
            ProductUnitService(session).create(_unit(catalog, location_id=999), actor_id)


class TestUnitTracks:
    def test_create_and_update_tracks(self, session, unit, actor_id):
        ProductUnitService(session).update(unit.id, ProductUnitUpdate(quantity=6, unit_price=12.0), actor_id)
        tracks = (
            session.query(ProductUnitTrack)
            .filter(ProductUnitTrack.product_unit_id == unit.id)
            .order_by(ProductUnitTrack.id)
            .all()
        )
        assert [(t.action, t.operation, t.quantity, t.stock) for t in tracks] == [
            ("CREATED", "Plus", 12, 12),
            ("UPDATED", "Minus", 6, 6),
        ]
        assert tracks[1].description == (
            "Product unit updated: changed quantity from 12.00 to 6.00, "
            "changed unit price from 24.00 to 12.00"
        )

    def test_listings_carry_names(self, session, catalog, unit):
        service = ProductUnitService(session)
        by_product = service.list_by_product(catalog.product.id)
        assert [u.id for u in by_product] == [unit.id]
        assert by_product[0].location_name == "Main Warehouse"
        assert service.list_by_location(catalog.other_location.id) == []

    def test_delete_then_restore_returns_same_row(self, session, unit, other_actor_id):
        assert_restore_round_trip(ProductUnitService(session), unit, other_actor_id)


class TestUnitChangeDescriptions:
    """Update descriptions mention exactly the fields whose values changed."""

    @pytest.mark.parametrize(
        "changes, expected",
        [
            ({"name": "Crate"}, "changed name from Box to Crate"),
            ({"name": "Box", "quantity": 24}, "changed quantity from 12.00 to 24.00"),
            ({"quantity": 12, "unit_price": 20.0}, "changed unit price from 24.00 to 20.00"),
            ({"unit_price": 24.0, "unit_price_retail": 30.0}, "changed retail unit price from 0.00 to 30.00"),
            ({"barcode": BARCODE, "description": "shrink-wrapped"}, "added description"),
            (
                {"name": "Pack", "unit_price": 24.0, "barcode": "8991002109999"},
                "changed name from Box to Pack, changed barcode from %s to 8991002109999" % BARCODE,
            ),
        ],
    )
    def test_only_changed_fields_are_described(self, session, unit, actor_id, changes, expected):
        ProductUnitService(session).update(unit.id, ProductUnitUpdate(**changes), actor_id)
        last = (
            session.query(ProductUnitTrack)
            .filter(ProductUnitTrack.product_unit_id == unit.id)
            .order_by(ProductUnitTrack.id.desc())
            .first()
        )
        assert last.description == "Product unit updated: " + expected

    def test_no_op_update_is_described_as_such(self, session, unit, actor_id):
        ProductUnitService(session).update(
            unit.id, ProductUnitUpdate(name="Box", quantity=12, unit_price=24.0, barcode=BARCODE), actor_id
        )
        last = (
            session.query(ProductUnitTrack)
            .filter(ProductUnitTrack.product_unit_id == unit.id)
            .order_by(ProductUnitTrack.id.desc())
            .first()
        )
        assert last.description == "Product unit updated (no field changes detected)"
