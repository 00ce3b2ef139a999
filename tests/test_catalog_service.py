"""
Entity store: CRUD, ids, validation and the restrict-on-delete policy
"""
from datetime import date

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from stockroom.core import NotFound, ValidationFailure, ReferencedByOthers, StorageFailure
from stockroom.models import Product
from stockroom.schemas import (
    ProductCreate, RackCreate, ContainerCreate, MeasurementCreate, EntryCreate
)
from stockroom.services import (
    ProductService, RackService, ContainerService, MeasurementService,
    InwardService, OutwardService
)
from stockroom.services.catalog_service import product_name, rack_number, container_type


def make_product(db, name="Widget", rack="R1", opening_stock=0, measurement="PCS"):
    return ProductService.add(db, ProductCreate(
        name=name, rack=rack, opening_stock=opening_stock, measurement=measurement
    ))


def make_entry(product_id, quantity=1, **kwargs):
    return EntryCreate(product_id=product_id, quantity=quantity, date=date(2025, 5, 1), **kwargs)


def test_add_assigns_id_and_persists(db):
    product = make_product(db, "Widget", opening_stock=4)

    assert product.id is not None
    stored = ProductService.get(db, product.id)
    assert stored.name == "Widget"
    assert stored.opening_stock == 4


def test_get_missing_returns_none(db):
    assert ProductService.get(db, 12345) is None


def test_list_returns_records_in_insertion_order(db):
    names = ["Bolt", "Anchor", "Clamp"]
    for name in names:
        make_product(db, name)

    assert [p.name for p in ProductService.list(db)] == names


def test_list_returns_a_fresh_sequence(db):
    make_product(db, "Bolt")
    first = ProductService.list(db)
    first.clear()

    assert len(ProductService.list(db)) == 1


def test_edits_to_returned_records_are_never_stored(db, session_factory):
    product = make_product(db, "Widget", opening_stock=4)

    listed = ProductService.list(db)[0]
    listed.name = "Changed"
    listed.opening_stock = 999
    fetched = ProductService.get(db, product.id)
    fetched.rack = "Elsewhere"
    product.remark = "edited after add"

    # Unrelated writes through the same session
    RackService.add(db, RackCreate(number="X1"))
    InwardService.add(db, make_entry(product.id))

    other = session_factory()
    try:
        stored = other.get(Product, product.id)
        assert (stored.name, stored.opening_stock, stored.rack, stored.remark) == ("Widget", 4, "R1", None)
    finally:
        other.close()


def test_update_writes_only_the_new_values(db):
    product = make_product(db, "Widget", rack="R1", opening_stock=2)
    listed = ProductService.list(db)[0]
    listed.opening_stock = 500

    ProductService.update(db, product.id, ProductCreate(name="Widget", rack="R3", opening_stock=3))

    stored = ProductService.get(db, product.id)
    assert (stored.rack, stored.opening_stock) == ("R3", 3)


def test_ids_are_never_reused_after_delete(db):
    first = make_product(db, "First")
    second = make_product(db, "Second")
    assert ProductService.delete(db, second.id) is True

    third = make_product(db, "Third")
    assert third.id > second.id > first.id


def test_update_replaces_fields(db):
    product = make_product(db, "Widget", rack="R1", opening_stock=2)

    updated = ProductService.update(db, product.id, ProductCreate(
        name="Widget XL", rack="R2", weight_per_piece=1.5, measurement="KGS", opening_stock=7
    ))

    assert updated.id == product.id
    assert updated.name == "Widget XL"
    assert updated.rack == "R2"
    assert updated.remark is None
    assert ProductService.get(db, product.id).opening_stock == 7


def test_update_missing_raises_not_found(db):
    with pytest.raises(NotFound):
        ProductService.update(db, 999, ProductCreate(name="Ghost"))


def test_delete_missing_returns_false(db):
    assert ProductService.delete(db, 999) is False


def test_blank_names_are_rejected_by_schema():
    with pytest.raises(ValidationError):
        ProductCreate(name="   ")
    with pytest.raises(ValidationError):
        ProductCreate(name="Widget", opening_stock=-1)
    with pytest.raises(ValidationError):
        ContainerCreate(type="Bag", weight=-0.5)


def test_entry_quantity_must_be_positive():
    with pytest.raises(ValidationError):
        make_entry(1, quantity=0)


def test_entry_for_missing_product_is_rejected(db):
    with pytest.raises(ValidationFailure):
        InwardService.add(db, make_entry(42))
    assert InwardService.count(db) == 0


def test_entry_for_missing_rack_or_container_is_rejected(db):
    product = make_product(db)
    with pytest.raises(ValidationFailure):
        InwardService.add(db, make_entry(product.id, rack_id=77))
    with pytest.raises(ValidationFailure):
        OutwardService.add(db, make_entry(product.id, container_id=77))


def test_entry_net_weight_is_derived_when_omitted(db):
    product = make_product(db)
    crate = ContainerService.add(db, ContainerCreate(type="Crate", weight=2.0))

    entry = InwardService.add(db, make_entry(
        product.id, container_id=crate.id, container_quantity=2, gross_weight=10.0
    ))
    assert entry.net_weight == 6.0


def test_entry_net_weight_can_be_overridden(db):
    product = make_product(db)
    crate = ContainerService.add(db, ContainerCreate(type="Crate", weight=2.0))

    entry = InwardService.add(db, make_entry(
        product.id, container_id=crate.id, container_quantity=2, gross_weight=10.0, net_weight=7.25
    ))
    assert entry.net_weight == 7.25


def test_duplicate_rack_number_is_rejected(db):
    rack = RackService.add(db, RackCreate(number="A1"))
    with pytest.raises(ValidationFailure):
        RackService.add(db, RackCreate(number="A1"))

    # Saving a rack under its own number is fine
    RackService.update(db, rack.id, RackCreate(number="A1", remark="top shelf"))


def test_deleting_product_with_entries_is_blocked(db):
    product = make_product(db, "Laptop", opening_stock=10)
    inward = InwardService.add(db, make_entry(product.id, quantity=5))

    with pytest.raises(ReferencedByOthers):
        ProductService.delete(db, product.id)

    assert ProductService.get(db, product.id) is not None
    assert InwardService.get(db, inward.id) is not None


def test_deleting_product_after_its_entries_are_gone(db):
    product = make_product(db)
    outward = OutwardService.add(db, make_entry(product.id))

    assert OutwardService.delete(db, outward.id) is True
    assert ProductService.delete(db, product.id) is True


def test_deleting_referenced_rack_container_or_measurement_is_blocked(db):
    rack = RackService.add(db, RackCreate(number="Z9"))
    container = ContainerService.add(db, ContainerCreate(type="Bag", weight=0.5))
    measurement = MeasurementService.add(db, MeasurementCreate(type="KGS"))
    product = make_product(db, rack="Z9", measurement="KGS")
    InwardService.add(db, make_entry(product.id, rack_id=rack.id, container_id=container.id))

    with pytest.raises(ReferencedByOthers):
        RackService.delete(db, rack.id)
    with pytest.raises(ReferencedByOthers):
        ContainerService.delete(db, container.id)
    with pytest.raises(ReferencedByOthers):
        MeasurementService.delete(db, measurement.id)


def test_unreferenced_master_data_can_be_deleted(db):
    rack = RackService.add(db, RackCreate(number="Z9"))
    container = ContainerService.add(db, ContainerCreate(type="Op1", weight=1.0))
    measurement = MeasurementService.add(db, MeasurementCreate(type="Loose"))

    assert RackService.delete(db, rack.id) is True
    assert ContainerService.delete(db, container.id) is True
    assert MeasurementService.delete(db, measurement.id) is True


def test_list_filtered_by_product_date_and_search(db):
    laptop = make_product(db, "Laptop")
    phone = make_product(db, "Phone")
    InwardService.add(db, EntryCreate(product_id=laptop.id, quantity=1, date=date(2025, 4, 1)))
    InwardService.add(db, EntryCreate(product_id=phone.id, quantity=2, date=date(2025, 4, 10)))
    InwardService.add(db, EntryCreate(product_id=laptop.id, quantity=3, date=date(2025, 4, 20)))

    assert [e.quantity for e in InwardService.list_filtered(db, product_id=laptop.id)] == [1, 3]
    assert [e.quantity for e in InwardService.list_filtered(db, date_from=date(2025, 4, 10))] == [2, 3]
    assert [e.quantity for e in InwardService.list_filtered(db, date_to=date(2025, 4, 10))] == [1, 2]
    assert [e.quantity for e in InwardService.list_filtered(db, search="PHO")] == [2]


def test_describe_falls_back_to_unknown_labels(db):
    product = make_product(db, "Laptop")
    entry = InwardService.add(db, make_entry(product.id))

    row = InwardService.describe(db, [entry])[0]
    assert row["product_name"] == "Laptop"
    assert row["rack_number"] == "Unknown"
    assert row["container_type"] == "Unknown"


def test_presentation_helpers_never_fail(db):
    rack = RackService.add(db, RackCreate(number="B7"))

    assert product_name(db, 404) == "Unknown Product"
    assert rack_number(db, rack.id) == "B7"
    assert rack_number(db, None) == "Unknown"
    assert container_type(db, 404) == "Unknown"


def test_storage_failure_is_raised_and_rolled_back(db, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", broken_commit)

    with pytest.raises(StorageFailure):
        make_product(db, "Lost")

    monkeypatch.undo()
    assert db.query(Product).count() == 0


def test_renaming_a_rack_moves_its_products(db):
    rack = RackService.add(db, RackCreate(number="A1"))
    product = make_product(db, "Drill", rack="A1")
    untouched = make_product(db, "Saw", rack="B1")

    RackService.update(db, rack.id, RackCreate(number="Z1"))

    assert ProductService.get(db, product.id).rack == "Z1"
    assert ProductService.get(db, untouched.id).rack == "B1"
    with pytest.raises(ReferencedByOthers):
        RackService.delete(db, rack.id)
    assert RackService.get(db, rack.id).number == "Z1"


def test_renaming_a_measurement_moves_its_products(db):
    measurement = MeasurementService.add(db, MeasurementCreate(type="KGS"))
    product = make_product(db, "Rice", measurement="KGS")

    MeasurementService.update(db, measurement.id, MeasurementCreate(type="KG"))

    assert ProductService.get(db, product.id).measurement == "KG"
    with pytest.raises(ReferencedByOthers):
        MeasurementService.delete(db, measurement.id)


def test_renaming_a_shared_measurement_label_keeps_products(db):
    first = MeasurementService.add(db, MeasurementCreate(type="PCS"))
    MeasurementService.add(db, MeasurementCreate(type="PCS"))
    product = make_product(db, "Bolt", measurement="PCS")

    MeasurementService.update(db, first.id, MeasurementCreate(type="EA"))

    assert ProductService.get(db, product.id).measurement == "PCS"
