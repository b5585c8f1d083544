"""Unit tests for the purchases collection"""

from decimal import Decimal
import pytest
from customer_portal.domain.exceptions import RecordConflictError, RecordNotFoundError, StoreCorruptedError
from customer_portal.domain.models import Purchase
from customer_portal.domain.purchases import PurchaseService
from customer_portal.infrastructure.storage.record_store import CollectionKind


@pytest.fixture
def service(store) -> PurchaseService:
    return PurchaseService(store)


@pytest.fixture
def seeded(service: PurchaseService, sample_purchases) -> PurchaseService:
    for purchase in sample_purchases:
        service.create(purchase)
    return service


def test_empty_when_no_file(service: PurchaseService):
    assert service.list_all() == []


def test_list_preserves_insertion_order(seeded: PurchaseService, sample_purchases):
    assert seeded.list_all() == sample_purchases


def test_status_filter_is_exact_and_case_insensitive(seeded: PurchaseService):
    """'Delivered late' must not match a 'delivered' filter"""
    result = seeded.list_all("delivered")

    assert [p.id for p in result] == ["A-100", "A-102"]


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_blank_status_filter_returns_everything(seeded: PurchaseService, sample_purchases, blank):
    assert seeded.list_all(blank) == sample_purchases


def test_status_filter_without_matches(seeded: PurchaseService):
    assert seeded.list_all("cancelled") == []


@pytest.mark.parametrize("lookup", ["A-101", "a-101"])
def test_get_by_id_ignores_case(seeded: PurchaseService, sample_purchases, lookup):
    assert seeded.get_by_id(lookup) == sample_purchases[1]


def test_get_unknown_id(seeded: PurchaseService):
    with pytest.raises(RecordNotFoundError):
        seeded.get_by_id("A-999")


def test_create_persists(service: PurchaseService, store):
    service.create(Purchase(id="X1", price=Decimal("10.10"), status="new"))

    assert store.load(CollectionKind.PURCHASES) == {
        "purchases": [{"id": "X1", "price": Decimal("10.1"), "status": "new"}]
    }


def test_create_conflicts_on_id_differing_only_in_case(service: PurchaseService):
    service.create(Purchase(id="abc", price=Decimal("1"), status="x"))

    with pytest.raises(RecordConflictError):
        service.create(Purchase(id="ABC", price=Decimal("2"), status="y"))

    assert len(service.list_all()) == 1


def test_update_keeps_position_and_path_id(seeded: PurchaseService):
    seeded.update("a-101", Purchase(id="SOMETHING-ELSE", price=Decimal("120"), status="paid"))

    purchases = seeded.list_all()
    assert purchases[1] == Purchase(id="a-101", price=Decimal("120"), status="paid")
    assert [p.id for p in purchases] == ["A-100", "a-101", "A-102", "A-103"]


def test_update_unknown_id(seeded: PurchaseService, sample_purchases):
    with pytest.raises(RecordNotFoundError):
        seeded.update("nope", Purchase(id="nope"))

    assert seeded.list_all() == sample_purchases


def test_delete_then_get_is_not_found(seeded: PurchaseService):
    assert seeded.delete("A-102") == 1

    with pytest.raises(RecordNotFoundError):
        seeded.get_by_id("A-102")
    assert [p.id for p in seeded.list_all()] == ["A-100", "A-101", "A-103"]


def test_delete_removes_every_match(store, service: PurchaseService):
    # Duplicates can only come from a hand-edited file
    store.save(CollectionKind.PURCHASES, {"purchases": [{"id": "dup"}, {"id": "other"}, {"id": "DUP"}]})

    assert service.delete("Dup") == 2
    assert [p.id for p in service.list_all()] == ["other"]


def test_delete_unknown_id(service: PurchaseService):
    with pytest.raises(RecordNotFoundError):
        service.delete("missing")


def test_wrong_document_shape(store, service: PurchaseService):
    store.save(CollectionKind.PURCHASES, {"purchases": "not a list"})

    with pytest.raises(StoreCorruptedError):
        service.list_all()


def test_round_trip_is_lossless(seeded: PurchaseService, store):
    seeded.create(Purchase(id="HP", price=Decimal("12345678901234.123456789"), status="open"))
    seeded.create(Purchase(id="BIG", price=Decimal("1E+400"), status="open"))
    before = seeded.list_all()
    seeded._save(seeded._load())

    after = seeded.list_all()
    assert after == before
    assert [str(p.price) for p in after] == [str(p.price) for p in before]
    assert seeded.get_by_id("hp").price == Decimal("12345678901234.123456789")


def test_ids_equal_only_under_full_case_folding_are_distinct(service: PurchaseService):
    service.create(Purchase(id="straße"))
    service.create(Purchase(id="STRASSE"))

    assert service.get_by_id("STRAßE").id == "straße"
    assert service.get_by_id("strasse").id == "STRASSE"


def test_id_with_url_characters(service: PurchaseService):
    service.create(Purchase(id="A"))
    service.create(Purchase(id="A#1/50%?x"))

    assert service.get_by_id("a#1/50%?X").id == "A#1/50%?x"
