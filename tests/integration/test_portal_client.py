"""Integration tests for the portal HTTP client against the in-process API"""

from decimal import Decimal
import httpx
import pytest
from customer_portal.domain.exceptions import PortalAPIError, RecordConflictError, RecordNotFoundError
from customer_portal.domain.models import Movement, Purchase
from customer_portal.infrastructure.clients.portal import PortalClient


@pytest.fixture
def portal(app) -> PortalClient:
    return PortalClient(base_url="http://portal.test", transport=httpx.ASGITransport(app=app))


async def test_purchase_round_trip(portal: PortalClient):
    purchase = Purchase(id="P-9", price=Decimal("45.5"), status="Open")

    assert await portal.create_purchase(purchase) == purchase
    assert await portal.get_purchase("p-9") == purchase

    with pytest.raises(RecordConflictError):
        await portal.create_purchase(purchase)

    await portal.update_purchase("P-9", Purchase(id="P-9", price=Decimal("50"), status="Closed"))
    assert await portal.list_purchases(status="closed") == [Purchase(id="P-9", price=Decimal("50"), status="Closed")]

    await portal.delete_purchase("P-9")
    with pytest.raises(RecordNotFoundError):
        await portal.get_purchase("P-9")


async def test_movement_index_from_location(portal: PortalClient, sample_movements):
    indices = []
    for movement in sample_movements:
        _, index = await portal.create_movement(movement)
        indices.append(index)

    assert indices == [0, 1, 2]
    assert await portal.list_movements() == sample_movements

    await portal.delete_movement(0)
    assert await portal.get_movement(0) == sample_movements[1]

    with pytest.raises(RecordNotFoundError):
        await portal.update_movement(5, Movement())


async def test_profile_flow(portal: PortalClient, sample_profile):
    with pytest.raises(RecordNotFoundError):
        await portal.get_profile()

    await portal.create_profile(sample_profile)
    with pytest.raises(RecordConflictError):
        await portal.create_profile(sample_profile)

    await portal.save_profile(sample_profile.model_copy(update={"phone2": "555"}))
    assert (await portal.get_profile()).phone2 == "555"

    await portal.delete_profile()
    with pytest.raises(RecordNotFoundError):
        await portal.delete_profile()


async def test_server_error_maps_to_portal_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "Storage unavailable"})

    portal = PortalClient(base_url="http://portal.test", transport=httpx.MockTransport(handler))

    with pytest.raises(PortalAPIError):
        await portal.list_movements()


async def test_transport_failure_maps_to_portal_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    portal = PortalClient(base_url="http://portal.test", transport=httpx.MockTransport(handler))

    with pytest.raises(PortalAPIError):
        await portal.get_profile()


async def test_ids_with_url_characters_are_escaped(portal: PortalClient):
    await portal.create_purchase(Purchase(id="A", price=Decimal("1"), status="x"))
    tricky = Purchase(id="A#1/50%?x", price=Decimal("2"), status="y")
    await portal.create_purchase(tricky)

    assert await portal.get_purchase("A#1/50%?x") == tricky

    await portal.update_purchase("A#1/50%?x", Purchase(id="A#1/50%?x", price=Decimal("3"), status="y"))
    assert (await portal.get_purchase("a#1/50%?X")).price == Decimal("3")

    await portal.delete_purchase("A#1/50%?x")
    assert [p.id for p in await portal.list_purchases()] == ["A"]


async def test_high_precision_price_round_trip(portal: PortalClient):
    purchase = Purchase(id="HP", price=Decimal("12345678901234.123456789"), status="open")

    await portal.create_purchase(purchase)

    fetched = await portal.get_purchase("HP")
    assert str(fetched.price) == "12345678901234.123456789"
