"""Portal API HTTP client used by front-ends and scripts"""

import httpx
from typing import Any, List, Optional, Tuple
from urllib.parse import quote
from customer_portal.domain.models import Movement, Profile, Purchase
from customer_portal.domain.exceptions import PortalAPIError, RecordConflictError, RecordNotFoundError
from customer_portal.infrastructure.storage import json_codec
from customer_portal.config import settings


class PortalClient:
    """Async client for the customer portal API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.portal_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send one request and map error statuses to domain exceptions.

        Raises:
            RecordNotFoundError: On 404
            RecordConflictError: On 409
            PortalAPIError: On timeout, transport failure, or any other error status
        """
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.request(method, f"/v1{path}", **kwargs)
            except httpx.TimeoutException as e:
                raise PortalAPIError(f"Portal API timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                raise PortalAPIError(f"Portal API unreachable: {e}") from e

        if response.status_code == 404:
            raise RecordNotFoundError(f"{method} {path}: not found")
        if response.status_code == 409:
            raise RecordConflictError(_detail(response))
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PortalAPIError(f"Portal API error: {e.response.status_code}") from e
        return response

    # Purchases

    async def list_purchases(self, status: Optional[str] = None) -> List[Purchase]:
        params = {"status": status} if status else None
        response = await self._request("GET", "/purchases", params=params)
        return [Purchase.model_validate(p) for p in _json(response).get("purchases", [])]

    async def get_purchase(self, purchase_id: str) -> Purchase:
        response = await self._request("GET", f"/purchases/{_segment(purchase_id)}")
        return Purchase.model_validate(_json(response))

    async def create_purchase(self, purchase: Purchase) -> Purchase:
        response = await self._request("POST", "/purchases", **_body(purchase))
        return Purchase.model_validate(_json(response))

    async def update_purchase(self, purchase_id: str, purchase: Purchase) -> None:
        await self._request("PUT", f"/purchases/{_segment(purchase_id)}", **_body(purchase))

    async def delete_purchase(self, purchase_id: str) -> None:
        await self._request("DELETE", f"/purchases/{_segment(purchase_id)}")

    # Movements

    async def list_movements(self) -> List[Movement]:
        response = await self._request("GET", "/movements")
        return [Movement.model_validate(m) for m in _json(response).get("movements", [])]

    async def get_movement(self, index: int) -> Movement:
        response = await self._request("GET", f"/movements/{index}")
        return Movement.model_validate(_json(response))

    async def create_movement(self, movement: Movement) -> Tuple[Movement, int]:
        """Append a movement. Returns it with the index taken from the Location header."""
        response = await self._request("POST", "/movements", **_body(movement))
        index = int(response.headers["Location"].rsplit("/", 1)[-1])
        return Movement.model_validate(_json(response)), index

    async def update_movement(self, index: int, movement: Movement) -> None:
        await self._request("PUT", f"/movements/{index}", **_body(movement))

    async def delete_movement(self, index: int) -> None:
        await self._request("DELETE", f"/movements/{index}")

    # Profile

    async def get_profile(self) -> Profile:
        response = await self._request("GET", "/profile")
        return Profile.model_validate(_json(response))

    async def create_profile(self, profile: Profile) -> Profile:
        response = await self._request("POST", "/profile", **_body(profile))
        return Profile.model_validate(_json(response))

    async def save_profile(self, profile: Profile) -> None:
        await self._request("PUT", "/profile", **_body(profile))

    async def delete_profile(self) -> None:
        await self._request("DELETE", "/profile")


def _segment(value: str) -> str:
    """Quote an id as a single path segment (#, ?, % and / included)"""
    return quote(value, safe="")


def _body(record) -> dict:
    """Request kwargs sending the record as JSON with exact decimals"""
    return {
        "content": json_codec.dumps(record.model_dump(by_alias=True)).encode("utf-8"),
        "headers": {"Content-Type": "application/json"},
    }


def _json(response: httpx.Response) -> Any:
    return json_codec.loads(response.content)


def _detail(response: httpx.Response) -> str:
    try:
        return str(_json(response).get("detail", response.text))
    except ValueError:
        return response.text
