"""Request and response classes that keep decimal prices exact over HTTP"""

from typing import Any, Callable, Coroutine, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from pydantic import BaseModel

from customer_portal.infrastructure.storage import json_codec


class DecimalJSONRequest(Request):
    """Request whose JSON body parses non-integer numbers as Decimal"""

    async def json(self) -> Any:
        if not hasattr(self, "_json"):
            self._json = json_codec.loads(await self.body())
        return self._json


class PortalRoute(APIRoute):
    """Route that hands its endpoint a DecimalJSONRequest"""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            request = DecimalJSONRequest(request.scope, request.receive)
            return await original_route_handler(request)

        return custom_route_handler


class PortalJSONResponse(JSONResponse):
    """JSON response that writes Decimal values as exact numbers"""

    def render(self, content: Any) -> bytes:
        return json_codec.dumps(content).encode("utf-8")


def record_response(
    record: BaseModel,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> PortalJSONResponse:
    """Render a record (or a list wrapper) in its camelCase wire form"""
    return PortalJSONResponse(
        content=record.model_dump(by_alias=True),
        status_code=status_code,
        headers=headers,
    )
