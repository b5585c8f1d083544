"""/v1/purchases - CRUD over the purchases collection"""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from customer_portal.api.dependencies import get_purchase_service, get_request_id
from customer_portal.api.routing import PortalRoute, record_response
from customer_portal.api.v1.schemas import PurchaseListResponse
from customer_portal.domain.exceptions import RecordConflictError, RecordNotFoundError
from customer_portal.domain.models import Purchase
from customer_portal.domain.purchases import PurchaseService
from customer_portal.infrastructure.observability.logging import log_mutation
from customer_portal.infrastructure.observability.metrics import record_mutation

router = APIRouter(route_class=PortalRoute)

COLLECTION = "purchases"


@router.get("/purchases", response_model=PurchaseListResponse)
def list_purchases(
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status, case-insensitive"),
    service: PurchaseService = Depends(get_purchase_service),
):
    """List purchases in insertion order, optionally filtered by status"""
    return record_response(PurchaseListResponse(purchases=service.list_all(status_filter)))


@router.get("/purchases/{purchase_id:path}", response_model=Purchase)
def get_purchase(purchase_id: str, service: PurchaseService = Depends(get_purchase_service)):
    try:
        purchase = service.get_by_id(purchase_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Purchase not found")

    return record_response(purchase)


@router.post("/purchases", response_model=Purchase, status_code=status.HTTP_201_CREATED)
def create_purchase(
    purchase: Purchase,
    request: Request,
    service: PurchaseService = Depends(get_purchase_service),
):
    """Add a purchase. Ids are unique ignoring case."""
    try:
        created = service.create(purchase)
    except RecordConflictError as e:
        logging.warning(f"Purchase conflict: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=409, detail=str(e))

    record_mutation(COLLECTION, "create")
    log_mutation(get_request_id(request), COLLECTION, "create", created.id)
    return record_response(
        created,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/v1/purchases/{quote(created.id, safe='')}"},
    )


@router.put("/purchases/{purchase_id:path}", status_code=status.HTTP_204_NO_CONTENT)
def update_purchase(
    purchase_id: str,
    purchase: Purchase,
    request: Request,
    service: PurchaseService = Depends(get_purchase_service),
):
    """Replace a purchase. Any id in the body is overridden by the path id."""
    try:
        service.update(purchase_id, purchase)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Purchase not found")

    record_mutation(COLLECTION, "update")
    log_mutation(get_request_id(request), COLLECTION, "update", purchase_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/purchases/{purchase_id:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_purchase(
    purchase_id: str,
    request: Request,
    service: PurchaseService = Depends(get_purchase_service),
):
    try:
        service.delete(purchase_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Purchase not found")

    record_mutation(COLLECTION, "delete")
    log_mutation(get_request_id(request), COLLECTION, "delete", purchase_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
