"""/v1/movements - CRUD over the movements collection, addressed by index"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from customer_portal.api.dependencies import get_movement_service, get_request_id
from customer_portal.api.routing import PortalRoute
from customer_portal.api.v1.schemas import MovementListResponse
from customer_portal.domain.exceptions import RecordNotFoundError
from customer_portal.domain.models import Movement
from customer_portal.domain.movements import MovementService
from customer_portal.infrastructure.observability.logging import log_mutation
from customer_portal.infrastructure.observability.metrics import record_mutation

router = APIRouter(route_class=PortalRoute)

COLLECTION = "movements"


@router.get("/movements", response_model=MovementListResponse)
def list_movements(service: MovementService = Depends(get_movement_service)):
    return MovementListResponse(movements=service.list_all())


@router.get("/movements/{index}", response_model=Movement)
def get_movement(index: int, service: MovementService = Depends(get_movement_service)):
    """Fetch the movement at a 0-based position"""
    try:
        return service.get_by_index(index)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Movement not found")


@router.post("/movements", response_model=Movement, status_code=status.HTTP_201_CREATED)
def create_movement(
    movement: Movement,
    request: Request,
    response: Response,
    service: MovementService = Depends(get_movement_service),
):
    """
    Append a movement.

    The Location header carries the index it was stored at. That index
    shifts if an earlier movement is deleted later.
    """
    created, index = service.create(movement)

    record_mutation(COLLECTION, "create")
    log_mutation(get_request_id(request), COLLECTION, "create", str(index))
    response.headers["Location"] = f"/v1/movements/{index}"
    return created


@router.put("/movements/{index}", status_code=status.HTTP_204_NO_CONTENT)
def update_movement(
    index: int,
    movement: Movement,
    request: Request,
    service: MovementService = Depends(get_movement_service),
):
    try:
        service.update_by_index(index, movement)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Movement not found")

    record_mutation(COLLECTION, "update")
    log_mutation(get_request_id(request), COLLECTION, "update", str(index))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/movements/{index}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movement(
    index: int,
    request: Request,
    service: MovementService = Depends(get_movement_service),
):
    try:
        service.delete_by_index(index)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Movement not found")

    record_mutation(COLLECTION, "delete")
    log_mutation(get_request_id(request), COLLECTION, "delete", str(index))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
