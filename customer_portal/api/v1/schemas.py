"""Pydantic schemas for API responses that wrap domain records"""

from typing import List

from pydantic import BaseModel

from customer_portal.domain.models import Movement, Purchase


class PurchaseListResponse(BaseModel):
    """Response for GET /v1/purchases"""

    purchases: List[Purchase]


class MovementListResponse(BaseModel):
    """Response for GET /v1/movements"""

    movements: List[Movement]


class HealthResponse(BaseModel):
    """Response for GET /health"""

    status: str
    service: str
