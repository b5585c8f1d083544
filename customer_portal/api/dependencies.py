"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request

from customer_portal.config import settings
from customer_portal.domain.movements import MovementService
from customer_portal.domain.profile import ProfileService
from customer_portal.domain.purchases import PurchaseService
from customer_portal.infrastructure.storage.record_store import RecordStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store() -> RecordStore:
    """Provide the JSON record store rooted at the configured data directory"""
    return RecordStore(settings.data_dir, locking=settings.collection_locking)


def get_purchase_service(store: RecordStore = Depends(get_record_store)) -> PurchaseService:
    return PurchaseService(store)


def get_movement_service(store: RecordStore = Depends(get_record_store)) -> MovementService:
    return MovementService(store)


def get_profile_service(store: RecordStore = Depends(get_record_store)) -> ProfileService:
    return ProfileService(store)
