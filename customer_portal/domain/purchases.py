"""Purchases collection - records addressed by case-insensitive id"""

from typing import List, Optional

from pydantic import ValidationError

from customer_portal.domain.exceptions import RecordConflictError, RecordNotFoundError, StoreCorruptedError
from customer_portal.domain.models import Purchase, PurchasesDocument
from customer_portal.infrastructure.storage.record_store import CollectionKind, RecordStore

KIND = CollectionKind.PURCHASES


class PurchaseService:
    """Filter, lookup and mutation of the purchases document"""

    def __init__(self, store: RecordStore):
        self.store = store

    def _load(self) -> PurchasesDocument:
        raw = self.store.load(KIND)
        if raw is None:
            return PurchasesDocument()
        try:
            return PurchasesDocument.model_validate(raw)
        except ValidationError as e:
            raise StoreCorruptedError(KIND.value, f"unexpected document shape: {e}") from e

    def _save(self, document: PurchasesDocument) -> None:
        self.store.save(KIND, document.model_dump(by_alias=True))

    def list_all(self, status: Optional[str] = None) -> List[Purchase]:
        """
        Return every purchase in insertion order.

        A non-blank status keeps only purchases whose status equals it,
        ignoring case. Substrings do not match.
        """
        purchases = self._load().purchases
        if status is None or not status.strip():
            return purchases
        wanted = status.lower()
        return [p for p in purchases if p.status.lower() == wanted]

    def get_by_id(self, purchase_id: str) -> Purchase:
        for purchase in self._load().purchases:
            if purchase.matches_id(purchase_id):
                return purchase
        raise RecordNotFoundError(f"Purchase '{purchase_id}' not found")

    def create(self, purchase: Purchase) -> Purchase:
        with self.store.lock(KIND):
            document = self._load()
            if any(p.matches_id(purchase.id) for p in document.purchases):
                raise RecordConflictError(f"Purchase with id '{purchase.id}' already exists.")
            document.purchases.append(purchase)
            self._save(document)
        return purchase

    def update(self, purchase_id: str, purchase: Purchase) -> Purchase:
        """Replace the purchase in place. The stored id is always the one addressed."""
        with self.store.lock(KIND):
            document = self._load()
            for position, existing in enumerate(document.purchases):
                if existing.matches_id(purchase_id):
                    break
            else:
                raise RecordNotFoundError(f"Purchase '{purchase_id}' not found")

            updated = purchase.model_copy(update={"id": purchase_id})
            document.purchases[position] = updated
            self._save(document)
        return updated

    def delete(self, purchase_id: str) -> int:
        """Remove every purchase matching the id. Returns how many were removed."""
        with self.store.lock(KIND):
            document = self._load()
            kept = [p for p in document.purchases if not p.matches_id(purchase_id)]
            removed = len(document.purchases) - len(kept)
            if removed == 0:
                raise RecordNotFoundError(f"Purchase '{purchase_id}' not found")
            document.purchases = kept
            self._save(document)
        return removed
