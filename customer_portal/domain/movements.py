"""Movements collection - records addressed by 0-based position"""

from typing import List, Tuple

from pydantic import ValidationError

from customer_portal.domain.exceptions import RecordNotFoundError, StoreCorruptedError
from customer_portal.domain.models import Movement, MovementsDocument
from customer_portal.infrastructure.storage.record_store import CollectionKind, RecordStore

KIND = CollectionKind.MOVEMENTS


def _check_index(document: MovementsDocument, index: int) -> None:
    if index < 0 or index >= len(document.movements):
        raise RecordNotFoundError(f"Movement {index} not found")


class MovementService:
    """
    Positional access to the movements document.

    Indices are not stable: deleting a movement shifts every later one down
    by one, so an index returned by create only holds until the next delete.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def _load(self) -> MovementsDocument:
        raw = self.store.load(KIND)
        if raw is None:
            return MovementsDocument()
        try:
            return MovementsDocument.model_validate(raw)
        except ValidationError as e:
            raise StoreCorruptedError(KIND.value, f"unexpected document shape: {e}") from e

    def _save(self, document: MovementsDocument) -> None:
        self.store.save(KIND, document.model_dump(by_alias=True))

    def list_all(self) -> List[Movement]:
        return self._load().movements

    def get_by_index(self, index: int) -> Movement:
        document = self._load()
        _check_index(document, index)
        return document.movements[index]

    def create(self, movement: Movement) -> Tuple[Movement, int]:
        """Append a movement. Returns it together with its current index."""
        with self.store.lock(KIND):
            document = self._load()
            document.movements.append(movement)
            self._save(document)
            index = len(document.movements) - 1
        return movement, index

    def update_by_index(self, index: int, movement: Movement) -> None:
        with self.store.lock(KIND):
            document = self._load()
            _check_index(document, index)
            document.movements[index] = movement
            self._save(document)

    def delete_by_index(self, index: int) -> None:
        with self.store.lock(KIND):
            document = self._load()
            _check_index(document, index)
            del document.movements[index]
            self._save(document)
