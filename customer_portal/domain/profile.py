"""Profile singleton - the customer's personal data, stored as one flat document"""

from pydantic import ValidationError

from customer_portal.domain.exceptions import RecordConflictError, RecordNotFoundError, StoreCorruptedError
from customer_portal.domain.models import Profile
from customer_portal.infrastructure.storage.record_store import CollectionKind, RecordStore

KIND = CollectionKind.PROFILE


class ProfileService:
    """Existence-sensitive access to the profile: no file means not yet configured"""

    def __init__(self, store: RecordStore):
        self.store = store

    def get(self) -> Profile:
        raw = self.store.load(KIND)
        if raw is None:
            raise RecordNotFoundError("Profile has not been set")
        try:
            return Profile.model_validate(raw)
        except ValidationError as e:
            raise StoreCorruptedError(KIND.value, f"unexpected document shape: {e}") from e

    def create(self, profile: Profile) -> Profile:
        with self.store.lock(KIND):
            if self.store.exists(KIND):
                raise RecordConflictError("Profile already exists. Use PUT to update.")
            self._save(profile)
        return profile

    def upsert(self, profile: Profile) -> Profile:
        """Write the profile whether or not one exists"""
        with self.store.lock(KIND):
            self._save(profile)
        return profile

    def delete(self) -> None:
        with self.store.lock(KIND):
            if not self.store.delete(KIND):
                raise RecordNotFoundError("Profile has not been set")

    def _save(self, profile: Profile) -> None:
        self.store.save(KIND, profile.model_dump(by_alias=True))
