"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RecordNotFoundError(DomainException):
    """Referenced record (or the profile singleton) does not exist"""

    pass


class RecordConflictError(DomainException):
    """Create would violate an id uniqueness or singleton existence rule"""

    pass


class StoreError(DomainException):
    """Backing file could not be read or written"""

    def __init__(self, collection: str, message: str):
        super().__init__(f"{collection}: {message}")
        self.collection = collection


class StoreCorruptedError(StoreError):
    """Backing file exists but does not parse into the expected document"""

    pass


class PortalAPIError(DomainException):
    """Portal API returned an unexpected error or is unavailable"""

    pass
