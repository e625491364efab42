"""
Domain errors raised by the SellerSync services.

Every failure surfaced by the core maps to exactly one of four kinds:

    SellerSyncError (base)
    |
    +-- ValidationError      required field missing or malformed
    +-- NotFoundError        referenced entity id does not exist
    +-- ConflictStateError   operation illegal in the entity's current state
    +-- PersistenceFailure   the store rejected or aborted the transaction

Each exception carries a machine-readable ``code`` plus structured data so
the HTTP layer can translate it without parsing messages. Services never
raise ``HTTPException`` outside the auth boundary; see ``sellersync.main`` for
the status mapping.
"""
from typing import Any, Optional


class SellerSyncError(Exception):
    """Base class for all domain errors."""

    code: str = "SELLERSYNC_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, **data: Any):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.data = data


class ValidationError(SellerSyncError):
    code = "VALIDATION_ERROR"


class NotFoundError(SellerSyncError):
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any = None, message: Optional[str] = None):
        super().__init__(
            message or f"{entity} not found.",
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
        )
        self.entity = entity
        self.entity_id = entity_id


class ConflictStateError(SellerSyncError):
    code = "CONFLICT_STATE"


class PersistenceFailure(SellerSyncError):
    code = "PERSISTENCE_FAILURE"
