"""
Unit-of-work helper shared by the services.
"""
from contextlib import contextmanager
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sellersync.common.exceptions import ConflictStateError, PersistenceFailure, SellerSyncError

logger = logging.getLogger(__name__)


@contextmanager
def committing(db: Session, action: str):
    """
    Run the block as one transaction: commit on success, roll back on any
    failure. SQLAlchemy errors surface as PersistenceFailure (or
    ConflictStateError for integrity violations); domain errors pass through
    unchanged.
    """
    try:
        yield db
        db.commit()
    except SellerSyncError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error while {action}: {e.orig}")
        raise ConflictStateError(f"Integrity error while {action}.", code="INTEGRITY_ERROR") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error while {action}: {str(e)}", exc_info=True)
        raise PersistenceFailure(f"Error while {action}.") from e
