import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventsystem.errors import DomainError, StorageFaultError

logger = logging.getLogger(__name__)

STORAGE_FAULT_MESSAGE = (
    "An error occurred while processing your request. Please try again later."
)


@contextmanager
def storage_errors(db: Session, action: str):
    """
    Translate database failures raised inside the block into StorageFaultError.

    Domain errors pass through untouched. The session is rolled back and the
    failure is logged before the generic error is raised; nothing is retried.
    """
    try:
        yield
    except DomainError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Database failure while {action}")
        raise StorageFaultError(STORAGE_FAULT_MESSAGE) from e
