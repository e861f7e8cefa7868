import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

import eventsystem.repositories.booking as booking_repo
import eventsystem.repositories.event as event_repo
from eventsystem.db.models.event import Event as EventModel
from eventsystem.domain.dependency_guard import EVENT_HAS_BOOKINGS, DependencyGuard
from eventsystem.errors import DependencyError, DomainValidationError, NotFoundError
from eventsystem.services.storage import storage_errors

logger = logging.getLogger(__name__)


def list_events(db: Session) -> list[EventModel]:
    with storage_errors(db, "listing events"):
        return event_repo.get_all_events(db)


def get_event(db: Session, event_id: int) -> EventModel:
    with storage_errors(db, f"retrieving event {event_id}"):
        event = event_repo.get_event_by_id(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


def create_event(
    db: Session, name: str, event_date: date, description: str
) -> EventModel:
    with storage_errors(db, "creating event"):
        event = event_repo.create_event(
            db, name=name, event_date=event_date, description=description
        )
    logger.info(f"Event {event.name} created with id {event.id}")
    return event


def update_event(db: Session, event_id: int, **update_fields) -> EventModel:
    """
    Update an event.

    Raises:
        DomainValidationError: If a field is explicitly cleared
        NotFoundError: If the event doesn't exist, including when it was
            deleted while the update was in flight
    """
    for field in ("name", "event_date", "description"):
        if field in update_fields and update_fields[field] is None:
            raise DomainValidationError(f"{field} cannot be cleared")

    with storage_errors(db, f"updating event {event_id}"):
        try:
            return event_repo.update_event(db, event_id=event_id, **update_fields)
        except StaleDataError:
            db.rollback()
            if not event_repo.event_exists(db, event_id):
                raise NotFoundError("Event not found")
            raise


def delete_event(db: Session, event_id: int) -> None:
    """
    Delete an event with business logic validation.

    - Validates event exists
    - Validates no booking references the event (no cascade delete)

    Raises:
        NotFoundError: If event doesn't exist
        DependencyError: If the event has bookings
    """
    with storage_errors(db, f"deleting event {event_id}"):
        event = event_repo.get_event_by_id(db, event_id)
        if not event:
            raise NotFoundError("Event not found")

        guard = DependencyGuard(booking_repo.BookingReferenceLookup(db))
        if not guard.can_delete_event(event_id):
            logger.warning(f"Refused to delete event {event_id}: it has bookings")
            raise DependencyError(EVENT_HAS_BOOKINGS)

        try:
            event_repo.delete_event(db, event_id)
        except IntegrityError:
            # A booking was added after the guard ran; the foreign key caught it.
            db.rollback()
            if not guard.can_delete_event(event_id):
                raise DependencyError(EVENT_HAS_BOOKINGS)
            raise
    logger.info(f"Event {event_id} deleted")
