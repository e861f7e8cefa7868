import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

import eventsystem.repositories.booking as booking_repo
import eventsystem.repositories.event as event_repo
import eventsystem.repositories.venue as venue_repo
from eventsystem.db.models.booking import Booking as BookingModel
from eventsystem.domain.booking_policy import BookingCandidate, BookingPolicy, Verdict
from eventsystem.errors import BookingConflictError, DomainValidationError, NotFoundError
from eventsystem.services.storage import storage_errors

logger = logging.getLogger(__name__)

policy = BookingPolicy()


def validate_booking(db: Session, candidate: BookingCandidate) -> Verdict:
    """Check a candidate against the stored bookings of its venue. No side effects."""
    return policy.validate(
        candidate, booking_repo.iter_conflict_candidates(db, candidate)
    )


def _ensure_no_conflict(db: Session, candidate: BookingCandidate) -> None:
    verdict = validate_booking(db, candidate)
    if verdict.is_rejected:
        logger.info(
            f"Rejected booking of venue {candidate.venue_id} on {candidate.booking_date}"
        )
        raise BookingConflictError(
            f"{verdict.reason} (venue {candidate.venue_id}, "
            f"{candidate.booking_date.strftime('%Y-%m-%d')})",
            venue_id=candidate.venue_id,
            booking_date=candidate.booking_date,
        )


def _ensure_references_exist(
    db: Session, venue_id: int | None, event_id: int | None
) -> None:
    if venue_id is not None and not venue_repo.venue_exists(db, venue_id):
        raise NotFoundError(f"Venue with id {venue_id} not found")
    if event_id is not None and not event_repo.event_exists(db, event_id):
        raise NotFoundError(f"Event with id {event_id} not found")


def _explain_integrity_error(db: Session, candidate: BookingCandidate) -> None:
    """
    Map a constraint violation back to a domain error.

    The unique (venue_id, booking_date) constraint catches double bookings
    that slipped past the policy check; the foreign keys catch a venue or
    event deleted in between. Returns only when neither explains the error.
    """
    _ensure_no_conflict(db, candidate)
    _ensure_references_exist(db, candidate.venue_id, candidate.event_id)


def get_booking(db: Session, booking_id: int) -> BookingModel:
    with storage_errors(db, f"retrieving booking {booking_id}"):
        booking = booking_repo.get_booking_by_id(db, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


def list_booking_views(
    db: Session, page: int = 1, page_size: int = 100, search: str | None = None
) -> tuple[list, int]:
    with storage_errors(db, "listing bookings"):
        return booking_repo.get_booking_views_paginated(
            db, page=page, page_size=page_size, search=search
        )


def create_booking(
    db: Session,
    venue_id: int,
    event_id: int,
    booking_date: date,
) -> BookingModel:
    """
    Create a new booking with business logic validation.

    - Validates venue and event exist
    - Validates the venue is not already booked on booking_date

    Raises:
        NotFoundError: If the venue or event doesn't exist
        BookingConflictError: If the venue is already booked on that date
    """
    candidate = BookingCandidate(
        venue_id=venue_id, event_id=event_id, booking_date=booking_date
    )
    with storage_errors(db, "creating booking"):
        _ensure_references_exist(db, venue_id, event_id)
        _ensure_no_conflict(db, candidate)

        try:
            booking = booking_repo.create_booking(
                db, venue_id=venue_id, event_id=event_id, booking_date=booking_date
            )
        except IntegrityError:
            db.rollback()
            _explain_integrity_error(db, candidate)
            raise

    logger.info(
        f"Booking {booking.id} created for venue {venue_id} on {booking_date}"
    )
    return booking


def update_booking(db: Session, booking_id: int, **update_fields) -> BookingModel:
    """
    Update a booking with business logic validation.

    - Validates booking exists
    - Validates venue/event exist if they are being changed
    - Re-runs the double-booking check, excluding the booking itself

    Only fields explicitly provided in update_fields will be updated.
    Venue, event and date are required and cannot be cleared.
    """
    for field in ("venue_id", "event_id", "booking_date"):
        if field in update_fields and update_fields[field] is None:
            raise DomainValidationError(f"{field} cannot be cleared")

    with storage_errors(db, f"updating booking {booking_id}"):
        existing = booking_repo.get_booking_by_id(db, booking_id)
        if not existing:
            raise NotFoundError("Booking not found")

        _ensure_references_exist(
            db, update_fields.get("venue_id"), update_fields.get("event_id")
        )

        candidate = BookingCandidate(
            id=booking_id,
            venue_id=update_fields.get("venue_id", existing.venue_id),
            event_id=update_fields.get("event_id", existing.event_id),
            booking_date=update_fields.get("booking_date", existing.booking_date),
        )
        _ensure_no_conflict(db, candidate)

        try:
            return booking_repo.update_booking(
                db, booking_id=booking_id, **update_fields
            )
        except IntegrityError:
            db.rollback()
            _explain_integrity_error(db, candidate)
            raise
        except StaleDataError:
            db.rollback()
            if booking_repo.get_booking_by_id(db, booking_id) is None:
                raise NotFoundError("Booking not found")
            raise


def delete_booking(db: Session, booking_id: int) -> None:
    """Delete a booking. Bookings have no dependents, so this is never guarded."""
    with storage_errors(db, f"deleting booking {booking_id}"):
        booking_repo.delete_booking(db, booking_id)
    logger.info(f"Booking {booking_id} deleted")
