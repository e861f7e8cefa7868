from collections.abc import Iterator
from datetime import date

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session, joinedload

from eventsystem.db.models.booking import Booking as BookingModel
from eventsystem.db.models.booking_view import booking_view
from eventsystem.domain.booking_policy import BookingLike, BookingPolicy
from eventsystem.errors import NotFoundError


def get_booking_by_id(db: Session, booking_id: int) -> BookingModel | None:
    """Get a booking by ID, with its venue and event loaded."""
    return (
        db.query(BookingModel)
        .options(joinedload(BookingModel.venue), joinedload(BookingModel.event))
        .filter(BookingModel.id == booking_id)
        .first()
    )


def iter_conflict_candidates(
    db: Session, candidate: BookingLike, batch_size: int = 100
) -> Iterator[BookingModel]:
    """
    Lazily yield the stored bookings the candidate could conflict with.

    The SQL filter comes from BookingPolicy, so the caller can hand the
    result straight back to BookingPolicy.validate.
    """
    policy = BookingPolicy()
    query = db.query(BookingModel).filter(
        policy.sqlalchemy_conflict_predicate(
            candidate,
            id_col=BookingModel.id,
            venue_col=BookingModel.venue_id,
            date_col=BookingModel.booking_date,
        )
    )
    return iter(query.yield_per(batch_size))


def venue_has_bookings(db: Session, venue_id: int) -> bool:
    return (
        db.query(BookingModel.id).filter(BookingModel.venue_id == venue_id).first()
        is not None
    )


def event_has_bookings(db: Session, event_id: int) -> bool:
    return (
        db.query(BookingModel.id).filter(BookingModel.event_id == event_id).first()
        is not None
    )


class BookingReferenceLookup:
    """Adapts a session to the DependencyGuard's BookingReferences protocol."""

    def __init__(self, db: Session):
        self.db = db

    def venue_has_bookings(self, venue_id: int) -> bool:
        return venue_has_bookings(self.db, venue_id)

    def event_has_bookings(self, event_id: int) -> bool:
        return event_has_bookings(self.db, event_id)


def create_booking(
    db: Session,
    venue_id: int,
    event_id: int,
    booking_date: date,
) -> BookingModel:
    """Create a new booking in the database. Pure data access - no business logic."""
    db_booking = BookingModel(
        venue_id=venue_id,
        event_id=event_id,
        booking_date=booking_date,
    )
    db.add(db_booking)
    db.commit()
    db.refresh(db_booking)
    return db_booking


def update_booking(db: Session, booking_id: int, **kwargs) -> BookingModel:
    """
    Update a booking. Only updates fields that are explicitly provided.
    """
    booking = get_booking_by_id(db, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")

    if "venue_id" in kwargs:
        booking.venue_id = kwargs["venue_id"]
    if "event_id" in kwargs:
        booking.event_id = kwargs["event_id"]
    if "booking_date" in kwargs:
        booking.booking_date = kwargs["booking_date"]

    db.commit()
    db.refresh(booking)
    return booking


def delete_booking(db: Session, booking_id: int) -> None:
    """Delete a booking from the database. Pure data access - no business logic."""
    deleted = db.query(BookingModel).filter(BookingModel.id == booking_id).delete(
        synchronize_session="fetch"
    )
    if deleted == 0:
        db.rollback()
        raise NotFoundError("Booking not found")
    db.commit()


def get_booking_views_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 100,
    search: str | None = None,
) -> tuple[list, int]:
    """
    List rows of the booking_view projection with pagination.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        search: Optional case-insensitive substring matched against the
                event name, the venue name or the booking id

    Returns:
        Tuple of (list of view rows, total count)
    """
    query = db.query(booking_view)

    if search:
        query = query.filter(
            or_(
                booking_view.c.event_name.icontains(search, autoescape=True),
                booking_view.c.venue_name.icontains(search, autoescape=True),
                cast(booking_view.c.booking_id, String).contains(search, autoescape=True),
            )
        )

    total = query.count()
    skip = (page - 1) * page_size
    rows = (
        query.order_by(booking_view.c.booking_date, booking_view.c.booking_id)
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return rows, total
