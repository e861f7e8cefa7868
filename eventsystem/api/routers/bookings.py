from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eventsystem.api.deps import get_db
from eventsystem.schemas.booking import (
    Booking,
    BookingCreate,
    BookingUpdate,
    BookingView,
)
from eventsystem.schemas.pagination import PaginatedResponse
from eventsystem.services import booking as booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_new_booking(booking_data: BookingCreate, db: Session = Depends(get_db)):
    """
    Book a venue for an event on a date.

    A venue cannot be booked twice on the same date.
    """
    booking = booking_service.create_booking(
        db,
        venue_id=booking_data.venue_id,
        event_id=booking_data.event_id,
        booking_date=booking_data.booking_date,
    )
    return Booking.model_validate(booking)


@router.get("", response_model=PaginatedResponse[BookingView])
def get_all_bookings(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(100, ge=1, le=1000, description="Number of items per page"),
    search: str | None = Query(
        None, description="Match event name, venue name or booking id (case-insensitive)"
    ),
    db: Session = Depends(get_db),
):
    """
    List bookings joined with their venue and event, with pagination and
    optional search.
    """
    rows, total = booking_service.list_booking_views(
        db, page=page, page_size=page_size, search=search
    )
    return PaginatedResponse(
        items=[BookingView.model_validate(row) for row in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{booking_id}", response_model=Booking)
def get_booking_by_id(booking_id: int, db: Session = Depends(get_db)):
    """Get a booking by ID, including its venue and event."""
    return Booking.model_validate(booking_service.get_booking(db, booking_id))


@router.put("/{booking_id}", response_model=Booking)
def update_booking_by_id(
    booking_id: int,
    booking_data: BookingUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a booking's venue, event or date.

    Fields not included in the request are not updated. The double-booking
    check runs again, ignoring the booking being edited.
    """
    update_data = booking_data.model_dump(exclude_unset=True)
    booking = booking_service.update_booking(
        db, booking_id=booking_id, **update_data
    )
    return Booking.model_validate(booking)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking_by_id(booking_id: int, db: Session = Depends(get_db)):
    """Delete a booking by ID."""
    booking_service.delete_booking(db, booking_id)
