from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventsystem.api.deps import get_db
from eventsystem.schemas.event import Event, EventCreate, EventUpdate
from eventsystem.services import event as event_service

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_new_event(event_data: EventCreate, db: Session = Depends(get_db)):
    """Create a new event."""
    event = event_service.create_event(
        db,
        name=event_data.name,
        event_date=event_data.event_date,
        description=event_data.description,
    )
    return Event.model_validate(event)


@router.get("", response_model=list[Event])
def get_all_events(db: Session = Depends(get_db)):
    """Get all events."""
    return [Event.model_validate(event) for event in event_service.list_events(db)]


@router.get("/{event_id}", response_model=Event)
def get_event_by_id(event_id: int, db: Session = Depends(get_db)):
    """Get an event by ID."""
    return Event.model_validate(event_service.get_event(db, event_id))


@router.put("/{event_id}", response_model=Event)
def update_event_by_id(
    event_id: int,
    event_data: EventUpdate,
    db: Session = Depends(get_db),
):
    """
    Update an event.

    Fields not included in the request are not updated; an explicit null is
    rejected because every field is required.
    """
    update_data = event_data.model_dump(exclude_unset=True)
    event = event_service.update_event(db, event_id=event_id, **update_data)
    return Event.model_validate(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event_by_id(event_id: int, db: Session = Depends(get_db)):
    """
    Delete an event by ID.

    An event can only be deleted if it doesn't have any associated bookings.
    """
    event_service.delete_event(db, event_id)
