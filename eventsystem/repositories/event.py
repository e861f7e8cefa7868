from datetime import date

from sqlalchemy.orm import Session

from eventsystem.db.models.event import Event as EventModel
from eventsystem.errors import NotFoundError


def get_event_by_id(db: Session, event_id: int) -> EventModel | None:
    """Get an event by ID."""
    return db.query(EventModel).filter(EventModel.id == event_id).first()


def get_all_events(db: Session) -> list[EventModel]:
    """Get all events, soonest first."""
    return db.query(EventModel).order_by(EventModel.event_date, EventModel.id).all()


def event_exists(db: Session, event_id: int) -> bool:
    return db.query(EventModel.id).filter(EventModel.id == event_id).first() is not None


def create_event(
    db: Session,
    name: str,
    event_date: date,
    description: str,
) -> EventModel:
    """Create a new event in the database. Pure data access - no business logic."""
    db_event = EventModel(name=name, event_date=event_date, description=description)
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event


def update_event(db: Session, event_id: int, **kwargs) -> EventModel:
    """
    Update an event. Only updates fields that are explicitly provided.
    """
    event = get_event_by_id(db, event_id)
    if not event:
        raise NotFoundError("Event not found")

    if "name" in kwargs:
        event.name = kwargs["name"]
    if "event_date" in kwargs:
        event.event_date = kwargs["event_date"]
    if "description" in kwargs:
        event.description = kwargs["description"]

    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, event_id: int) -> None:
    """Delete an event from the database. Pure data access - no business logic."""
    deleted = db.query(EventModel).filter(EventModel.id == event_id).delete(
        synchronize_session="fetch"
    )
    if deleted == 0:
        db.rollback()
        raise NotFoundError("Event not found")
    db.commit()
