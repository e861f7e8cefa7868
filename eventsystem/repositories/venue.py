from sqlalchemy.orm import Session

from eventsystem.db.models.venue import Venue as VenueModel
from eventsystem.errors import NotFoundError


def get_venue_by_id(db: Session, venue_id: int) -> VenueModel | None:
    """Get a venue by ID."""
    return db.query(VenueModel).filter(VenueModel.id == venue_id).first()


def get_all_venues(db: Session) -> list[VenueModel]:
    """Get all venues ordered by name."""
    return db.query(VenueModel).order_by(VenueModel.name, VenueModel.id).all()


def venue_exists(db: Session, venue_id: int) -> bool:
    return db.query(VenueModel.id).filter(VenueModel.id == venue_id).first() is not None


def get_venue_by_name(
    db: Session, name: str, exclude_id: int | None = None
) -> VenueModel | None:
    """Get a venue by exact (case-sensitive) name."""
    query = db.query(VenueModel).filter(VenueModel.name == name)
    if exclude_id is not None:
        query = query.filter(VenueModel.id != exclude_id)
    return query.first()


def create_venue(
    db: Session,
    name: str,
    location: str,
    capacity: int,
    image_key: str,
) -> VenueModel:
    """Create a new venue in the database. Pure data access - no business logic."""
    db_venue = VenueModel(
        name=name,
        location=location,
        capacity=capacity,
        image_key=image_key,
    )
    db.add(db_venue)
    db.commit()
    db.refresh(db_venue)
    return db_venue


def update_venue(db: Session, venue_id: int, **kwargs) -> VenueModel:
    """
    Update a venue. Only updates fields that are explicitly provided.
    """
    venue = get_venue_by_id(db, venue_id)
    if not venue:
        raise NotFoundError("Venue not found")

    if "name" in kwargs:
        venue.name = kwargs["name"]
    if "location" in kwargs:
        venue.location = kwargs["location"]
    if "capacity" in kwargs:
        venue.capacity = kwargs["capacity"]
    if "image_key" in kwargs:
        venue.image_key = kwargs["image_key"]

    db.commit()
    db.refresh(venue)
    return venue


def delete_venue(db: Session, venue_id: int) -> None:
    """
    Delete a venue from the database. Pure data access - no business logic.

    The row count of the DELETE itself decides NotFoundError, so a row removed
    by another request after it was loaded is still reported as missing.
    """
    deleted = db.query(VenueModel).filter(VenueModel.id == venue_id).delete(
        synchronize_session="fetch"
    )
    if deleted == 0:
        db.rollback()
        raise NotFoundError("Venue not found")
    db.commit()
