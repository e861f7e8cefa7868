import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

import eventsystem.repositories.booking as booking_repo
import eventsystem.repositories.venue as venue_repo
from eventsystem.db.models.venue import Venue as VenueModel
from eventsystem.domain.dependency_guard import VENUE_HAS_BOOKINGS, DependencyGuard
from eventsystem.errors import (
    DependencyError,
    DomainValidationError,
    DuplicateResourceError,
    NotFoundError,
)
from eventsystem.services.media import (
    MediaStore,
    check_image,
    discard_image,
    ingest_image,
)
from eventsystem.services.storage import storage_errors

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A venue with this name already exists."


def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    # Exact comparison: "Hall A" and "hall a" are different venues.
    if venue_repo.get_venue_by_name(db, name, exclude_id=exclude_id):
        raise DuplicateResourceError(DUPLICATE_NAME)


def list_venues(db: Session) -> list[VenueModel]:
    with storage_errors(db, "listing venues"):
        return venue_repo.get_all_venues(db)


def get_venue(db: Session, venue_id: int) -> VenueModel:
    with storage_errors(db, f"retrieving venue {venue_id}"):
        venue = venue_repo.get_venue_by_id(db, venue_id)
    if not venue:
        raise NotFoundError("Venue not found")
    return venue


def create_venue(
    db: Session,
    store: MediaStore,
    name: str,
    location: str,
    capacity: int,
    image: bytes,
    image_name: str,
    image_content_type: str | None = None,
) -> VenueModel:
    """
    Create a venue with its image.

    - Validates the image (size, then type) before anything is stored
    - Enforces unique venue name (case-sensitive)
    - Stores the image, then inserts the row; the image is removed again if
      the insert fails

    Raises:
        InvalidSizeError / InvalidTypeError: If the image is rejected
        DuplicateResourceError: If the name is taken
        StorageUnavailableError: If the media store fails
    """
    check_image(image_name, len(image))
    with storage_errors(db, "checking venue name"):
        _ensure_unique_name(db, name)

    stored = ingest_image(store, image, image_name, image_content_type)
    try:
        with storage_errors(db, "creating venue"):
            try:
                venue = venue_repo.create_venue(
                    db,
                    name=name,
                    location=location,
                    capacity=capacity,
                    image_key=stored.key,
                )
            except IntegrityError:
                db.rollback()
                _ensure_unique_name(db, name)
                raise
    except Exception:
        discard_image(store, stored.key)
        raise

    logger.info(f"Venue {venue.name} created with id {venue.id}")
    return venue


def update_venue(db: Session, venue_id: int, **update_fields) -> VenueModel:
    """
    Update venue fields.

    Raises:
        DomainValidationError: If a field is explicitly cleared
        NotFoundError: If venue doesn't exist
        DuplicateResourceError: If the new name belongs to another venue
    """
    for field in ("name", "location", "capacity"):
        if field in update_fields and update_fields[field] is None:
            raise DomainValidationError(f"{field} cannot be cleared")

    with storage_errors(db, f"updating venue {venue_id}"):
        venue = venue_repo.get_venue_by_id(db, venue_id)
        if not venue:
            raise NotFoundError("Venue not found")

        if "name" in update_fields:
            _ensure_unique_name(db, update_fields["name"], exclude_id=venue_id)

        try:
            return venue_repo.update_venue(db, venue_id=venue_id, **update_fields)
        except IntegrityError:
            db.rollback()
            if "name" in update_fields:
                _ensure_unique_name(db, update_fields["name"], exclude_id=venue_id)
            raise
        except StaleDataError:
            db.rollback()
            if not venue_repo.venue_exists(db, venue_id):
                raise NotFoundError("Venue not found")
            raise


def replace_venue_image(
    db: Session,
    store: MediaStore,
    venue_id: int,
    image: bytes,
    image_name: str,
    image_content_type: str | None = None,
) -> VenueModel:
    """Store a new image for a venue and drop the previous one."""
    venue = get_venue(db, venue_id)
    previous_key = venue.image_key

    stored = ingest_image(store, image, image_name, image_content_type)
    try:
        venue = update_venue(db, venue_id, image_key=stored.key)
    except Exception:
        discard_image(store, stored.key)
        raise

    discard_image(store, previous_key)
    return venue


def delete_venue(db: Session, store: MediaStore, venue_id: int) -> None:
    """
    Delete a venue with business logic validation.

    - Validates venue exists
    - Validates no booking references the venue (no cascade delete)

    Raises:
        NotFoundError: If venue doesn't exist
        DependencyError: If the venue has bookings
    """
    with storage_errors(db, f"deleting venue {venue_id}"):
        venue = venue_repo.get_venue_by_id(db, venue_id)
        if not venue:
            raise NotFoundError("Venue not found")
        image_key = venue.image_key

        guard = DependencyGuard(booking_repo.BookingReferenceLookup(db))
        if not guard.can_delete_venue(venue_id):
            logger.warning(f"Refused to delete venue {venue_id}: it has bookings")
            raise DependencyError(VENUE_HAS_BOOKINGS)

        try:
            venue_repo.delete_venue(db, venue_id)
        except IntegrityError:
            db.rollback()
            if not guard.can_delete_venue(venue_id):
                raise DependencyError(VENUE_HAS_BOOKINGS)
            raise

    logger.info(f"Venue {venue_id} deleted")
    discard_image(store, image_key)
