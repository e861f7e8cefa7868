from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from eventsystem.api.deps import get_db, get_media_store
from eventsystem.db.models.venue import Venue as VenueModel
from eventsystem.schemas.venue import Venue, VenueCreate, VenueUpdate
from eventsystem.services import venue as venue_service
from eventsystem.services.media import MediaStore, read_upload

router = APIRouter(prefix="/venues", tags=["venues"])


def _to_schema(venue: VenueModel, store: MediaStore) -> Venue:
    """Render a venue with a freshly signed, time-limited image URL."""
    return Venue(
        id=venue.id,
        name=venue.name,
        location=venue.location,
        capacity=venue.capacity,
        image_key=venue.image_key,
        image_url=store.signed_url(venue.image_key),
    )


@router.post("", response_model=Venue, status_code=status.HTTP_201_CREATED)
def create_new_venue(
    name: str = Form(...),
    location: str = Form(...),
    capacity: int = Form(...),
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
):
    """
    Create a new venue from a multipart form with its image.

    The image must be a .jpg, .jpeg, .png or .gif file of at most 5MB.
    """
    try:
        venue_data = VenueCreate(name=name, location=location, capacity=capacity)
    except ValidationError as e:
        raise RequestValidationError(
            e.errors(include_url=False, include_context=False)
        )

    venue = venue_service.create_venue(
        db,
        store,
        name=venue_data.name,
        location=venue_data.location,
        capacity=venue_data.capacity,
        image=read_upload(image.file, image.filename or "", image.size),
        image_name=image.filename or "",
        image_content_type=image.content_type,
    )
    return _to_schema(venue, store)


@router.get("", response_model=list[Venue])
def get_all_venues(
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
):
    """Get all venues."""
    return [_to_schema(venue, store) for venue in venue_service.list_venues(db)]


@router.get("/{venue_id}", response_model=Venue)
def get_venue_by_id(
    venue_id: int,
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
):
    """Get a venue by ID."""
    return _to_schema(venue_service.get_venue(db, venue_id), store)


@router.put("/{venue_id}", response_model=Venue)
def update_venue_by_id(
    venue_id: int,
    venue_data: VenueUpdate,
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
):
    """
    Update a venue's name, location or capacity.

    Fields not included in the request are not updated; an explicit null is
    rejected because every field is required.
    """
    update_data = venue_data.model_dump(exclude_unset=True)
    venue = venue_service.update_venue(db, venue_id=venue_id, **update_data)
    return _to_schema(venue, store)


@router.put("/{venue_id}/image", response_model=Venue)
def replace_venue_image_by_id(
    venue_id: int,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
):
    """Replace a venue's image."""
    venue = venue_service.replace_venue_image(
        db,
        store,
        venue_id=venue_id,
        image=read_upload(image.file, image.filename or "", image.size),
        image_name=image.filename or "",
        image_content_type=image.content_type,
    )
    return _to_schema(venue, store)


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_venue_by_id(
    venue_id: int,
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
):
    """
    Delete a venue by ID.

    A venue can only be deleted if it doesn't have any associated bookings.
    """
    venue_service.delete_venue(db, store, venue_id)
