from functools import lru_cache

from eventsystem.db import SessionLocal
from eventsystem.services.media import MediaStore, S3MediaStore


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def _default_media_store() -> S3MediaStore:
    return S3MediaStore.from_settings()


def get_media_store() -> MediaStore:
    """The media store venue images are written to and signed from."""
    return _default_media_store()
