import os
import tempfile
from datetime import date, timedelta

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_eventsystem.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["MEDIA_BUCKET"] = "venuepic"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from eventsystem.api.deps import get_db, get_media_store
from eventsystem.db.base import enable_sqlite_foreign_keys
from eventsystem.domain.image_policy import SIGNED_URL_TTL
from eventsystem.errors import StorageUnavailableError
from eventsystem.main import app


class InMemoryMediaStore:
    """MediaStore double that keeps objects in a dict."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str | None]] = {}
        self.unavailable = False

    def put(self, data: bytes, key: str, content_type: str | None) -> str:
        if self.unavailable:
            raise StorageUnavailableError("Failed to upload image.")
        self.objects[key] = (data, content_type)
        return key

    def signed_url(self, key: str, ttl: timedelta | None = None) -> str:
        ttl = ttl or SIGNED_URL_TTL
        return f"https://media.test/venuepic/{key}?expires={int(ttl.total_seconds())}"

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Create test engine and session with proper SQLite settings
    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,  # Don't use connection pooling for SQLite
    )
    enable_sqlite_foreign_keys(test_engine)

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def media_store() -> InMemoryMediaStore:
    return InMemoryMediaStore()


@pytest.fixture(scope="function")
def client(db_session, media_store):
    """Create a test client with database and media store overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store] = lambda: media_store

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def hall_a(db: Session, media_store: InMemoryMediaStore):
    """Venue "Hall A" with an image already in the store."""
    from eventsystem.repositories.venue import create_venue

    media_store.put(b"\x89PNG", "hall-a.png", "image/png")
    return create_venue(
        db, name="Hall A", location="1 Main Road", capacity=250, image_key="hall-a.png"
    )


@pytest.fixture(scope="function")
def hall_b(db: Session, media_store: InMemoryMediaStore):
    from eventsystem.repositories.venue import create_venue

    media_store.put(b"\x89PNG", "hall-b.png", "image/png")
    return create_venue(
        db, name="Hall B", location="2 Main Road", capacity=80, image_key="hall-b.png"
    )


@pytest.fixture(scope="function")
def gala(db: Session):
    from eventsystem.repositories.event import create_event

    return create_event(
        db, name="Gala", event_date=date(2025, 6, 1), description="Annual gala dinner"
    )


@pytest.fixture(scope="function")
def conference(db: Session):
    from eventsystem.repositories.event import create_event

    return create_event(
        db,
        name="Conference",
        event_date=date(2025, 6, 1),
        description="Industry conference",
    )


@pytest.fixture(scope="function")
def gala_booking(db: Session, hall_a, gala):
    """Hall A booked for the Gala on 2025-06-01."""
    from eventsystem.repositories.booking import create_booking

    return create_booking(
        db, venue_id=hall_a.id, event_id=gala.id, booking_date=date(2025, 6, 1)
    )
