"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
BOOKING_CONFLICT = "BOOKING_CONFLICT"
HAS_DEPENDENCIES = "HAS_DEPENDENCIES"
INVALID_SIZE = "INVALID_SIZE"
INVALID_TYPE = "INVALID_TYPE"
STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or update a resource that would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. invalid dates, missing required fields)."""

    pass


class BookingConflictError(DomainError):
    """Raised when a venue is already booked on the requested date."""

    def __init__(self, message: str, *, venue_id: int | None = None, booking_date=None):
        super().__init__(message)
        self.venue_id = venue_id
        self.booking_date = booking_date


class DependencyError(DomainError):
    """Raised when deleting a row that other rows still reference."""

    pass


class StorageFaultError(DomainError):
    """Raised when the database or the media store fails or cannot be reached."""

    pass


class MediaError(DomainError):
    """Base class for image ingestion failures."""

    pass


class InvalidSizeError(MediaError, DomainValidationError):
    """Raised when an uploaded image is empty or larger than the allowed size."""

    pass


class InvalidTypeError(MediaError, DomainValidationError):
    """Raised when an uploaded image has an extension that is not allowed."""

    pass


class StorageUnavailableError(MediaError, StorageFaultError):
    """Raised when the media store cannot be reached or the write fails."""

    pass
