"""Error body returned by the domain exception handlers."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body for 400/404/409 domain errors and 503 storage faults."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "venue already booked on this date (venue 1, 2025-06-01)",
                "code": "BOOKING_CONFLICT",
            }
        }
    )

    detail: str = Field(..., description="Human-readable error message")
    code: str = Field(
        ...,
        description=(
            "Machine-readable error code, e.g. BOOKING_CONFLICT, HAS_DEPENDENCIES, "
            "INVALID_SIZE or STORAGE_UNAVAILABLE"
        ),
    )
