from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a listing plus the total number of matching rows."""

    items: list[T]
    total: int = Field(..., ge=0, description="Rows matching the filter, across all pages")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
