"""Response envelope shared by all endpoints."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """Schema for a successful response envelope."""

    success: bool = True
    message: str | None = None
    data: DataT


class ErrorResponse(BaseModel):
    """Schema for a failed response envelope."""

    success: bool = False
    message: str
    code: str
    errors: list[Any] | None = None


class Pagination(BaseModel):
    current_page: int
    limit: int
    total_count: int
    total_pages: int
    has_more: bool
