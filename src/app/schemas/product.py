"""Product schemas for request/response validation."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel


class AvailabilityResponse(BaseModel):
    """Units of a product still free over a date range."""

    product_id: UUID
    start_date: date
    end_date: date
    available_quantity: int
