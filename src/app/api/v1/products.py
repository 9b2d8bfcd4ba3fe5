"""Product availability API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query

from app.api.deps import DbSession
from app.schemas.common import SuccessResponse
from app.schemas.product import AvailabilityResponse
from app.services.availability_service import AvailabilityService

router = APIRouter()


@router.get("/{product_id}/availability", response_model=SuccessResponse[AvailabilityResponse])
async def get_availability(
    product_id: UUID,
    db: DbSession,
    start_date: date = Query(...),
    end_date: date = Query(...),
):
    """Units of a product still free between two dates (inclusive)."""
    service = AvailabilityService(db)
    available = await service.get_available_quantity(product_id, start_date, end_date)
    return SuccessResponse(
        data=AvailabilityResponse(
            product_id=product_id,
            start_date=start_date,
            end_date=end_date,
            available_quantity=available,
        )
    )
