"""Public booking page endpoints.

No authentication: anyone holding a business's booking link can read its
active catalog and submit a booking.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.schemas.appointment import AppointmentOut, BookingCreate, BookingPage
from app.services.appointments import submit_booking
from app.services.businesses import get_business
from app.services.catalog import list_services

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{business_id}", response_model=BookingPage)
async def get_booking_page(business_id: str, db: AsyncSession = Depends(get_db)):
    """Business profile plus the services currently offered."""
    business = await get_business(db, business_id)
    services = await list_services(db, business.id, active_only=True)
    return {"business": business, "services": services}


@router.post("/{business_id}", response_model=AppointmentOut, status_code=201)
async def book_appointment(
    business_id: str,
    booking: BookingCreate,
    db: AsyncSession = Depends(get_db),
):
    """Submit a booking. The appointment starts out pending."""
    appointment = await submit_booking(
        db,
        business_id,
        booking.service_id,
        booking.customer,
        booking.appointment_date,
        booking.appointment_time,
        notes=booking.notes,
    )
    # Confirmation delivery is handled outside this service
    logger.info(f"Booking {appointment.id} ready for confirmation dispatch")
    return appointment
