"""Appointment management endpoints for the business owner."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.deps import get_current_business
from app.models.business import Business
from app.schemas.appointment import AppointmentOut, AppointmentWithService, StatusUpdate
from app.services import appointments as engine

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[AppointmentWithService])
async def list_appointments(
    business: Business = Depends(get_current_business),
    db: AsyncSession = Depends(get_db),
):
    """The owner's appointments, soonest first, with service name and duration."""
    return await engine.list_appointments(db, business.id)


@router.patch("/{appointment_id}/status", response_model=AppointmentOut)
async def update_appointment_status(
    appointment_id: str,
    update: StatusUpdate,
    business: Business = Depends(get_current_business),
    db: AsyncSession = Depends(get_db),
):
    """Set any status on one of the owner's appointments."""
    appointment = await engine.get_appointment(db, appointment_id)
    if appointment.business_id != business.id:
        logger.warning(f"Business {business.id} tried to update foreign appointment {appointment.id}")
        raise HTTPException(status_code=404, detail="Appointment not found")

    return await engine.update_status(db, appointment.id, update.status)
