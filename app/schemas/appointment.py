"""Pydantic schemas for Appointments."""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel
from typing import Optional
from app.models.appointment import AppointmentStatus
from app.schemas.business import BusinessOut
from app.schemas.service import ServiceOut, ServiceSummary


class CustomerContact(BaseModel):
    name: str
    email: str
    phone: str


class BookingCreate(BaseModel):
    """Public booking form submission.

    Date and time arrive as the form sends them ("2025-06-01", "09:00") and are
    validated by the lifecycle engine, so a bad value is a 400 rather than a 422.
    """
    service_id: str
    customer: CustomerContact
    appointment_date: str
    appointment_time: str
    notes: Optional[str] = None


class StatusUpdate(BaseModel):
    # Plain str so unknown values reach the engine and are rejected there
    status: str


class AppointmentOut(BaseModel):
    id: UUID
    business_id: UUID
    service_id: UUID
    customer_name: str
    customer_email: str
    customer_phone: str
    scheduled_at: datetime
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AppointmentWithService(AppointmentOut):
    """Dashboard row: the appointment joined with its service at read time."""
    service: ServiceSummary


class BookingPage(BaseModel):
    """Everything the public booking page needs: the business and its active services."""
    business: BusinessOut
    services: list[ServiceOut]
