"""Appointment lifecycle engine.

Validates public booking submissions into pending appointments and applies
status changes from the owning business's dashboard.

Status may be set to any of the four values from any other value; the
pending -> confirmed -> completed progression is a convention of the
dashboard, not something enforced here.

Bookings are not checked for overlap with other appointments, against the
service duration, or against the current time. Two submissions for the same
service and instant both succeed.
"""

import logging
from datetime import date, datetime, time
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundError, ValidationError
from app.models.appointment import Appointment, AppointmentStatus
from app.models.business import Business
from app.models.service import Service
from app.schemas.appointment import CustomerContact
from app.services.validators import optional_text, require_text
from app.services.store import EntityStore, parse_id

logger = logging.getLogger(__name__)


def combine_when(when_date: Any, when_time: Any) -> datetime:
    """Combine a calendar date and a wall-clock time into one naive UTC instant.

    Accepts date/time objects or ISO strings ("2025-06-01", "09:00").
    """
    try:
        if isinstance(when_date, datetime):
            day = when_date.date()
        elif isinstance(when_date, date):
            day = when_date
        else:
            day = date.fromisoformat(require_text(when_date, "appointment_date"))

        if isinstance(when_time, time):
            clock = when_time
        else:
            clock = time.fromisoformat(require_text(when_time, "appointment_time"))
    except ValueError as e:
        raise ValidationError(f"Invalid appointment date/time: {e}")

    if clock.tzinfo is not None:
        raise ValidationError("appointment_time must not carry a UTC offset")
    return datetime.combine(day, clock)


def parse_customer(customer: Union[CustomerContact, Mapping[str, Any], Any]) -> CustomerContact:
    """Accept a CustomerContact, a {name, email, phone} mapping, or any object with those attributes."""
    if isinstance(customer, CustomerContact):
        return customer
    try:
        return CustomerContact.model_validate(customer, from_attributes=True)
    except SchemaValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "details"
        if error["type"] == "missing":
            raise ValidationError(f"customer {field} is required")
        raise ValidationError(f"Invalid customer {field}: {error['msg']}")


def parse_status(value: Any) -> AppointmentStatus:
    try:
        return AppointmentStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AppointmentStatus)
        raise ValidationError(f"Invalid status '{value}'. Allowed: {allowed}")


async def submit_booking(
    db: AsyncSession,
    business_id: Any,
    service_id: Any,
    customer: Union[CustomerContact, Mapping[str, Any]],
    when_date: Any,
    when_time: Any,
    notes: Optional[str] = None,
) -> Appointment:
    """Create a pending appointment from a public booking form.

    Args:
        db: Database session
        business_id: Business addressed by the booking link
        service_id: Chosen service; must belong to that business
        customer: CustomerContact or a {name, email, phone} mapping
        when_date: Calendar date (date or "YYYY-MM-DD")
        when_time: Wall-clock time (time or "HH:MM[:SS]")
        notes: Free-text notes from the customer

    Returns:
        The stored appointment, so the caller can confirm and notify.

    Raises:
        NotFoundError: the business does not exist
        ValidationError: unknown or foreign service, missing contact fields,
            or an unparseable date/time
        StoreError: the insert failed
    """
    store = EntityStore(db)

    business = await store.get(Business, business_id)
    if business is None:
        raise NotFoundError("Business not found")

    service = await store.get(Service, service_id)
    if service is None or service.business_id != business.id:
        logger.warning(f"Rejected booking for business {business.id}: service {service_id} not in its catalog")
        raise ValidationError("Selected service is not offered by this business")

    contact = parse_customer(customer)
    customer_name = require_text(contact.name, "customer name")
    customer_email = require_text(contact.email, "customer email")
    customer_phone = require_text(contact.phone, "customer phone")
    scheduled_at = combine_when(when_date, when_time)

    appointment = await store.insert(
        Appointment,
        business_id=business.id,
        service_id=service.id,
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        scheduled_at=scheduled_at,
        notes=optional_text(notes),
        status=AppointmentStatus.PENDING,
    )
    logger.info(
        f"Appointment booked: id={appointment.id} business={business.id} "
        f"service={service.id} at={scheduled_at.isoformat()}"
    )
    return appointment


async def get_appointment(db: AsyncSession, appointment_id: Any) -> Appointment:
    appointment = await EntityStore(db).get(Appointment, appointment_id)
    if appointment is None:
        raise NotFoundError("Appointment not found")
    return appointment


async def update_status(db: AsyncSession, appointment_id: Any, new_status: Any) -> Appointment:
    """Set an appointment's status. Any value in AppointmentStatus is accepted from any state."""
    status = parse_status(new_status)
    appointment = await get_appointment(db, appointment_id)

    previous = appointment.status
    appointment = await EntityStore(db).update(appointment, status=status)
    logger.info(f"Appointment {appointment.id} status {previous.value} -> {status.value}")
    return appointment


async def list_appointments(db: AsyncSession, business_id: Any) -> Sequence[Appointment]:
    """Appointments of a business, soonest first, each with its service loaded."""
    business_uuid = parse_id(business_id)
    if business_uuid is None:
        return []
    return await EntityStore(db).select(
        Appointment,
        order_by="scheduled_at",
        options=[selectinload(Appointment.service)],
        business_id=business_uuid,
    )
