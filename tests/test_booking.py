"""Tests for the public booking page and booking submission."""

import asyncio
from datetime import datetime
import pytest
from sqlalchemy import select, func

from app.core.exceptions import NotFoundError, ValidationError
from app.models.appointment import Appointment, AppointmentStatus
from app.schemas.appointment import CustomerContact
from app.services.appointments import submit_booking
from app.services.catalog import create_service, set_service_active

JO = CustomerContact(name="Jo", email="jo@x.test", phone="555")


async def count_appointments(db) -> int:
    result = await db.execute(select(func.count(Appointment.id)))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_end_to_end_booking_scenario(client, owner_headers):
    """Owner sets up business and service, customer books through the public link."""
    resp = await client.post("/api/v1/businesses/", headers=owner_headers, json={
        "name": "Acme Cuts",
        "email": "a@acme.test",
    })
    business_id = resp.json()["id"]

    resp = await client.post("/api/v1/services/", headers=owner_headers, json={
        "name": "Haircut",
        "duration_minutes": 30,
        "price": "20",
    })
    service_id = resp.json()["id"]

    resp = await client.post(f"/api/v1/booking/{business_id}", json={
        "service_id": service_id,
        "customer": {"name": "Jo", "email": "jo@x.test", "phone": "555"},
        "appointment_date": "2025-06-01",
        "appointment_time": "09:00",
    })
    assert resp.status_code == 201
    appt = resp.json()
    assert appt["status"] == "pending"
    assert appt["scheduled_at"] == "2025-06-01T09:00:00"
    assert appt["service_id"] == service_id
    assert appt["business_id"] == business_id
    assert appt["notes"] is None


@pytest.mark.asyncio
async def test_booking_page_lists_only_active_services(client, db, business, haircut):
    hidden = await create_service(db, business.id, "Beard trim", 15)
    await set_service_active(db, hidden.id, False)

    resp = await client.get(f"/api/v1/booking/{business.id}")
    assert resp.status_code == 200
    page = resp.json()
    assert page["business"]["name"] == "Acme Cuts"
    assert [s["name"] for s in page["services"]] == ["Haircut"]


@pytest.mark.asyncio
async def test_booking_page_unknown_business(client):
    resp = await client.get("/api/v1/booking/00000000-0000-0000-0000-000000000000")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_submit_booking_returns_pending_with_combined_timestamp(db, business, haircut):
    appt = await submit_booking(db, business.id, haircut.id, JO, "2025-06-01", "14:30", notes=" first visit ")
    assert appt.status == AppointmentStatus.PENDING
    assert appt.scheduled_at == datetime(2025, 6, 1, 14, 30)
    assert appt.notes == "first visit"
    assert appt.customer_name == "Jo"


@pytest.mark.asyncio
async def test_unknown_business_is_not_found(db, haircut):
    with pytest.raises(NotFoundError):
        await submit_booking(db, "00000000-0000-0000-0000-000000000000", haircut.id, JO, "2025-06-01", "09:00")
    assert await count_appointments(db) == 0


@pytest.mark.asyncio
async def test_service_from_another_business_is_rejected(db, business, other_business):
    foreign = await create_service(db, other_business.id, "Rival haircut", 30)

    with pytest.raises(ValidationError):
        await submit_booking(db, business.id, foreign.id, JO, "2025-06-01", "09:00")
    assert await count_appointments(db) == 0


@pytest.mark.asyncio
async def test_cross_tenant_booking_over_http_is_400(client, business, other_business, db):
    foreign = await create_service(db, other_business.id, "Rival haircut", 30)

    resp = await client.post(f"/api/v1/booking/{business.id}", json={
        "service_id": str(foreign.id),
        "customer": {"name": "Jo", "email": "jo@x.test", "phone": "555"},
        "appointment_date": "2025-06-01",
        "appointment_time": "09:00",
    })
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_unknown_service_is_rejected(db, business):
    with pytest.raises(ValidationError):
        await submit_booking(db, business.id, "not-a-service", JO, "2025-06-01", "09:00")


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "email", "phone"])
async def test_missing_customer_contact_rejected(db, business, haircut, field):
    contact = JO.model_copy(update={field: "  "})
    with pytest.raises(ValidationError):
        await submit_booking(db, business.id, haircut.id, contact, "2025-06-01", "09:00")
    assert await count_appointments(db) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("when_date,when_time", [
    ("2025-02-30", "09:00"),
    ("01/06/2025", "09:00"),
    ("2025-06-01", "25:00"),
    ("2025-06-01", "nine"),
    ("", "09:00"),
])
async def test_unparseable_date_or_time_rejected(db, business, haircut, when_date, when_time):
    with pytest.raises(ValidationError):
        await submit_booking(db, business.id, haircut.id, JO, when_date, when_time)
    assert await count_appointments(db) == 0


@pytest.mark.asyncio
async def test_past_dates_are_accepted(db, business, haircut):
    """Bookings are not checked against the current time."""
    appt = await submit_booking(db, business.id, haircut.id, JO, "2001-01-01", "08:00")
    assert appt.scheduled_at == datetime(2001, 1, 1, 8, 0)


@pytest.mark.asyncio
async def test_concurrent_bookings_for_same_slot_both_succeed(business, haircut, session_factory):
    """Regression: there is no conflict detection.

    Two customers booking the same service at the same instant both get an
    appointment. This test must change if slot conflict checking is added.
    """
    async def book(name):
        async with session_factory() as session:
            customer = CustomerContact(name=name, email=f"{name}@x.test", phone="555")
            return await submit_booking(session, business.id, haircut.id, customer, "2025-06-01", "09:00")

    first, second = await asyncio.gather(book("ann"), book("bob"))

    assert first.id != second.id
    assert first.scheduled_at == second.scheduled_at == datetime(2025, 6, 1, 9, 0)
    assert first.status == second.status == AppointmentStatus.PENDING


@pytest.mark.asyncio
async def test_customer_given_as_mapping_is_accepted(db, business, haircut):
    customer = {"name": "Jo", "email": "jo@x.test", "phone": "555"}
    appt = await submit_booking(db, business.id, haircut.id, customer, "2025-06-01", "09:00")
    assert appt.customer_name == "Jo"
    assert appt.customer_email == "jo@x.test"
    assert appt.customer_phone == "555"


@pytest.mark.asyncio
async def test_customer_mapping_missing_field_names_the_field(db, business, haircut):
    with pytest.raises(ValidationError) as exc_info:
        await submit_booking(db, business.id, haircut.id, {"name": "Jo", "email": "jo@x.test"}, "2025-06-01", "09:00")
    assert exc_info.value.message == "customer phone is required"
    assert await count_appointments(db) == 0
