"""Service catalog manager: create services and toggle their availability."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.models.business import Business
from app.models.service import Service
from app.services.validators import optional_text, require_text
from app.services.store import EntityStore, parse_id

logger = logging.getLogger(__name__)

MIN_DURATION_MINUTES = 15

# Matches the Numeric(10, 2) price column
PRICE_STEP = Decimal("0.01")
MAX_PRICE = Decimal("100000000")


def parse_duration(value: Any) -> int:
    """Durations are whole minutes, at least MIN_DURATION_MINUTES."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("duration_minutes must be a whole number of minutes")
    if value < MIN_DURATION_MINUTES:
        raise ValidationError(f"duration_minutes must be at least {MIN_DURATION_MINUTES}")
    return value


def parse_price(value: Any) -> Optional[Decimal]:
    """Parse a price from decimal text or a number. Blank means no price."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError("price must be a number")
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"price '{value}' is not a valid number")
    if not price.is_finite():
        raise ValidationError("price must be a finite number")
    if price < 0:
        raise ValidationError("price cannot be negative")
    if price >= MAX_PRICE:
        raise ValidationError(f"price must be less than {MAX_PRICE}")
    if price.quantize(PRICE_STEP) != price:
        raise ValidationError("price cannot have more than 2 decimal places")
    return price


async def create_service(
    db: AsyncSession,
    business_id: Any,
    name: str,
    duration_minutes: Any,
    description: Optional[str] = None,
    price: Any = None,
) -> Service:
    """Add an active service to a business's catalog."""
    name = require_text(name, "name")
    duration = parse_duration(duration_minutes)
    parsed_price = parse_price(price)

    store = EntityStore(db)
    business = await store.get(Business, business_id)
    if business is None:
        raise NotFoundError("Business not found")

    service = await store.insert(
        Service,
        business_id=business.id,
        name=name,
        description=optional_text(description),
        duration_minutes=duration,
        price=parsed_price,
        is_active=True,
    )
    logger.info(f"Service created: id={service.id} business={business.id} duration={duration}m")
    return service


async def get_service(db: AsyncSession, service_id: Any) -> Service:
    service = await EntityStore(db).get(Service, service_id)
    if service is None:
        raise NotFoundError("Service not found")
    return service


async def set_service_active(db: AsyncSession, service_id: Any, active: bool) -> Service:
    """Enable or disable a service. Re-sending the current value is harmless."""
    if not isinstance(active, bool):
        raise ValidationError("is_active must be true or false")
    service = await get_service(db, service_id)
    if service.is_active == active:
        return service

    service = await EntityStore(db).update(service, is_active=active)
    logger.info(f"Service {service.id} is_active -> {active}")
    return service


async def list_services(
    db: AsyncSession, business_id: Any, active_only: bool = False
) -> Sequence[Service]:
    """Services of a business, newest first.

    active_only restricts the list to what the public booking page offers.
    """
    business_uuid = parse_id(business_id)
    if business_uuid is None:
        return []

    filters = {"business_id": business_uuid}
    if active_only:
        filters["is_active"] = True
    return await EntityStore(db).select(
        Service, order_by="created_at", descending=True, **filters
    )
