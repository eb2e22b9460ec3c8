"""Business profile manager.

Creates the one business record an owner anchors their catalog and
appointment list to, and resolves it for the dashboard and the public
booking page. Profiles are immutable once created.

One business per owner is backed by the unique index on owner_id; the
lookup before insert only gives the common case a clearer path.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, StoreError, ValidationError
from app.models.business import Business
from app.services.store import EntityStore
from app.services.validators import optional_text, require_text

logger = logging.getLogger(__name__)

DUPLICATE_BUSINESS_MESSAGE = "A business already exists for this account"


async def create_business(
    db: AsyncSession,
    owner_id: str,
    name: str,
    email: str,
    phone: Optional[str] = None,
    description: Optional[str] = None,
) -> Business:
    """Create the business profile for an authenticated owner.

    Raises:
        ValidationError: a required field is empty, or the owner already has
            a business.
        StoreError: the insert failed.
    """
    owner_id = require_text(owner_id, "owner_id")
    name = require_text(name, "name")
    email = require_text(email, "email")

    store = EntityStore(db)
    existing = await store.select(Business, owner_id=owner_id)
    if existing:
        logger.warning(f"Owner {owner_id} attempted to create a second business")
        raise ValidationError(DUPLICATE_BUSINESS_MESSAGE)

    try:
        business = await store.insert(
            Business,
            owner_id=owner_id,
            name=name,
            email=email,
            phone=optional_text(phone),
            description=optional_text(description),
        )
    except StoreError as e:
        # A concurrent create for the same owner won the unique index
        if isinstance(e.__cause__, IntegrityError):
            logger.warning(f"Owner {owner_id} raced a second business create")
            raise ValidationError(DUPLICATE_BUSINESS_MESSAGE) from e
        raise
    logger.info(f"Business created: id={business.id} owner={owner_id}")
    return business


async def get_business(db: AsyncSession, business_id: Any) -> Business:
    """Resolve a business by the identifier embedded in its booking link."""
    business = await EntityStore(db).get(Business, business_id)
    if business is None:
        raise NotFoundError("Business not found")
    return business


async def get_business_for_owner(db: AsyncSession, owner_id: str) -> Business:
    """Resolve the business owned by the signed-in user."""
    businesses = await EntityStore(db).select(
        Business, order_by="created_at", owner_id=owner_id
    )
    if not businesses:
        raise NotFoundError("Business not found")
    return businesses[0]
