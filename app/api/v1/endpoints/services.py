"""Service catalog endpoints for the business owner."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.deps import get_current_business
from app.models.business import Business
from app.schemas.service import ServiceCreate, ServiceActiveUpdate, ServiceOut
from app.services import catalog

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=ServiceOut, status_code=201)
async def create_service(
    data: ServiceCreate,
    business: Business = Depends(get_current_business),
    db: AsyncSession = Depends(get_db),
):
    """Add a service to the owner's catalog. New services start active."""
    return await catalog.create_service(db, business.id, **data.model_dump())


@router.get("/", response_model=list[ServiceOut])
async def list_services(
    active_only: bool = False,
    business: Business = Depends(get_current_business),
    db: AsyncSession = Depends(get_db),
):
    """All of the owner's services, newest first."""
    return await catalog.list_services(db, business.id, active_only=active_only)


@router.patch("/{service_id}/active", response_model=ServiceOut)
async def set_service_active(
    service_id: str,
    update: ServiceActiveUpdate,
    business: Business = Depends(get_current_business),
    db: AsyncSession = Depends(get_db),
):
    """Enable or disable a service on the public booking page."""
    service = await catalog.get_service(db, service_id)
    if service.business_id != business.id:
        logger.warning(f"Business {business.id} tried to toggle foreign service {service.id}")
        raise HTTPException(status_code=404, detail="Service not found")

    return await catalog.set_service_active(db, service.id, update.is_active)
