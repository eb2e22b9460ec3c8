"""Business profile endpoints: one-time setup and lookup."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.deps import get_current_owner_id, get_current_business
from app.models.business import Business
from app.schemas.business import BusinessCreate, BusinessOut
from app.services.businesses import create_business, get_business

router = APIRouter()


@router.post("/", response_model=BusinessOut, status_code=201)
async def create_my_business(
    biz: BusinessCreate,
    owner_id: str = Depends(get_current_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Set up the signed-in owner's business profile."""
    return await create_business(db, owner_id, **biz.model_dump())


@router.get("/me", response_model=BusinessOut)
async def get_my_business(business: Business = Depends(get_current_business)):
    """The dashboard's business. 404 means setup has not happened yet."""
    return business


@router.get("/{business_id}", response_model=BusinessOut)
async def get_public_business(business_id: str, db: AsyncSession = Depends(get_db)):
    """Public business profile, addressed by the id in the booking link."""
    return await get_business(db, business_id)
