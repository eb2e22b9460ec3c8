"""Pydantic schemas for Business profiles."""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, computed_field
from app.core.config import settings


class BusinessCreate(BaseModel):
    name: str
    email: str
    phone: str | None = None
    description: str | None = None


class BusinessOut(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    description: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def booking_url(self) -> str:
        """Shareable public booking link. Anyone holding it can book."""
        return f"{settings.PUBLIC_BOOKING_BASE_URL.rstrip('/')}/{self.id}"
