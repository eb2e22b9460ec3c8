"""Pydantic schemas for catalog services."""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class ServiceCreate(BaseModel):
    """Price is accepted as decimal text ("25.50") or a number and validated by the catalog."""
    name: str
    description: str | None = None
    duration_minutes: int
    price: str | float | None = None


class ServiceActiveUpdate(BaseModel):
    is_active: bool


class ServiceOut(BaseModel):
    id: UUID
    business_id: UUID
    name: str
    description: str | None = None
    duration_minutes: int
    price: float | None = None
    is_active: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ServiceSummary(BaseModel):
    """Service fields shown next to an appointment on the dashboard."""
    name: str
    duration_minutes: int

    class Config:
        from_attributes = True
