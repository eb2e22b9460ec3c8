from fastapi import APIRouter
from app.api.v1.endpoints import businesses, services, booking, appointments

api_router = APIRouter()
api_router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(booking.router, prefix="/booking", tags=["booking"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
