import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.database import engine
from app.core.exceptions import BookingError, NotFoundError, StoreError, ValidationError

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(f"Starting booking API ({settings.APP_ENV})")
    yield
    await engine.dispose()


app = FastAPI(
    title="Booking Page API",
    description="Public booking pages and appointment management for small businesses",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


_ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    StoreError: 503,
}


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    """Render domain errors in the same shape as HTTPException."""
    status_code = _ERROR_STATUS.get(type(exc), 400)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.get("/health")
async def health():
    return {"status": "ok", "service": "booking-api", "version": "0.1.0"}
