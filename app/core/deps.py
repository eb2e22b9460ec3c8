"""FastAPI dependencies for owner authentication.

Sign-up and login live with the external auth provider; this service only
verifies the bearer token it issues and reads the owner id from `sub`.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.models.business import Business
from app.services.businesses import get_business_for_owner

security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> dict | None:
    """Decode and verify a JWT. Returns None if invalid or expired."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError:
        return None


async def get_current_owner_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Extract and validate the bearer token, return the owner's user id."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    owner_id: str | None = payload.get("sub")
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return owner_id


async def get_current_business(
    owner_id: str = Depends(get_current_owner_id),
    db: AsyncSession = Depends(get_db),
) -> Business:
    """The signed-in owner's business. NotFoundError (404) until one is created."""
    return await get_business_for_owner(db, owner_id)
