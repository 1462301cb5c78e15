from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
import uuid

from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.security import decode_token
from app.core.logging_config import set_user_id
from app.models.user import User

# auto_error=False so a missing header is a 401 rather than FastAPI's default
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Resolve the bearer access token to an active user"""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials, expected_type="access")
    except AuthenticationError as e:
        raise _unauthorized(e.message)

    user_id = payload["sub"]
    try:
        uuid.UUID(user_id)  # Just validate, don't convert
    except (ValueError, TypeError):
        raise _unauthorized("Invalid user ID format")

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    # Downstream logging and per-user rate limit key
    set_user_id(str(user.id))
    request.state.user_id = str(user.id)

    return user
