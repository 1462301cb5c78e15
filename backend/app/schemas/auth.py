from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel


class UserRegister(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: Optional[str] = Field(None, max_length=255)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class UserResponse(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    is_active: bool
    created_at: datetime


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse
