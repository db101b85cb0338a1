"""
User and authentication schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserRegister(BaseModel):
    """Register a new user"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Plain password; stored as a bcrypt hash")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Warehouse Admin",
                "email": "admin@example.com",
                "password": "secret123",
            }
        }


class UserLogin(BaseModel):
    """Login with email and password"""
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User response schema"""
    id: int
    name: str
    email: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Access token issued on login"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse
