"""
Pydantic schemas for User-related requests and responses.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class LoginRequest(BaseModel):
    """Request schema for POST /login."""
    user_id: str = Field(min_length=1)
    password: str


class LoginResponse(BaseModel):
    """Response schema for a successful POST /login."""
    status: str = "OK"
    user_id: str
    name: str


class UserCreate(BaseModel):
    """Request schema for POST /users."""
    user_id: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        """bcrypt only accepts up to 72 bytes."""
        if len(v.encode()) > 72:
            raise ValueError("password cannot be longer than 72 bytes")
        return v


class UserResponse(BaseModel):
    """Response schema for GET /users/{user_id}."""
    user_id: str
    name: str
