"""Schemas for user-related requests and responses."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreateRequest(BaseModel):
    """Request payload for creating a user profile."""

    email: EmailStr = Field(..., examples=["jane@example.com"], description="Login email")
    name: str = Field(..., min_length=2, examples=["Jane Doe"], description="Display name")
    phone: Optional[str] = Field(None, examples=["+1 555 0100"])
    timezone: str = Field("UTC", examples=["Europe/Berlin"])


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    phone: Optional[str] = None
    timezone: str
    created_at: str


class UserResponse(BaseModel):
    success: bool = True
    user: UserOut
