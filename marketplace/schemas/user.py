"""
User Pydantic schemas
"""
from typing import Optional

from .base import CamelModel, UTCDateTime


class UserCreate(CamelModel):
    """Schema for creating user"""
    username: Optional[str] = None


class UserResponse(CamelModel):
    """Schema for user response"""
    id: str
    username: str
    created_at: UTCDateTime
