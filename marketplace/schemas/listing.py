"""
Listing Pydantic schemas
"""
from typing import List, Optional

from .base import CamelModel, UTCDateTime


class ListingCreate(CamelModel):
    """Schema for creating a listing"""
    title: str
    description: Optional[str] = None
    event_type: str
    colors: List[str] = []
    images: List[str] = []
    latitude: float
    longitude: float
    address: Optional[str] = None
    creator_id: Optional[str] = None
    creator_name: str


class ListingResponse(ListingCreate):
    """Schema for listing response"""
    id: str
    created_at: UTCDateTime
