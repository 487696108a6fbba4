"""
Listing endpoints
"""
from typing import List

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.exceptions import NotFoundError
from marketplace.schemas.listing import ListingCreate, ListingResponse
from marketplace.services import ListingDirectory

router = APIRouter(prefix="/api/listings", tags=["listings"])


@router.get("", response_model=List[ListingResponse])
def get_listings(db: Session = Depends(get_db)):
    """All listings, newest first"""
    return [ListingResponse.model_validate(listing) for listing in ListingDirectory.list_all(db)]


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: str, db: Session = Depends(get_db)):
    listing = ListingDirectory.get(db, listing_id)
    if listing is None:
        raise NotFoundError("Listing not found")
    return ListingResponse.model_validate(listing)


@router.post("", response_model=ListingResponse, status_code=201)
def create_listing(listing: ListingCreate = Body(...), db: Session = Depends(get_db)):
    return ListingResponse.model_validate(ListingDirectory.create(db, listing))


@router.delete("/{listing_id}", status_code=204)
def delete_listing(listing_id: str, db: Session = Depends(get_db)):
    """Delete a listing; messages about it are kept"""
    ListingDirectory.delete(db, listing_id)
    return Response(status_code=204)
