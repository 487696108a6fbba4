"""
Message endpoints
"""
from typing import List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.schemas.message import ConversationResponse, MessageCreate, MessageResponse
from marketplace.services import ConversationService, MessageService, cache_service, open_thread

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("/conversations/{user_id}", response_model=List[ConversationResponse])
def get_conversations(user_id: str, db: Session = Depends(get_db)):
    """Conversation list for a user, most recently active first"""
    cached = cache_service.get_conversations(user_id)
    if cached is not None:
        return cached

    summaries = ConversationService.list_conversations(db, user_id)
    result = [
        ConversationResponse.from_summary(summary).model_dump(by_alias=True, mode="json")
        for summary in summaries
    ]

    cache_service.set_conversations(user_id, result)
    return result


@router.get("/{user_id}/{listing_id}/{other_user_id}", response_model=List[MessageResponse])
def get_thread(
    user_id: str,
    listing_id: str,
    other_user_id: str,
    db: Session = Depends(get_db)
):
    """Chronological thread; incoming messages are marked read"""
    messages = open_thread(db, user_id, listing_id, other_user_id)
    return [MessageResponse.model_validate(msg) for msg in messages]


@router.post("", response_model=MessageResponse, status_code=201)
def send_message(message: MessageCreate = Body(...), db: Session = Depends(get_db)):
    """
        Send a message about a listing
        Request body:
        {
            "senderId": "...",
            "receiverId": "...",
            "listingId": "...",
            "content": "Is this arch available in June?"
        }
    """
    new_message = MessageService.send(
        db,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        listing_id=message.listing_id,
        content=message.content,
    )
    return MessageResponse.model_validate(new_message)
