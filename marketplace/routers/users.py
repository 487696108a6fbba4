"""
User endpoints
"""
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.exceptions import NotFoundError
from marketplace.schemas.user import UserCreate, UserResponse
from marketplace.services import UserDirectory

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_user(user: UserCreate = Body(...), db: Session = Depends(get_db)):
    """
        Register a new user
        Request body:
        {
            "username": "alice"
        }
    """
    return UserResponse.model_validate(UserDirectory.create(db, user.username))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = UserDirectory.get(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)
