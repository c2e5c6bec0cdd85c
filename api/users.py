"""User API router.

Creates user profiles and returns the caller's own profile. Identity is
owned by the upstream auth provider; this table only holds profile data.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ValidationError
from core.logger import get_logger
from core.repository import save
from database import models
from database.deps import get_current_user, get_db_write
from schemas.user_schema import UserCreateRequest, UserOut, UserResponse

logger = get_logger("api.users")
router = APIRouter(prefix="/api/users", tags=["users"])


def user_to_out(user: models.User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        name=user.name,
        phone=user.phone,
        timezone=user.timezone,
        created_at=user.created_at.isoformat(),
    )


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db_write)):
    """Create a user profile.

    Raises:
        ValidationError: If the email is already registered.
    """
    email = payload.email.lower()
    if db.query(models.User).filter(models.User.email == email).first():
        raise ValidationError("A user with this email already exists", field="email")

    user = save(db, models.User(
        email=email,
        name=payload.name,
        phone=payload.phone,
        timezone=payload.timezone,
    ))
    logger.info("User created with id=%s", user.id)
    return UserResponse(user=user_to_out(user))


@router.get("/me", response_model=UserResponse)
def get_me(user: models.User = Depends(get_current_user)):
    return UserResponse(user=user_to_out(user))
