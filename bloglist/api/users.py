# bloglist/api/users.py

import logging
from pydantic import BaseModel, Field
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from bloglist.core.errors import ValidationError
from bloglist.core.middleware import require_token_user
from bloglist.core.security import get_password_hash
from bloglist.database import get_db
from bloglist.models.user import User
from bloglist.schemas import UserOut


logger = logging.getLogger(__name__)

router = APIRouter()

USERNAME_TAKEN = "expected `username` to be unique"


class UserCreate(BaseModel):
    username: str = Field(min_length=3)
    name: str | None = None
    password: str = Field(min_length=3)


# -------------------------------
# User Endpoints
# -------------------------------

@router.get("/users", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """
    Lists every user together with the posts they own.
    """
    users = db.query(User).options(selectinload(User.posts)).all()
    return [UserOut.model_validate(user) for user in users]


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    """
    Registers a new user. The password only ever reaches the database
    as a bcrypt hash.
    """
    user_exists = db.query(User).filter(User.username == payload.username).first()
    if user_exists:
        raise ValidationError(USERNAME_TAKEN)

    new_user = User(
        username=payload.username,
        name=payload.name,
        password_hash=get_password_hash(payload.password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ValidationError(USERNAME_TAKEN) from exc

    db.refresh(new_user)
    logger.info("Registered user %s", new_user.username)
    return UserOut.model_validate(new_user)


@router.get("/users/me", response_model=UserOut)
def read_users_me(current_user: User = Depends(require_token_user)):
    return UserOut.model_validate(current_user)
