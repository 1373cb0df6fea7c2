# bloglist/api/login.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy.orm import Session

from bloglist.core.config import Settings
from bloglist.core.middleware import get_settings
from bloglist.core.security import create_access_token, dummy_verify, verify_password
from bloglist.database import get_db
from bloglist.models.user import User
from bloglist.schemas import LoginOut


logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    username: str
    password: str


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


@router.post("/login", response_model=LoginOut)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = authenticate_user(db, credentials.username, credentials.password)
    if not user:
        logger.info("Rejected login for %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid username or password"
        )

    token = create_access_token(
        data={"username": user.username, "id": user.id},
        secret_key=settings.secret_key,
        ttl_seconds=settings.token_ttl_seconds,
        algorithm=settings.algorithm,
    )
    return {"token": token, "username": user.username, "name": user.name}
