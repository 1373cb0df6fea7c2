# bloglist/core/middleware.py

import logging
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from bloglist.core.config import Settings
from bloglist.core.errors import BloglistError, UnauthorizedError
from bloglist.core.security import decode_access_token
from bloglist.database import get_db
from bloglist.models.user import User


logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# -------------------------------
# Token Extraction
# -------------------------------

def extract_token(request: Request) -> str | None:
    """
    Returns the bearer token from the Authorization header, or None
    when the header is missing or uses another scheme.
    """
    authorization = request.headers.get("authorization")
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return None


def _lookup_user(db: Session, claims: dict) -> User | None:
    user_id = claims.get("id")
    if not user_id:
        return None
    return db.get(User, str(user_id))


def resolve_identity(token: str | None, secret_key: str, db: Session, algorithm: str = "HS256") -> User | None:
    """
    Maps a token to the user it was issued for. Every failure (bad
    signature, expired, missing id, deleted user) yields None so that
    handlers see "no identity" the same way whether or not a header
    was sent.
    """
    if token is None:
        return None

    try:
        claims = decode_access_token(token, secret_key, algorithm)
    except BloglistError as exc:
        logger.info("Ignoring unusable bearer token: %s", exc.message)
        return None

    return _lookup_user(db, claims)


# -------------------------------
# FastAPI Dependencies
# -------------------------------

def user_extractor(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User | None:
    user = resolve_identity(extract_token(request), settings.secret_key, db, settings.algorithm)
    request.state.user = user
    return user


def require_user(user: User | None = Depends(user_extractor)) -> User:
    """
    Rejects the request with 401 when no identity was resolved. Runs as a
    dependency, so it fires before the request body is validated.
    """
    if user is None:
        raise UnauthorizedError()
    return user


def require_token_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Strict variant of user_extractor: token problems are raised as
    TokenInvalidError / TokenExpiredError instead of being swallowed.
    """
    token = extract_token(request)
    if token is None:
        raise UnauthorizedError()

    claims = decode_access_token(token, settings.secret_key, settings.algorithm)
    user = _lookup_user(db, claims)
    if user is None:
        raise UnauthorizedError()

    request.state.user = user
    return user
