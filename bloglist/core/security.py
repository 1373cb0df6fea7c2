# bloglist/core/security.py

from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from bloglist.core.errors import TokenExpiredError, TokenInvalidError


ALGORITHM = "HS256"


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# -------------------------------
# Password Hashing
# -------------------------------

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify() -> None:
    """
    Burns the same time as a real comparison. Used when the username
    is unknown so login latency does not reveal which accounts exist.
    """
    pwd_context.dummy_verify()


# -------------------------------
# Identity Tokens
# -------------------------------

def create_access_token(
    data: dict,
    secret_key: str,
    ttl_seconds: int,
    algorithm: str = ALGORITHM,
) -> str:
    issued_at = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=ttl_seconds),
    })
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = ALGORITHM) -> dict:
    """
    Verifies signature and expiry and returns the claims.
    Raises TokenExpiredError or TokenInvalidError so callers can tell
    the two apart.
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except ExpiredSignatureError as exc:
        raise TokenExpiredError() from exc
    except JWTError as exc:
        raise TokenInvalidError() from exc
