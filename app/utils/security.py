from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.config import settings
from app.schemas.user import Identity

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class InvalidToken(Exception):
    """Raised when a token is malformed, tampered with or expired."""


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def issue_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    """Sign a token carrying the caller's id, username and email."""
    return create_access_token(
        {
            "sub": str(identity.id),
            "id": identity.id,
            "username": identity.username,
            "email": identity.email,
        },
        expires_delta=expires_delta,
    )


def verify_token(token: str) -> Identity:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return Identity(
            id=payload["id"],
            username=payload["username"],
            email=payload["email"],
        )
    except (JWTError, KeyError, ValidationError) as e:
        raise InvalidToken(str(e)) from e
