from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db as db_session
from app.exceptions import Unauthorized
from app.schemas.user import Identity
from app.utils.security import InvalidToken, verify_token

# Read the raw header; the Bearer format is checked below
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)

def get_db(db: AsyncSession = Depends(db_session)):
    return db

async def get_current_user(authorization: str | None = Depends(authorization_header)) -> Identity:
    if not authorization:
        raise Unauthorized("No token provided")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise Unauthorized("Token error")

    try:
        return verify_token(parts[1])
    except InvalidToken:
        raise Unauthorized("Invalid token")
