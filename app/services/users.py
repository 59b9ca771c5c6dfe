import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import Conflict, NotFound, Unauthorized, ValidationError
from app.models.user import User
from app.schemas.user import Identity, UserLogin, UserRegister
from app.utils.security import get_password_hash, issue_token, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas"


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, username=user.username, email=user.email)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def register_user(db: AsyncSession, data: UserRegister) -> tuple[User, str]:
    if not data.username or not data.email or not data.password:
        raise ValidationError("Todos los campos son requeridos")

    if await get_user_by_email(db, data.email):
        raise Conflict("Este correo electrónico ya está registrado")

    user = User(
        username=data.username,
        email=data.email,
        hashed_password=get_password_hash(data.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race on email, or the username is taken
        await db.rollback()
        raise Conflict("El nombre de usuario o el correo electrónico ya está registrado")
    await db.refresh(user)

    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user, issue_token(identity_of(user))


async def authenticate_user(db: AsyncSession, data: UserLogin) -> tuple[User, str]:
    if not data.email or not data.password:
        raise ValidationError("Correo electrónico y contraseña son requeridos")

    user = await get_user_by_email(db, data.email)
    # Same answer for unknown email and wrong password
    if not user or not verify_password(data.password, user.hashed_password):
        logger.warning("Rejected login for %s", data.email)
        raise Unauthorized(INVALID_CREDENTIALS)

    return user, issue_token(identity_of(user))


async def get_profile(db: AsyncSession, identity: Identity) -> User:
    result = await db.execute(select(User).filter(User.id == identity.id))
    user = result.scalars().first()
    if not user:
        raise NotFound("Usuario no encontrado")
    return user
