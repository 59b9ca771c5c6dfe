from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import get_db, get_current_user
from app.exceptions import handles_errors
from app.schemas.user import (AuthResponse, Identity, ProfileResponse, UserLogin, UserRegister)
from app.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@handles_errors("Error al registrar usuario")
async def register_user(data: UserRegister, db: AsyncSession = Depends(get_db)):
    user, token = await user_service.register_user(db, data)
    return {"message": "Usuario registrado exitosamente", "user": user, "token": token}

@router.post("/login", response_model=AuthResponse)
@handles_errors("Error al iniciar sesión")
async def login_user(data: UserLogin, db: AsyncSession = Depends(get_db)):
    user, token = await user_service.authenticate_user(db, data)
    return {"message": "Inicio de sesión exitoso", "user": user, "token": token}

@router.get("/profile", response_model=ProfileResponse)
@handles_errors("Error al obtener perfil de usuario")
async def get_user_profile(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return {"user": await user_service.get_profile(db, current_user)}
