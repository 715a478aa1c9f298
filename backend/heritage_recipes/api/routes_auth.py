# heritage_recipes/api/routes_auth.py
# Account endpoints: register / login / me

from __future__ import annotations

from fastapi import APIRouter, Depends

from heritage_recipes.core.deps import get_auth_service, get_current_user_id
from heritage_recipes.models.schemas import AuthOut, LoginIn, RegisterIn, UserOut
from heritage_recipes.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/register", response_model=AuthOut, status_code=201)
async def register(payload: RegisterIn, auth: AuthService = Depends(get_auth_service)):
    user, token = await auth.register(payload.name, payload.email, payload.password)
    return {"user": user, "token": token}

@router.post("/login", response_model=AuthOut)
async def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    user, token = await auth.login(payload.email, payload.password)
    return {"user": user, "token": token}

@router.get("/me", response_model=UserOut)
async def me(
    user_id: str = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
):
    return await auth.get_user(user_id)
