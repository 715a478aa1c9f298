# heritage_recipes/core/deps.py
# Shared FastAPI dependencies: db handle, stores/services, bearer -> user id

from __future__ import annotations
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from heritage_recipes.core.config import Settings
from heritage_recipes.core.security import PasswordHasher, TokenCodec
from heritage_recipes.db.recipes import RecipeStore
from heritage_recipes.db.users import CredentialStore
from heritage_recipes.services.auth import AuthService
from heritage_recipes.services.recipes import RecipeService

# auto_error=False so a missing header becomes our generic 401, not FastAPI's 403
bearer = HTTPBearer(auto_error=False)

def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings

def get_db(request: Request):
    # raises if startup has not connected yet
    return request.app.state.mongo.db

def get_credential_store(db=Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)

def get_recipe_store(db=Depends(get_db), settings: Settings = Depends(get_settings_dep)) -> RecipeStore:
    return RecipeStore(db, text_search_mode=settings.TEXT_SEARCH_MODE)

def get_auth_service(
    request: Request,
    users: CredentialStore = Depends(get_credential_store),
) -> AuthService:
    return AuthService(users, request.app.state.hasher, request.app.state.tokens)

def get_recipe_service(
    recipes: RecipeStore = Depends(get_recipe_store),
    users: CredentialStore = Depends(get_credential_store),
) -> RecipeService:
    return RecipeService(recipes, users)

def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    token = credentials.credentials if credentials else None
    return auth.verify_token(token)

def build_security(settings: Settings) -> tuple[PasswordHasher, TokenCodec]:
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    tokens = TokenCodec(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl_minutes=settings.JWT_EXPIRE_MINUTES,
    )
    return hasher, tokens
