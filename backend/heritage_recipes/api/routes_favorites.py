# heritage_recipes/api/routes_favorites.py
# Favorites list and the strict add / idempotent remove endpoints

from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends

from heritage_recipes.core.deps import get_current_user_id, get_recipe_service
from heritage_recipes.models.schemas import MessageOut, RecipeOut
from heritage_recipes.services.recipes import RecipeService

router = APIRouter(prefix="/api/favorites", tags=["favorites"])

@router.get("", response_model=List[RecipeOut])
async def list_favorites(
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    """Deleted recipes are silently left out."""
    return await svc.list_favorites(user_id)

@router.post("/{recipe_id}", response_model=MessageOut)
async def add_favorite(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    await svc.add_favorite(user_id, recipe_id)
    return {"message": "Added to favorites"}

@router.delete("/{recipe_id}", response_model=MessageOut)
async def remove_favorite(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    await svc.remove_favorite(user_id, recipe_id)
    return {"message": "Removed from favorites"}
