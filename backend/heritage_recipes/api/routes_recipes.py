# heritage_recipes/api/routes_recipes.py
# Recipe CRUD + search + favorite toggle. Every route needs a bearer token.

from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from heritage_recipes.core.deps import get_current_user_id, get_recipe_service
from heritage_recipes.models.schemas import (
    Category, FavoriteToggleOut, MessageOut, RecipeFilter, RecipeIn, RecipeOut, RecipeUpdate,
)
from heritage_recipes.services.recipes import RecipeService

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

@router.get("", response_model=List[RecipeOut])
async def list_recipes(
    search: Optional[str] = Query(None, description="free text over title + description"),
    category: Optional[Category] = Query(None),
    _: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await svc.list(RecipeFilter(search=search, category=category))

# static paths first so "favorites" is not taken as an id
@router.get("/favorites", response_model=List[RecipeOut])
async def list_favorites(
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await svc.list_favorites(user_id)

@router.get("/{recipe_id}", response_model=RecipeOut)
async def get_recipe(
    recipe_id: str,
    _: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await svc.get(recipe_id)

@router.post("", response_model=RecipeOut, status_code=201)
async def create_recipe(
    payload: RecipeIn,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await svc.create(user_id, payload)

@router.put("/{recipe_id}", response_model=RecipeOut)
async def update_recipe(
    recipe_id: str,
    payload: RecipeUpdate,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await svc.update(user_id, recipe_id, payload)

@router.delete("/{recipe_id}", response_model=MessageOut)
async def delete_recipe(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    await svc.delete(user_id, recipe_id)
    return {"message": "Recipe deleted successfully"}

@router.post("/{recipe_id}/favorite", response_model=FavoriteToggleOut)
async def toggle_favorite(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    is_favorite = await svc.toggle_favorite(user_id, recipe_id)
    return {"message": "Favorite toggled", "isFavorite": is_favorite}
