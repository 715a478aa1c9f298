# heritage_recipes/models/schemas.py
# Pydantic models for request bodies and responses.
# Field names are camelCase to match the frontend (imageUrl, prepTime, ...).

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# upper bounds keep the ints well inside what BSON can store (8 bytes)
MAX_MINUTES = 100_000
MAX_SERVINGS = 10_000

class Category(str, Enum):
    Breakfast = "Breakfast"
    Lunch = "Lunch"
    Dinner = "Dinner"
    Dessert = "Dessert"
    Snacks = "Snacks"
    Drinks = "Drinks"

def _required_text(v: str) -> str:
    s = v.strip()
    if not s:
        raise ValueError("must not be empty")
    return s

def _optional_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    return v.strip() or None

def _required_lines(v: List[str]) -> List[str]:
    out = [_required_text(s) for s in v]
    if not out:
        raise ValueError("must contain at least one entry")
    return out

# ------------------------------
# Recipes
# ------------------------------

class RecipeIn(BaseModel):
    """Full recipe payload. Also used to re-validate a merged partial update."""
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: str
    description: str
    ingredients: List[str]
    instructions: List[str]
    imageUrl: Optional[str] = None
    cuisine: Optional[str] = None
    diet: Optional[str] = None
    category: Category
    prepTime: int = Field(..., ge=0, le=MAX_MINUTES, strict=True)
    cookTime: int = Field(..., ge=0, le=MAX_MINUTES, strict=True)
    servings: int = Field(..., ge=1, le=MAX_SERVINGS, strict=True)

    @field_validator("title", "description")
    @classmethod
    def _v_text(cls, v):
        return _required_text(v)

    @field_validator("ingredients", "instructions")
    @classmethod
    def _v_lines(cls, v):
        return _required_lines(v)

    @field_validator("imageUrl", "cuisine", "diet")
    @classmethod
    def _v_optional(cls, v):
        return _optional_text(v)

# Fields a client may change. ownerId/createdAt are not here on purpose:
# unknown keys are rejected.
EDITABLE_FIELDS = tuple(RecipeIn.model_fields)

class RecipeUpdate(BaseModel):
    """Partial update. Only keys present in the body are merged."""
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    imageUrl: Optional[str] = None
    cuisine: Optional[str] = None
    diet: Optional[str] = None
    category: Optional[Category] = None
    prepTime: Optional[int] = Field(default=None, ge=0, le=MAX_MINUTES, strict=True)
    cookTime: Optional[int] = Field(default=None, ge=0, le=MAX_MINUTES, strict=True)
    servings: Optional[int] = Field(default=None, ge=1, le=MAX_SERVINGS, strict=True)

class RecipeFilter(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    search: Optional[str] = None
    category: Optional[Category] = None

    @field_validator("search")
    @classmethod
    def _v_search(cls, v):
        return _optional_text(v)

class RecipeOut(BaseModel):
    id: str
    title: str
    description: str
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    imageUrl: Optional[str] = None
    cuisine: Optional[str] = None
    diet: Optional[str] = None
    category: str
    prepTime: int
    cookTime: int
    servings: int
    ownerId: str
    ownerName: Optional[str] = None   # None once the owner account is gone
    createdAt: datetime
    updatedAt: datetime

class FavoriteToggleOut(BaseModel):
    message: str = "Favorite toggled"
    isFavorite: bool

class MessageOut(BaseModel):
    message: str

# ------------------------------
# Users / auth
# ------------------------------

class RegisterIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    email: str
    password: str

class LoginIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str

class UserOut(BaseModel):
    id: str
    name: str
    email: str

class AuthOut(BaseModel):
    user: UserOut
    token: str
