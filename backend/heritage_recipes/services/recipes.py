# heritage_recipes/services/recipes.py
# Recipe CRUD with ownership checks, plus the favorites operations.
#
# Favorites policy:
# - toggle: flips membership, never checks that the recipe exists
# - add:    strict, recipe must exist and must not be a favorite yet
# - remove: idempotent
# Reads skip favorite ids whose recipe was deleted.

from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ValidationError as PydanticValidationError

from heritage_recipes.core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from heritage_recipes.db.recipes import RecipeStore
from heritage_recipes.db.users import CredentialStore
from heritage_recipes.models.schemas import EDITABLE_FIELDS, RecipeFilter, RecipeIn, RecipeUpdate
from heritage_recipes.services.utils import to_object_id

log = logging.getLogger(__name__)

RECIPE_NOT_FOUND = "Recipe not found"
USER_NOT_FOUND = "User not found"

Payload = Union[BaseModel, Mapping[str, Any]]

def _as_dict(payload: Payload) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump()
    return dict(payload or {})

def _validation_message(e: PydanticValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid recipe"

def _validate_recipe(data: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        return RecipeIn.model_validate(data).model_dump()
    except PydanticValidationError as e:
        raise ValidationError(_validation_message(e))

def _recipe_oid(recipe_id: str) -> ObjectId:
    oid = to_object_id(recipe_id)
    if oid is None:
        raise NotFoundError(RECIPE_NOT_FOUND)
    return oid

def _user_oid(user_id: str) -> ObjectId:
    oid = to_object_id(user_id)
    if oid is None:
        raise NotFoundError(USER_NOT_FOUND)
    return oid

class RecipeService:
    def __init__(self, recipes: RecipeStore, users: CredentialStore):
        self.recipes = recipes
        self.users = users

    # ------------------------------
    # Read
    # ------------------------------

    async def list(self, filter: Optional[Union[RecipeFilter, Mapping[str, Any]]] = None) -> List[Dict[str, Any]]:
        if filter is None:
            filter = RecipeFilter()
        elif not isinstance(filter, RecipeFilter):
            try:
                filter = RecipeFilter.model_validate(dict(filter))
            except PydanticValidationError as e:
                raise ValidationError(_validation_message(e))
        docs = await self.recipes.search(filter.search, filter.category)
        return await self.recipes.populate_owners(docs)

    async def get(self, recipe_id: str) -> Dict[str, Any]:
        doc = await self.recipes.find_by_id(_recipe_oid(recipe_id))
        if doc is None:
            raise NotFoundError(RECIPE_NOT_FOUND)
        return (await self.recipes.populate_owners([doc]))[0]

    # ------------------------------
    # Write (owner only)
    # ------------------------------

    async def create(self, user_id: str, payload: Payload) -> Dict[str, Any]:
        fields = _validate_recipe(_as_dict(payload))
        doc = await self.recipes.insert(_user_oid(user_id), fields)
        log.info("recipe %s created by %s", doc["_id"], user_id)
        return (await self.recipes.populate_owners([doc]))[0]

    async def _owned(self, user_id: str, recipe_id: str) -> Dict[str, Any]:
        doc = await self.recipes.find_by_id(_recipe_oid(recipe_id))
        if doc is None:
            raise NotFoundError(RECIPE_NOT_FOUND)
        if str(doc.get("ownerId")) != str(user_id):
            raise AuthorizationError("Not authorized to modify this recipe")
        return doc

    async def update(self, user_id: str, recipe_id: str, payload: Payload) -> Dict[str, Any]:
        doc = await self._owned(user_id, recipe_id)

        if isinstance(payload, RecipeUpdate):
            changes = payload.model_dump(exclude_unset=True)
        else:
            try:
                changes = RecipeUpdate.model_validate(_as_dict(payload)).model_dump(exclude_unset=True)
            except PydanticValidationError as e:
                raise ValidationError(_validation_message(e))

        # merge onto the stored fields, then check the result as a whole recipe
        merged = {k: doc.get(k) for k in EDITABLE_FIELDS}
        merged.update(changes)
        fields = _validate_recipe(merged)

        updated = await self.recipes.update_owned(doc["_id"], doc["ownerId"], fields)
        if updated is None:
            # deleted between the ownership check and the write
            raise NotFoundError(RECIPE_NOT_FOUND)
        log.info("recipe %s updated by %s", recipe_id, user_id)
        return (await self.recipes.populate_owners([updated]))[0]

    async def delete(self, user_id: str, recipe_id: str) -> None:
        doc = await self._owned(user_id, recipe_id)
        if not await self.recipes.delete_owned(doc["_id"], doc["ownerId"]):
            raise NotFoundError(RECIPE_NOT_FOUND)
        # favorites pointing here are left as is; reads skip them
        log.info("recipe %s deleted by %s", recipe_id, user_id)

    # ------------------------------
    # Favorites
    # ------------------------------

    async def toggle_favorite(self, user_id: str, recipe_id: str) -> bool:
        """Returns the new isFavorite state."""
        uid, rid = _user_oid(user_id), _recipe_oid(recipe_id)
        if await self.users.remove_favorite(uid, rid):
            return False
        if await self.users.add_favorite(uid, rid):
            return True
        if not await self.users.exists(uid):
            raise NotFoundError(USER_NOT_FOUND)
        # a concurrent request added it between our two writes
        return True

    async def add_favorite(self, user_id: str, recipe_id: str) -> None:
        uid, rid = _user_oid(user_id), _recipe_oid(recipe_id)
        if await self.recipes.find_by_id(rid) is None:
            raise NotFoundError(RECIPE_NOT_FOUND)
        if await self.users.add_favorite(uid, rid):
            return
        if not await self.users.exists(uid):
            raise NotFoundError(USER_NOT_FOUND)
        raise ConflictError("Recipe already in favorites")

    async def remove_favorite(self, user_id: str, recipe_id: str) -> None:
        rid = to_object_id(recipe_id)
        if rid is None:
            # a malformed id can't be in the set; nothing to remove
            return
        await self.users.remove_favorite(_user_oid(user_id), rid)

    async def list_favorites(self, user_id: str) -> List[Dict[str, Any]]:
        ids = await self.users.favorite_ids(_user_oid(user_id))
        if ids is None:
            raise NotFoundError(USER_NOT_FOUND)
        docs = await self.recipes.find_by_ids(ids)
        return await self.recipes.populate_owners(docs)
