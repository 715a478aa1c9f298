# heritage_recipes/db/users.py
# Credential store: user identities, password hashes and the favorites set.
# Favorites are changed only with conditional $addToSet / $pull so that
# overlapping requests from one user never overwrite each other's array.

from __future__ import annotations
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from heritage_recipes.db.indexes import USERS
from heritage_recipes.db.init import utc_now

class DuplicateEmail(Exception):
    pass

def to_public_user(doc: Dict[str, Any]) -> Dict[str, str]:
    """Public view. Never includes the password hash or favorites."""
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name", ""),
        "email": doc.get("email", ""),
    }

class CredentialStore:
    def __init__(self, db):
        self.col = db[USERS]

    # --- identities ---------------------------------------------------------

    async def create_user(self, name: str, email: str, password_hash: str) -> Dict[str, Any]:
        doc = {
            "name": name,
            "email": email,
            "password": password_hash,
            "favorites": [],
            "createdAt": utc_now(),
        }
        try:
            res = await self.col.insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateEmail(email) from e
        doc["_id"] = res.inserted_id
        return doc

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({"email": email})

    async def find_by_id(self, user_id: ObjectId) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({"_id": user_id})

    async def exists(self, user_id: ObjectId) -> bool:
        return await self.col.find_one({"_id": user_id}, {"_id": 1}) is not None

    async def list_users(self) -> List[Dict[str, Any]]:
        cursor = self.col.find({}, {"password": 0}).sort("createdAt", 1)
        return await cursor.to_list(length=None)

    async def delete_by_email(self, email: str) -> bool:
        res = await self.col.delete_one({"email": email})
        return res.deleted_count > 0

    # --- favorites ----------------------------------------------------------

    async def favorite_ids(self, user_id: ObjectId) -> Optional[List[ObjectId]]:
        """None when the user does not exist."""
        doc = await self.col.find_one({"_id": user_id}, {"favorites": 1})
        if doc is None:
            return None
        return list(doc.get("favorites") or [])

    async def add_favorite(self, user_id: ObjectId, recipe_id: ObjectId) -> bool:
        """True if the id was added; False if it was already there or the user is missing."""
        res = await self.col.update_one(
            {"_id": user_id, "favorites": {"$ne": recipe_id}},
            {"$addToSet": {"favorites": recipe_id}},
        )
        return res.matched_count > 0

    async def remove_favorite(self, user_id: ObjectId, recipe_id: ObjectId) -> bool:
        """True if the id was present and got removed."""
        res = await self.col.update_one(
            {"_id": user_id, "favorites": recipe_id},
            {"$pull": {"favorites": recipe_id}},
        )
        return res.matched_count > 0
