# heritage_recipes/db/recipes.py
# Recipe store: documents, text/category search, owner-name population

from __future__ import annotations
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from heritage_recipes.db.indexes import RECIPES, USERS
from heritage_recipes.db.init import utc_now

# newest first; _id breaks ties between recipes created in the same millisecond
NEWEST_FIRST = [("createdAt", -1), ("_id", -1)]

def search_tokens(text: Optional[str]) -> List[str]:
    # words for the regex fallback search, deduped in order
    seen, out = set(), []
    for w in re.findall(r"\w+", (text or "").lower()):
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out

def _regex_union(words: List[str]) -> str:
    """Escapes the tokens and ORs them together. No tokens -> a pattern that never matches."""
    safe = [re.escape(w) for w in words if w]
    if not safe:
        return "(?!)"
    return "|".join(safe)

def to_recipe_out(doc: Mapping[str, Any], owner_name: Optional[str] = None) -> Dict[str, Any]:
    owner = doc.get("ownerId")
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title", ""),
        "description": doc.get("description", ""),
        "ingredients": list(doc.get("ingredients") or []),
        "instructions": list(doc.get("instructions") or []),
        "imageUrl": doc.get("imageUrl"),
        "cuisine": doc.get("cuisine"),
        "diet": doc.get("diet"),
        "category": doc.get("category", ""),
        "prepTime": doc.get("prepTime", 0),
        "cookTime": doc.get("cookTime", 0),
        "servings": doc.get("servings", 1),
        "ownerId": str(owner) if owner is not None else "",
        "ownerName": owner_name,
        "createdAt": doc.get("createdAt"),
        "updatedAt": doc.get("updatedAt"),
    }

class RecipeStore:
    def __init__(self, db, text_search_mode: str = "text"):
        self.col = db[RECIPES]
        self.users = db[USERS]
        self.text_search_mode = text_search_mode

    # --- queries ------------------------------------------------------------

    def _search_query(self, search: Optional[str], category: Optional[str]) -> Dict[str, Any]:
        q: Dict[str, Any] = {}
        if search:
            if self.text_search_mode == "text":
                q["$text"] = {"$search": search}
            else:
                pattern = _regex_union(search_tokens(search))
                q["$or"] = [
                    {"title": {"$regex": pattern, "$options": "i"}},
                    {"description": {"$regex": pattern, "$options": "i"}},
                ]
        if category:
            q["category"] = category
        return q

    async def search(self, search: Optional[str] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
        cursor = self.col.find(self._search_query(search, category)).sort(NEWEST_FIRST)
        return await cursor.to_list(length=None)

    async def find_by_id(self, recipe_id: ObjectId) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({"_id": recipe_id})

    async def find_by_ids(self, recipe_ids: Iterable[ObjectId]) -> List[Dict[str, Any]]:
        """Missing ids are simply absent from the result."""
        ids = list(recipe_ids)
        if not ids:
            return []
        cursor = self.col.find({"_id": {"$in": ids}}).sort(NEWEST_FIRST)
        return await cursor.to_list(length=None)

    async def populate_owners(self, docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Join ownerId -> users.name for rendering."""
        owner_ids = list({d.get("ownerId") for d in docs if d.get("ownerId") is not None})
        names: Dict[ObjectId, str] = {}
        if owner_ids:
            users = await self.users.find({"_id": {"$in": owner_ids}}, {"name": 1}).to_list(length=None)
            names = {u["_id"]: u.get("name", "") for u in users}
        return [to_recipe_out(d, names.get(d.get("ownerId"))) for d in docs]

    # --- mutations ----------------------------------------------------------

    async def insert(self, owner_id: ObjectId, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = utc_now()
        doc = {**fields, "ownerId": owner_id, "createdAt": now, "updatedAt": now}
        res = await self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return doc

    async def update_owned(self, recipe_id: ObjectId, owner_id: ObjectId, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """$set on the recipe only while ownerId still matches. Returns the new document."""
        changes = {k: v for k, v in fields.items() if k not in ("_id", "ownerId", "createdAt")}
        changes["updatedAt"] = utc_now()
        return await self.col.find_one_and_update(
            {"_id": recipe_id, "ownerId": owner_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )

    async def delete_owned(self, recipe_id: ObjectId, owner_id: ObjectId) -> bool:
        res = await self.col.delete_one({"_id": recipe_id, "ownerId": owner_id})
        return res.deleted_count > 0

    async def delete_all(self) -> int:
        res = await self.col.delete_many({})
        return res.deleted_count
