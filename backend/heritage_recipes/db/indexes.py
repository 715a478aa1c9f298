# heritage_recipes/db/indexes.py
# Collection indexes. Awaited once from app startup (and by the admin scripts).

import logging

from pymongo import ASCENDING, DESCENDING, TEXT

log = logging.getLogger(__name__)

USERS = "users"
RECIPES = "recipes"

async def ensure_user_indexes(db):
    # emails are stored lowercased, so a plain unique index is case-insensitive
    await db[USERS].create_index([("email", ASCENDING)], unique=True, name="email_1")

async def ensure_recipe_indexes(db, text_search_mode: str = "text"):
    col = db[RECIPES]
    await col.create_index([("category", ASCENDING)], name="category_1")
    await col.create_index([("createdAt", DESCENDING)], name="createdAt_-1")
    await col.create_index([("ownerId", ASCENDING)], name="ownerId_1")
    if text_search_mode == "text":
        await col.create_index(
            [("title", TEXT), ("description", TEXT)], name="title_description_text"
        )

async def ensure_indexes(db, text_search_mode: str = "text"):
    await ensure_user_indexes(db)
    await ensure_recipe_indexes(db, text_search_mode)
    log.info("indexes ensured (text_search_mode=%s)", text_search_mode)
