# heritage_recipes/scripts/clear_recipes.py
# Deletes every recipe. Favorites that pointed at them are left dangling,
# which the read path already tolerates.

import asyncio
import sys

from heritage_recipes.core.config import get_settings
from heritage_recipes.db.init import MongoConnection
from heritage_recipes.db.recipes import RecipeStore

async def clear(db) -> int:
    return await RecipeStore(db).delete_all()

async def main() -> int:
    settings = get_settings()
    mongo = MongoConnection(settings.MONGO_URI, settings.MONGO_DB)
    try:
        db = await mongo.connect(retries=3)
    except RuntimeError as e:
        print(f"Error connecting to MongoDB: {e}")
        return 2
    try:
        deleted = await clear(db)
        print(f"Deleted {deleted} recipes from collection")
        return 0
    finally:
        mongo.close()

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
