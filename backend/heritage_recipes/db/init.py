# heritage_recipes/db/init.py
# Mongo connection utility (motor). Built once from settings, opened on startup,
# closed on shutdown, and handed to the stores instead of living in a module global.

from __future__ import annotations
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

log = logging.getLogger(__name__)

def utc_now() -> datetime:
    # Mongo keeps milliseconds and hands back naive UTC; trim and drop tzinfo
    # so fresh and re-read documents agree
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)

class MongoConnection:
    def __init__(self, uri: str, db_name: str, client: Optional[AsyncIOMotorClient] = None):
        self.uri = uri
        self.db_name = db_name
        self._client: Optional[AsyncIOMotorClient] = client
        self._db: Optional[AsyncIOMotorDatabase] = client[db_name] if client is not None else None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        # handle used by the routers; raises if startup did not connect
        if self._db is None:
            raise RuntimeError("MongoDB is not initialized yet.")
        return self._db

    @property
    def connected(self) -> bool:
        return self._db is not None

    async def connect(self, retries: int = 1, interval: float = 1.0) -> AsyncIOMotorDatabase:
        if self._db is not None:
            return self._db

        last_error: Optional[Exception] = None
        for i in range(max(retries, 1)):
            client = AsyncIOMotorClient(self.uri)
            db = client[self.db_name]
            try:
                # fails here if the server is not ready yet
                await db.command("ping")
            except Exception as e:
                client.close()
                last_error = e
                log.warning("db connect retry %d/%d: %s", i + 1, retries, e)
                await asyncio.sleep(interval)
                continue
            self._client, self._db = client, db
            log.info("db ready (%s)", self.db_name)
            return db

        raise RuntimeError(f"MongoDB connection failed after {retries} attempts") from last_error

    async def ping(self) -> bool:
        await self.db.command("ping")
        return True

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None
