# heritage_recipes/main.py
# FastAPI app setup and router wiring
# Routers are split per feature (auth / recipes / favorites)

from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from heritage_recipes.api.routes_auth import router as auth_router
from heritage_recipes.api.routes_favorites import router as favorites_router
from heritage_recipes.api.routes_recipes import router as recipes_router
from heritage_recipes.core.config import DEV_JWT_SECRET, Settings, get_settings
from heritage_recipes.core.deps import build_security
from heritage_recipes.core.errors import register_error_handlers
from heritage_recipes.core.log_config import configure_logging
from heritage_recipes.db.indexes import ensure_indexes
from heritage_recipes.db.init import MongoConnection

log = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None, mongo: Optional[MongoConnection] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if settings.JWT_SECRET == DEV_JWT_SECRET:
            log.warning("[startup] JWT_SECRET is the development default")
        # 1) db first (retries, 1s apart)
        db = await app.state.mongo.connect(retries=settings.DB_CONNECT_RETRIES)
        try:
            # 2) indexes
            await ensure_indexes(db, settings.TEXT_SEARCH_MODE)
            yield
        finally:
            app.state.mongo.close()
            log.info("[shutdown] db closed")

    app = FastAPI(title="Heritage Recipes - API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.mongo = mongo or MongoConnection(settings.MONGO_URI, settings.MONGO_DB)
    app.state.hasher, app.state.tokens = build_security(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/health")
    async def health(request: Request):
        ok = {"status": "ok", "db": "skip"}
        mongo: MongoConnection = request.app.state.mongo
        if mongo.connected:
            try:
                await mongo.ping()
                ok["db"] = "ok"
            except Exception as e:
                log.warning("health db ping failed: %s", e)
                ok["db"] = "error"
        return ok

    # prefixes live in each router file
    app.include_router(auth_router)
    app.include_router(recipes_router)
    app.include_router(favorites_router)
    return app

app = create_app()
