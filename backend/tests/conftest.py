import uuid

import httpx
import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from heritage_recipes.core.config import Settings
from heritage_recipes.core.security import PasswordHasher, TokenCodec
from heritage_recipes.db.indexes import ensure_indexes
from heritage_recipes.db.init import MongoConnection
from heritage_recipes.db.recipes import RecipeStore
from heritage_recipes.db.users import CredentialStore
from heritage_recipes.main import create_app
from heritage_recipes.services.auth import AuthService
from heritage_recipes.services.recipes import RecipeService

def _recipe_payload(**overrides):
    body = {
        "title": "Dal Tadka",
        "description": "Yellow lentils finished with a cumin and garlic tempering.",
        "ingredients": ["1 cup toor dal", "1 tsp cumin", "3 cloves garlic"],
        "instructions": ["Boil the dal", "Temper the spices", "Combine and simmer"],
        "category": "Dinner",
        "prepTime": 10,
        "cookTime": 20,
        "servings": 4,
    }
    body.update(overrides)
    return body

@pytest.fixture
def recipe_payload():
    return _recipe_payload

@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        MONGO_DB=f"test_{uuid.uuid4().hex[:8]}",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        TEXT_SEARCH_MODE="regex",
        LOG_LEVEL="WARNING",
    )

@pytest.fixture
def mongo_client():
    return AsyncMongoMockClient()

@pytest_asyncio.fixture
async def db(mongo_client, settings):
    database = mongo_client[settings.MONGO_DB]
    await ensure_indexes(database, settings.TEXT_SEARCH_MODE)
    return database

@pytest.fixture
def hasher(settings):
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

@pytest.fixture
def tokens(settings):
    return TokenCodec(settings.JWT_SECRET, ttl_minutes=settings.JWT_EXPIRE_MINUTES)

@pytest.fixture
def users(db):
    return CredentialStore(db)

@pytest.fixture
def recipes(db, settings):
    return RecipeStore(db, text_search_mode=settings.TEXT_SEARCH_MODE)

@pytest.fixture
def auth(users, hasher, tokens):
    return AuthService(users, hasher, tokens)

@pytest.fixture
def service(recipes, users):
    return RecipeService(recipes, users)

@pytest_asyncio.fixture
async def asha(auth):
    user, _ = await auth.register("Asha", "asha@example.com", "pw12345")
    return user

@pytest_asyncio.fixture
async def ben(auth):
    user, _ = await auth.register("Ben", "ben@example.com", "pw67890")
    return user

@pytest_asyncio.fixture
async def client(db, mongo_client, settings):
    app = create_app(settings, MongoConnection(settings.MONGO_URI, settings.MONGO_DB, client=mongo_client))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
