from bson import ObjectId

from heritage_recipes.db.init import MongoConnection
from heritage_recipes.db.recipes import RecipeStore
from heritage_recipes.scripts import manage_users
from heritage_recipes.scripts.clear_recipes import clear

def parse(*argv):
    return manage_users.build_parser().parse_args(list(argv))

async def test_seed_test_user_is_idempotent(db, users, capsys):
    assert await manage_users.run(parse("seed-test-user"), db) == 0
    assert await manage_users.run(parse("seed-test-user"), db) == 0
    assert len(await users.list_users()) == 1
    assert "already exists" in capsys.readouterr().out

async def test_create_list_delete(db, users, capsys):
    assert await manage_users.run(parse("create", "--name", "Asha", "--email", "Asha@Example.com", "--password", "pw12345"), db) == 0
    assert await manage_users.run(parse("create", "--name", "Asha", "--email", "asha@example.com", "--password", "pw12345"), db) == 1

    assert await manage_users.run(parse("list"), db) == 0
    out = capsys.readouterr().out
    assert "asha@example.com" in out
    assert "$2" not in out  # no bcrypt hashes

    assert await manage_users.run(parse("delete", "--email", "asha@example.com"), db) == 0
    assert await manage_users.run(parse("delete", "--email", "asha@example.com"), db) == 1
    assert await users.list_users() == []

async def test_clear_recipes(db):
    store = RecipeStore(db)
    await store.insert(ObjectId(), {"title": "A"})
    await store.insert(ObjectId(), {"title": "B"})
    assert await clear(db) == 2
    assert await store.search() == []

async def test_manage_users_reports_unreachable_db(monkeypatch, capsys):
    async def refuse(self, retries=1, interval=1.0):
        raise RuntimeError("MongoDB connection failed after 3 attempts")

    monkeypatch.setattr(MongoConnection, "connect", refuse)
    assert await manage_users.main(["list"]) == 2
    assert "Error connecting to MongoDB" in capsys.readouterr().out
