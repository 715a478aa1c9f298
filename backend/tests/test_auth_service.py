from datetime import timedelta

import pytest

from heritage_recipes.core.errors import AuthError, ConflictError, NotFoundError, ValidationError

async def test_register_returns_public_user_and_token(auth, users):
    user, token = await auth.register("Asha", "Asha@Example.com", "pw12345")
    assert set(user) == {"id", "name", "email"}
    assert user["email"] == "asha@example.com"
    assert auth.verify_token(token) == user["id"]

    stored = await users.find_by_email("asha@example.com")
    assert stored["password"] != "pw12345"
    assert stored["favorites"] == []

async def test_duplicate_email_conflicts_case_insensitively(auth, asha):
    with pytest.raises(ConflictError):
        await auth.register("Other", "ASHA@example.com", "another1")

@pytest.mark.parametrize(
    "name,email,password",
    (
        ("", "a@example.com", "pw12345"),
        ("A", "", "pw12345"),
        ("A", "a@example.com", ""),
        (None, "a@example.com", "pw12345"),
        ("A", "not-an-email", "pw12345"),
        ("A", "a@example.com", "short"),
        ("A", "a@example.com", "x" * 73),
        ("A", "a@example.com", "\u00e9" * 37),
    ),
)
async def test_register_validation(auth, name, email, password):
    with pytest.raises(ValidationError):
        await auth.register(name, email, password)

async def test_login_success(auth, asha):
    user, token = await auth.login("asha@example.com", "pw12345")
    assert user == asha
    assert auth.verify_token(token) == asha["id"]

async def test_login_email_is_case_insensitive(auth, asha):
    user, _ = await auth.login("  ASHA@example.com ", "pw12345")
    assert user["id"] == asha["id"]

async def test_login_failures_are_indistinguishable(auth, asha):
    with pytest.raises(AuthError) as wrong_pw:
        await auth.login("asha@example.com", "nope-nope")
    with pytest.raises(AuthError) as unknown:
        await auth.login("nobody@example.com", "pw12345")
    assert wrong_pw.value.message == unknown.value.message == "Invalid credentials"

@pytest.mark.parametrize("token", [None, "", "garbage"])
async def test_verify_token_rejects_bad_tokens(auth, token):
    with pytest.raises(AuthError):
        auth.verify_token(token)

async def test_verify_token_rejects_expired(auth, tokens, asha):
    token = tokens.sign(asha["id"], ttl=timedelta(seconds=-1))
    with pytest.raises(AuthError):
        auth.verify_token(token)

async def test_verify_token_rejects_non_object_id_subject(auth, tokens):
    with pytest.raises(AuthError):
        auth.verify_token(tokens.sign("not-an-id"))

async def test_get_user(auth, asha):
    assert await auth.get_user(asha["id"]) == asha
    with pytest.raises(NotFoundError):
        await auth.get_user("65f0c0ffee0000000000beef")

async def test_register_accepts_password_at_bcrypt_limit(auth):
    user, _ = await auth.register("Long", "long@example.com", "x" * 72)
    again, _ = await auth.login("long@example.com", "x" * 72)
    assert again == user
