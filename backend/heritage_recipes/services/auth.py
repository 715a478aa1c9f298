# heritage_recipes/services/auth.py
# Registration / login / bearer token verification

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple

from heritage_recipes.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from heritage_recipes.core.security import PasswordHasher, TokenCodec, TokenError
from heritage_recipes.db.users import CredentialStore, DuplicateEmail, to_public_user
from heritage_recipes.services.utils import (
    MAX_PASSWORD_BYTES, MIN_PASSWORD_LEN, is_valid_email, normalize_email, to_object_id,
)

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid token"

class AuthService:
    def __init__(self, users: CredentialStore, hasher: PasswordHasher, tokens: TokenCodec):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, name: Optional[str], email: Optional[str], raw_password: Optional[str]) -> Tuple[Dict[str, str], str]:
        """Creates the account and returns (public user, token)."""
        name = (name or "").strip()
        email = normalize_email(email)
        if not name or not email or not raw_password:
            raise ValidationError("Name, email and password are required")
        if not is_valid_email(email):
            raise ValidationError("Invalid email address")
        if len(raw_password) < MIN_PASSWORD_LEN:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LEN} characters")
        if len(raw_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if await self.users.find_by_email(email) is not None:
            raise ConflictError("User with this email already exists")
        try:
            doc = await self.users.create_user(name, email, self.hasher.hash(raw_password))
        except DuplicateEmail:
            # lost a race against a concurrent registration
            raise ConflictError("User with this email already exists")

        user = to_public_user(doc)
        log.info("registered user %s", user["id"])
        return user, self.tokens.sign(user["id"])

    async def login(self, email: Optional[str], raw_password: Optional[str]) -> Tuple[Dict[str, str], str]:
        # unknown email and wrong password must be indistinguishable
        doc = await self.users.find_by_email(normalize_email(email))
        digest = doc.get("password") if doc else None
        if not self.hasher.verify(raw_password or "", digest) or doc is None:
            log.info("login failed")
            raise AuthError(INVALID_CREDENTIALS)
        user = to_public_user(doc)
        return user, self.tokens.sign(user["id"])

    def verify_token(self, token: Optional[str]) -> str:
        """Stateless check; returns the user id carried by the token."""
        if not token:
            raise AuthError("Authentication required")
        try:
            user_id = self.tokens.verify(token)
        except TokenError:
            raise AuthError(INVALID_TOKEN)
        if to_object_id(user_id) is None:
            raise AuthError(INVALID_TOKEN)
        return user_id

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        oid = to_object_id(user_id)
        doc = await self.users.find_by_id(oid) if oid is not None else None
        if doc is None:
            raise NotFoundError("User not found")
        return to_public_user(doc)
