# heritage_recipes/core/security.py
# Credential hasher (passlib/bcrypt) and bearer token codec (python-jose JWT)

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

class PasswordHasher:
    """One-way salted hashing. There is no recovery path."""

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, raw: str) -> str:
        return self.pwd_context.hash(raw)

    def verify(self, raw: str, digest: Optional[str]) -> bool:
        if not digest:
            # keeps the unknown-user path as slow as a real check
            self.pwd_context.dummy_verify()
            return False
        try:
            return self.pwd_context.verify(raw, digest)
        except (ValueError, TypeError):
            return False

class TokenError(Exception):
    pass

class TokenCodec:
    """Signs and verifies time-bound tokens whose only claim is the user id."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_minutes: int = 60 * 24 * 7):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(minutes=ttl_minutes)

    def sign(self, user_id: str, ttl: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": user_id,
            "iat": now,
            "exp": now + (ttl if ttl is not None else self.ttl),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Returns the user id. Expiry is checked here, not at issuance."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise TokenError(str(e)) from e
        sub = payload.get("sub")
        if not sub or not isinstance(sub, str):
            raise TokenError("missing subject")
        return sub
