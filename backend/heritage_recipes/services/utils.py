# heritage_recipes/services/utils.py
# Small input normalization helpers shared by the services
# - path ids -> ObjectId (malformed ids never reach the store)
# - email -> lowercased lookup key

from __future__ import annotations
import re
from typing import Optional

from bson import ObjectId

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LEN = 6
MAX_PASSWORD_BYTES = 72   # bcrypt ignores anything past this

def to_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Returns None for anything that is not a 24-hex ObjectId string."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)

def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()

def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))

