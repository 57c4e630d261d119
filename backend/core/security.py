"""core/security.py — API key generation and hashing.

Only the hash of a key is stored (users.api_key_hash); the plain key is shown
once, when it is issued.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from dataclasses import dataclass

from core.config import settings


@dataclass(frozen=True)
class ApiKeyParts:
    prefix: str
    plain: str
    hashed: str


def generate_api_key(prefix_len: int = 8) -> ApiKeyParts:
    # e.g. ak_Xy3k9QaB_<random>
    raw = secrets.token_urlsafe(32)
    prefix = raw[:prefix_len]
    plain = f"ak_{prefix}_{raw}"
    return ApiKeyParts(prefix=prefix, plain=plain, hashed=hash_api_key(plain))


def hash_api_key(plain: str) -> str:
    salted = (plain + settings.api_key_pepper.get_secret_value()).encode("utf-8")
    digest = hashlib.sha256(salted).digest()
    return base64.b64encode(digest).decode("utf-8")
