# taskboard/core/security.py
import base64
import hashlib
import logging
import time
from typing import Any, Dict, Optional

import bcrypt
import jwt

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
CLAIM_KEYS = ("id", "email", "name")


def _prehash(password: str) -> bytes:
    """
    base64(sha256(password)): 44 ASCII bytes, under bcrypt's 72-byte input
    limit and free of NUL bytes, so passwords of any length are accepted.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = 12) -> str:
    """Salted bcrypt hash, returned as text so it can live in the JSON store."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("ascii"))
    except (ValueError, TypeError, UnicodeEncodeError):
        # Malformed stored hash.
        return False


class TokenSigner:
    """Issues and checks HS256 bearer tokens carrying ``{id, email, name}``."""

    def __init__(self, secret: str, ttl_seconds: int = 0):
        if not secret:
            raise ValueError("secret must not be empty")
        self._secret = secret
        self._ttl = max(0, int(ttl_seconds))

    def issue(self, claims: Dict[str, Any]) -> str:
        now = int(time.time())
        payload = {key: str(claims[key]) for key in CLAIM_KEYS}
        payload["iat"] = now
        if self._ttl:
            payload["exp"] = now + self._ttl
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[Dict[str, str]]:
        if not token or not isinstance(token, str):
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[TOKEN_ALGORITHM])
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", e)
            return None
        claims = {}
        for key in CLAIM_KEYS:
            value = payload.get(key)
            if not isinstance(value, str) or not value:
                return None
            claims[key] = value
        return claims
