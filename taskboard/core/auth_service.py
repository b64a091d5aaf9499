# taskboard/core/auth_service.py
import logging
from typing import Dict, Optional, Tuple

from ..db import BaseStore
from ..models import User
from .errors import UnauthorizedError, ValidationError
from .security import TokenSigner, hash_password, verify_password
from .utils import new_id
from .validation import validate_email, validate_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Signup/signin against the users collection plus bearer token checks."""

    def __init__(self, store: BaseStore, signer: TokenSigner, bcrypt_rounds: int = 12):
        self._store = store
        self._signer = signer
        self._rounds = bcrypt_rounds

    def signup(
        self, email: Optional[str], name: Optional[str], password: Optional[str]
    ) -> Tuple[Dict[str, str], str]:
        if not email or not name or not password:
            raise ValidationError("Email, name, and password are required")
        validate_email(email)
        validate_password(password)

        # Hash outside the lock; bcrypt is deliberately slow.
        password_hash = hash_password(password, rounds=self._rounds)

        with self._store.transaction() as data:
            if any(u.get("email") == email for u in data["users"]):
                raise ValidationError("Email already registered")
            user = User(id=new_id(), email=email, name=name, password_hash=password_hash)
            data["users"].append(user.to_record())

        logger.info("User signed up id=%s", user.id)
        return user.public(), self._signer.issue(user.public())

    def signin(self, email: Optional[str], password: Optional[str]) -> Tuple[Dict[str, str], str]:
        if not email or not password:
            raise ValidationError("Email and password are required")

        record = next((u for u in self._store.read("users") if u.get("email") == email), None)
        if record is None:
            logger.info("Signin rejected: unknown email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        user = User(**record)
        if not verify_password(password, user.password_hash):
            logger.info("Signin rejected: wrong password user=%s", user.id)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return user.public(), self._signer.issue(user.public())

    def authenticate(self, token: Optional[str]) -> Dict[str, str]:
        """Claims for a bearer token, or UnauthorizedError."""
        if not token:
            raise UnauthorizedError("Unauthorized")
        claims = self._signer.verify(token)
        if claims is None:
            raise UnauthorizedError("Invalid token")
        return claims
