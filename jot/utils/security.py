"""Security utilities: password hashing, JWT tokens."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError

from jot.errors import HashingError, TokenInvalid

logger = logging.getLogger(__name__)

# Argon2id with the library's default memory/time cost; parameters are
# recorded in every hash so they can change without breaking old ones.
_hasher = PasswordHasher()


# --- Password Hashing ---

def hash_password(password: str) -> str:
    """Return a freshly salted argon2id hash of ``password``."""
    try:
        return _hasher.hash(password)
    except Argon2HashingError as e:
        logger.error("Password hashing failed: %s", e)
        raise HashingError() from e


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored hash. Malformed hashes never match."""
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


# --- JWT Tokens ---

@dataclass(frozen=True)
class TokenClaims:
    sub: str
    iat: int
    exp: int

    @property
    def user_id(self) -> int:
        """Subject as a numeric user id. Raises TokenInvalid if it is not one."""
        try:
            return int(self.sub)
        except ValueError as e:
            raise TokenInvalid() from e


def create_token(user_id: int, secret: str, ttl: timedelta, algorithm: str = "HS256") -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Decode and validate a JWT token.

    Signature, structure and expiry are checked together; every failure is
    reported as TokenInvalid so callers cannot tell expired from forged.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.PyJWTError as e:
        raise TokenInvalid() from e

    return TokenClaims(sub=str(payload["sub"]), iat=int(payload["iat"]), exp=int(payload["exp"]))
