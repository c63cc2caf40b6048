"""bcrypt password hashing and JWT token generation."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass

import bcrypt
import jwt

from authgate.ports import AuthError, CryptoPort, TokenPort

DEFAULT_COST = 12
_MAX_PASSWORD_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    # bcrypt only uses the first 72 bytes of a password.
    return plain.encode("utf-8")[:_MAX_PASSWORD_BYTES]


@dataclass(frozen=True)
class BcryptCryptoService(CryptoPort):
    """bcrypt-backed password hashing."""

    cost: int = DEFAULT_COST

    def hash_password(self, plain: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self.cost)
            return bcrypt.hashpw(_password_bytes(plain), salt).decode("ascii")
        except ValueError as exc:
            raise AuthError(f"Hash error: {exc}") from exc

    def verify_password(self, plain: str, stored_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(plain), stored_hash.encode("utf-8"))
        except ValueError:
            return False


class JwtTokenService(TokenPort):
    """HS256 JWT generation with a fixed lifetime."""

    def __init__(self, secret: str, expires_in_seconds: int) -> None:
        if expires_in_seconds < 0:
            raise ValueError("expires_in_seconds must not be negative")
        self._secret = secret
        self._expires_in_seconds = expires_in_seconds

    def generate_token(self, user_id: uuid.UUID) -> str:
        claims = {
            "sub": str(user_id),
            "exp": int(time.time()) + self._expires_in_seconds,
        }
        try:
            return jwt.encode(claims, self._secret, algorithm="HS256")
        except jwt.PyJWTError as exc:
            raise AuthError(f"JWT error: {exc}") from exc