"""Ports for password hashing and token generation."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod


class AuthError(Exception):
    """Raised when an authentication step fails."""


class CryptoPort(ABC):
    """Password hashing and verification."""

    @abstractmethod
    def hash_password(self, plain: str) -> str:
        """Hash a plain-text password; raise AuthError on failure."""

    @abstractmethod
    def verify_password(self, plain: str, stored_hash: str) -> bool:
        """Return True if ``plain`` matches ``stored_hash``."""


class TokenPort(ABC):
    """Authentication token generation."""

    @abstractmethod
    def generate_token(self, user_id: uuid.UUID) -> str:
        """Return a signed token for the user; raise AuthError on failure."""