"""User entity and the storage port for users."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Core user domain entity."""

    id: uuid.UUID
    username: str
    email: str
    password_hash: str


class UserRepository(ABC):
    """Storage operations for users.

    Implementations raise an exception on storage failure.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Store a new user and return it as stored."""

    @abstractmethod
    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        """Return the user with the given id, or None."""

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Return the user with the given e-mail address, or None."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Return whether a user with the given e-mail address exists."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """Overwrite the stored details of an existing user."""

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> None:
        """Remove the user with the given id."""