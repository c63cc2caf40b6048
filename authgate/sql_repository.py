"""SQL-backed user repository and connection pool creation."""

from __future__ import annotations

import uuid
from typing import Any, Callable

from sqlalchemy import (
    Column,
    MetaData,
    String,
    Table,
    Uuid,
    delete,
    exists,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Result, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from authgate.users import User, UserRepository

MAX_CONNECTIONS = 5

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("username", String, nullable=False),
    Column("email", String, nullable=False),
    Column("password_hash", String, nullable=False),
)

_COLUMNS = (users.c.id, users.c.username, users.c.email, users.c.password_hash)


class RepositoryError(Exception):
    """Raised when the database cannot be reached or a query fails."""


async def create_pool(database_url: str) -> AsyncEngine:
    """Create a connection pool and check that the database is reachable."""
    try:
        url = make_url(database_url)
        options: dict[str, Any] = {}
        if url.get_backend_name() != "sqlite":
            options = {"pool_size": MAX_CONNECTIONS, "max_overflow": 0}
        engine = create_async_engine(url, **options)
    except (SQLAlchemyError, ImportError, ValueError) as exc:
        raise RepositoryError(f"Failed to connect to database: {exc}") from exc

    try:
        async with engine.connect():
            pass
    except (SQLAlchemyError, OSError) as exc:
        await engine.dispose()
        raise RepositoryError(f"Failed to connect to database: {exc}") from exc
    return engine


def _to_user(row: Any) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
    )


class SqlUserRepository(UserRepository):
    """User repository stored in the ``users`` table."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def _execute(
        self, operation: str, statement: Any, fetch: Callable[[Result], Any]
    ) -> Any:
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement)
                return fetch(result)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Database error in {operation}: {exc}") from exc

    async def create(self, user: User) -> User:
        statement = (
            insert(users)
            .values(
                id=user.id,
                username=user.username,
                email=user.email,
                password_hash=user.password_hash,
            )
            .returning(*_COLUMNS)
        )
        row = await self._execute("create", statement, lambda r: r.one())
        return _to_user(row)

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        statement = select(*_COLUMNS).where(users.c.id == user_id)
        row = await self._execute("find_by_id", statement, lambda r: r.first())
        return None if row is None else _to_user(row)

    async def find_by_email(self, email: str) -> User | None:
        statement = select(*_COLUMNS).where(users.c.email == email)
        row = await self._execute("find_by_email", statement, lambda r: r.first())
        return None if row is None else _to_user(row)

    async def exists_by_email(self, email: str) -> bool:
        statement = select(exists().where(users.c.email == email))
        found = await self._execute(
            "exists_by_email", statement, lambda r: r.scalar_one()
        )
        return bool(found)

    async def update(self, user: User) -> User:
        statement = (
            update(users)
            .where(users.c.id == user.id)
            .values(
                username=user.username,
                email=user.email,
                password_hash=user.password_hash,
            )
            .returning(*_COLUMNS)
        )
        row = await self._execute("update", statement, lambda r: r.one())
        return _to_user(row)

    async def delete(self, user_id: uuid.UUID) -> None:
        statement = delete(users).where(users.c.id == user_id)
        await self._execute("delete", statement, lambda r: None)