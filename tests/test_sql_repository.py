import contextlib
import dataclasses
import uuid

import pytest

from authgate.sql_repository import (
    RepositoryError,
    SqlUserRepository,
    create_pool,
    metadata,
)
from authgate.users import User


def _user(**changes):
    base = User(
        id=uuid.uuid4(),
        username="alice",
        email="alice@example.com",
        password_hash="placeholder",
    )
    return dataclasses.replace(base, **changes)


@contextlib.asynccontextmanager
async def _repository(with_schema=True):
    engine = await create_pool("sqlite+aiosqlite://")
    try:
        if with_schema:
            async with engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        yield SqlUserRepository(engine)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_create_then_find_by_id():
    async with _repository() as repo:
        user = _user()
        stored = await repo.create(user)
        assert stored == user
        assert await repo.find_by_id(user.id) == user


@pytest.mark.asyncio
async def test_find_by_email():
    async with _repository() as repo:
        user = _user()
        await repo.create(user)
        assert await repo.find_by_email("alice@example.com") == user
        assert await repo.find_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_exists_by_email():
    async with _repository() as repo:
        await repo.create(_user())
        assert await repo.exists_by_email("alice@example.com") is True
        assert await repo.exists_by_email("nobody@example.com") is False


@pytest.mark.asyncio
async def test_update_changes_stored_fields():
    async with _repository() as repo:
        user = _user()
        await repo.create(user)
        changed = dataclasses.replace(user, username="bob", email="bob@example.com")
        assert await repo.update(changed) == changed
        assert await repo.find_by_id(user.id) == changed


@pytest.mark.asyncio
async def test_update_of_missing_user_fails():
    async with _repository() as repo:
        with pytest.raises(RepositoryError, match="Database error in update"):
            await repo.update(_user())


@pytest.mark.asyncio
async def test_delete_removes_only_that_user():
    async with _repository() as repo:
        first = _user()
        second = _user(email="bob@example.com")
        await repo.create(first)
        await repo.create(second)
        await repo.delete(first.id)
        await repo.delete(uuid.uuid4())
        assert await repo.find_by_id(first.id) is None
        assert await repo.find_by_id(second.id) == second


@pytest.mark.asyncio
async def test_duplicate_id_fails_in_create():
    async with _repository() as repo:
        user = _user()
        await repo.create(user)
        with pytest.raises(RepositoryError, match="Database error in create"):
            await repo.create(dataclasses.replace(user, email="bob@example.com"))


@pytest.mark.asyncio
async def test_missing_table_reports_operation():
    async with _repository(with_schema=False) as repo:
        with pytest.raises(RepositoryError, match="Database error in find_by_id"):
            await repo.find_by_id(uuid.uuid4())


@pytest.mark.asyncio
async def test_create_pool_rejects_malformed_url():
    with pytest.raises(RepositoryError, match="Failed to connect to database"):
        await create_pool("not a url")


@pytest.mark.asyncio
async def test_create_pool_reports_unreachable_database(tmp_path):
    path = tmp_path / "missing" / "users.db"
    with pytest.raises(RepositoryError, match="Failed to connect to database"):
        await create_pool(f"sqlite+aiosqlite:///{path}")