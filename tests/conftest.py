"""
Shared fixtures — in-memory SQLite store, seeded catalog, HTTP client.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hr_authz.core.database import get_db
from hr_authz.core.security import create_access_token
from hr_authz.models import Base, Permission, Role, RolePermission, User
from hr_authz.rbac.permission_seed import seed


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_db(db):
    await seed(db)
    return db


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    async def _make(role: str = "ROLE_EMPLOYEE", role_id: int | None = None, is_active: bool = True) -> User:
        counter["n"] += 1
        user = User(
            username=f"user{counter['n']}",
            full_name=f"Test User {counter['n']}",
            role=role,
            role_id=role_id,
            is_active=is_active,
        )
        db.add(user)
        await db.flush()
        return user

    return _make


@pytest.fixture
def make_role(db):
    async def _make(name: str, bound: tuple[str, ...] = (), legacy=None, is_system: bool = False) -> Role:
        role = Role(name=name, permissions=legacy, is_system=is_system)
        for perm_name in bound:
            perm = (
                await db.execute(select(Permission).where(Permission.name == perm_name))
            ).scalar_one_or_none()
            if perm is None:
                perm = Permission(name=perm_name, label=perm_name)
                db.add(perm)
            role.bindings.append(RolePermission(permission=perm))
        db.add(role)
        await db.flush()
        return role

    return _make


@pytest_asyncio.fixture
async def client(seeded_db):
    from hr_authz.main import create_app

    app = create_app()

    async def _get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers
