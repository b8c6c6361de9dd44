"""Integration-test fixtures.

Every test gets a fresh SQLite database file built from the ORM metadata and
seeded with the demo users and cards. get_db_session is overridden so the
routers, the credential gate and the repository all talk to that database.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.cc_cashcard.infrastructure.db_models import CashCardORM
from src.cc_common.database import Base, get_db_session
from src.cc_gateway.auth.password import hash_password
from src.cc_gateway.user.db_models import UserModel
from src.main import app

# (username, password, role, is_active)
DEMO_USERS = [
    ("sarah1", "abc123", "CARD-OWNER", True),
    ("kumar2", "xyz789", "CARD-OWNER", True),
    ("hank-owns-no-cards", "qrs456", "NON-OWNER", True),
    ("dora-disabled", "dis123", "CARD-OWNER", False),
]

# (id, amount_cents, owner)
DEMO_CARDS = [
    (99, 12345, "sarah1"),
    (100, 100, "sarah1"),
    (101, 15000, "sarah1"),
    (102, 20000, "kumar2"),
]


@pytest.fixture(scope="session")
def password_hashes() -> dict[str, str]:
    """bcrypt is slow on purpose; hash the demo passwords once per session."""
    return {username: hash_password(password) for username, password, _, _ in DEMO_USERS}


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path, password_hashes: dict[str, str]
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cashcard.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            UserModel(
                username=username,
                password_hash=password_hashes[username],
                role=role,
                is_active=is_active,
            )
            for username, _, role, is_active in DEMO_USERS
        )
        session.add_all(
            CashCardORM(id=card_id, amount_cents=cents, owner=owner)
            for card_id, cents, owner in DEMO_CARDS
        )
        await session.commit()

    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the seeded test database."""

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
