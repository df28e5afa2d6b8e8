"""
Общие фикстуры: справочник упражнений и база SQLite в памяти.
Каждый тест получает чистую схему.
"""
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from database.models import Base


class IdentityShuffle:
    """Источник случайности, который ничего не перемешивает."""

    def shuffle(self, items):
        pass


@pytest.fixture
def identity_rng():
    return IdentityShuffle()


@pytest.fixture
def catalog():
    return [
        {"id": 1, "name": "Bicep Curls", "target": "biceps", "body_part": "upper arms", "equipment": "dumbbell"},
        {"id": 2, "name": "Squats", "target": "quads", "body_part": "upper legs", "equipment": "barbell"},
        {"id": 3, "name": "Push-ups", "target": "pectorals", "body_part": "chest", "equipment": "body weight"},
        {"id": 4, "name": "Hammer Curl", "target": "biceps", "body_part": "upper arms", "equipment": "dumbbell"},
        {"id": 5, "name": "Triceps Kickback", "target": "triceps", "body_part": "upper arms", "equipment": "dumbbell"},
        {"id": 6, "name": "Concentration Curl", "target": "biceps", "body_part": "upper arms", "equipment": "dumbbell"},
        {"id": 7, "name": "Skull Crusher", "target": "triceps", "body_part": "upper arms", "equipment": "ez barbell"},
        {"id": 8, "name": "Bench Press", "target": "pectorals", "body_part": "chest", "equipment": "barbell"},
        {"id": 9, "name": "Lat Pulldown", "target": "lats", "body_part": "back", "equipment": "cable"},
    ]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_pool(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(session_pool):
    async with session_pool() as session:
        yield session
