import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("IMAGE_BASE_URL", "https://images.example.com")

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models.term import SearchTerm


@pytest.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def seed(db):
    async def _seed(terms: dict[str, int], **extra):
        db.add_all(
            [SearchTerm(term=term, popularity=popularity, **extra) for term, popularity in terms.items()]
        )
        await db.commit()

    return _seed


@pytest.fixture
def sample_terms():
    return {
        "java": 50,
        "javascript": 80,
        "js": 30,
        "python": 90,
        "react": 75,
        "preact": 95,
        "react native": 75,
        "go": 40,
    }
