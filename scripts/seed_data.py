"""Seed the term store with demo suggestions.

Usage:
    python -m scripts.seed_data

This script:
1. Creates the search_terms table if it does not exist
2. Inserts the demo terms, skipping any that already exist (case-insensitive)
"""

import asyncio
import sys

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.insert(0, ".")

from app.config import settings
from app.database import Base
from app.models.term import SearchTerm

# term, popularity, description, image key
SEED_TERMS = [
    ("javascript", 80, "Scripting language of the web", "logos/javascript.svg"),
    ("java", 50, "Class-based, object-oriented language for the JVM", "logos/java.svg"),
    ("typescript", 60, "JavaScript with static types", "logos/typescript.svg"),
    ("python", 90, "General-purpose language with batteries included", "logos/python.svg"),
    ("react", 75, "Library for building user interfaces", "logos/react.svg"),
    ("react native", 35, "Build native mobile apps with React", None),
    ("remix", 20, "Full stack web framework", "logos/remix.svg"),
    ("postgresql", 45, "Open source relational database", "logos/postgresql.svg"),
    ("go", 40, "Statically typed, compiled language from Google", "logos/go.svg"),
    ("rust", 55, "Systems language focused on safety", "logos/rust.svg"),
    ("ruby", 25, "Dynamic language focused on simplicity", None),
    ("ruby on rails", 22, "Web framework written in Ruby", None),
    ("node.js", 65, "JavaScript runtime built on V8", "logos/nodejs.svg"),
    ("django", 30, "High-level Python web framework", None),
    ("fastapi", 28, "Modern Python web framework", None),
    ("kotlin", 18, None, None),
    ("swift", 21, None, None),
    ("js", 30, None, None),
]


async def main():
    print("=== TermSuggest Seeder ===\n")

    engine = create_async_engine(settings.database_url, pool_size=5)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    print("[1/2] Creating tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    print("\n[2/2] Inserting demo terms...")
    inserted = 0
    async with session_factory() as db:
        for term, popularity, description, image_src in SEED_TERMS:
            existing = await db.execute(
                select(SearchTerm.id).where(func.lower(SearchTerm.term) == term.lower())
            )
            if existing.scalar_one_or_none() is not None:
                print(f"  '{term}' already exists, skipping")
                continue
            db.add(
                SearchTerm(
                    term=term,
                    popularity=popularity,
                    description=description,
                    image_src=image_src,
                )
            )
            inserted += 1
        await db.commit()

        total = await db.execute(select(func.count(SearchTerm.id)))
        print("\n=== TermSuggest Seed Complete ===")
        print(f"Inserted {inserted} terms, {total.scalar()} terms in store")
        print("API base URL: http://localhost:8000/api/v1")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
