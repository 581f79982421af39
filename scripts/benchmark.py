"""Suggestion latency benchmark.

Usage:
    python -m scripts.benchmark

Runs the ranking query for a set of prefixes (and the random-sample
branch) and reports latency percentiles and result counts.
"""

import asyncio
import statistics
import sys
import time

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.insert(0, ".")

from app.config import settings
from app.services.ranking import search_terms

TEST_QUERIES = [
    "",
    "j",
    "ja",
    "java",
    "script",
    "py",
    "re",
    "react",
    "ru",
    "sql",
    "zzz",
]
ROUNDS = 5


def _report(label: str, latencies: list[float]) -> None:
    sorted_lat = sorted(latencies)
    print(f"{label}:")
    print(f"  p50:  {sorted_lat[len(sorted_lat)//2]:6.1f} ms")
    print(f"  p95:  {sorted_lat[int(len(sorted_lat)*0.95)]:6.1f} ms")
    print(f"  p99:  {sorted_lat[-1]:6.1f} ms")
    print(f"  mean: {statistics.mean(latencies):6.1f} ms")


async def main():
    print("=== TermSuggest Benchmark ===\n")

    engine = create_async_engine(settings.database_url, pool_size=5)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    ranked_latencies = []
    random_latencies = []
    counts = {}

    async with session_factory() as db:
        for _ in range(ROUNDS):
            for query in TEST_QUERIES:
                start = time.time()
                results = await search_terms(query, db, limit=10)
                elapsed = (time.time() - start) * 1000
                if query:
                    ranked_latencies.append(elapsed)
                else:
                    random_latencies.append(elapsed)
                counts[query] = len(results)

    await engine.dispose()

    print("=== Results ===\n")
    _report("Ranked query latency", ranked_latencies)
    _report("Random sample latency", random_latencies)

    print("\nResult counts:")
    for query, count in counts.items():
        print(f"  q={query!r:10} -> {count}")

    empty = sum(1 for q, c in counts.items() if q and c == 0)
    print(f"\nZero-result queries: {empty}/{len(TEST_QUERIES) - 1}")
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
