import logging
import random
import re
from typing import Iterable

from sqlalchemy import Select, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.term import SearchTerm
from app.schemas import Suggestion, normalize_query
from app.services.exceptions import StoreUnavailable

logger = logging.getLogger("termsuggest.ranking")

PREFIX_MATCH = 1
SUBSTRING_MATCH = 2

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_limit(value) -> int:
    """Parse a requested limit, falling back to the default for bad input.

    Strings are read up to the first non-digit, so "5abc" gives 5.
    """
    if isinstance(value, int):
        limit = value
    else:
        match = _LEADING_INT.match(str(value)) if value is not None else None
        if match is None:
            return settings.default_suggestion_limit
        limit = int(match.group(1))
    if limit <= 0:
        return settings.default_suggestion_limit
    return limit


def rank_key(query: str, term: str, popularity: int) -> tuple[int, int, int]:
    """Sort key for a candidate: match class, then popularity DESC, then length."""
    match_class = PREFIX_MATCH if term.lower().startswith(query) else SUBSTRING_MATCH
    return (match_class, -popularity, len(term))


def rank_candidates(
    candidates: Iterable[Suggestion], term: str, limit: int = 10
) -> list[Suggestion]:
    """Rank in-memory suggestions the same way the store query does."""
    query = normalize_query(term)
    limit = coerce_limit(limit)
    pool = list(candidates)

    if not query:
        return random.sample(pool, min(limit, len(pool)))

    matches = [s for s in pool if query in s.term.lower()]
    matches.sort(key=lambda s: rank_key(query, s.term, s.popularity))
    return matches[:limit]


def _ranked_statement(query: str, limit: int) -> Select:
    lowered = func.lower(SearchTerm.term)
    match_class = case(
        (lowered.startswith(query, autoescape=True), PREFIX_MATCH),
        else_=SUBSTRING_MATCH,
    )
    return (
        select(SearchTerm)
        .where(lowered.contains(query, autoescape=True))
        .order_by(
            match_class,
            SearchTerm.popularity.desc(),
            func.length(SearchTerm.term).asc(),
        )
        .limit(limit)
    )


def _random_statement(limit: int) -> Select:
    return select(SearchTerm).order_by(func.random()).limit(limit)


async def search_terms(
    term: str | None,
    db: AsyncSession,
    limit: int | str | None = None,
) -> list[Suggestion]:
    """Return ranked suggestions for a search term.

    An empty term samples up to ``limit`` terms in random order. A non-empty
    term matches case-insensitive substrings, with prefix matches first,
    then higher popularity, then shorter terms.

    Raises StoreUnavailable if the term store fails.
    """
    query = normalize_query(term)
    limit = coerce_limit(limit)

    if query:
        stmt = _ranked_statement(query, limit)
    else:
        stmt = _random_statement(limit)

    try:
        result = await db.execute(stmt)
        records = result.scalars().all()
    except SQLAlchemyError as e:
        logger.error("Suggestion query failed for q=%r: %s", query, e)
        raise StoreUnavailable("Failed to fetch suggestions") from e

    logger.debug("q=%r limit=%d -> %d suggestions", query, limit, len(records))
    return [Suggestion.from_record(record) for record in records]
