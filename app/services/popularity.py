import logging

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.term import SearchTerm
from app.services.exceptions import InvalidTerm, StoreUnavailable

logger = logging.getLogger("termsuggest.popularity")


async def record_selection(term: str | None, db: AsyncSession) -> bool:
    """Increment the popularity of a chosen term by one.

    The increment is a single UPDATE evaluated by the store, so concurrent
    selections of the same term are all counted. Returns False when the term
    is not in the store (nothing is inserted).
    """
    value = (term or "").strip()
    if not value:
        raise InvalidTerm("Term is required")

    stmt = (
        update(SearchTerm)
        .where(func.lower(SearchTerm.term) == value.lower())
        .values(popularity=SearchTerm.popularity + 1)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await db.execute(stmt)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Popularity update failed for term=%r: %s", value, e)
        raise StoreUnavailable("Failed to update popularity") from e

    if result.rowcount == 0:
        logger.info("Ignoring selection of unknown term=%r", value)
        return False
    return True
