import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import enforce_rate_limit
from app.database import get_db
from app.schemas import normalize_query
from app.services.exceptions import InvalidTerm, StoreUnavailable
from app.services.popularity import record_selection
from app.services.ranking import search_terms

logger = logging.getLogger("termsuggest.api")

router = APIRouter(dependencies=[Depends(enforce_rate_limit)])


@router.get("/search")
async def search(
    q: str = Query("", description="Search term; empty for a random sample"),
    limit: str | None = Query(None, description="Maximum suggestions (default 10)"),
    db: AsyncSession = Depends(get_db),
):
    """Get ranked term suggestions.

    Prefix matches come before substring matches, then higher popularity,
    then shorter terms. Without a query a random sample is returned.
    """
    query = normalize_query(q)
    try:
        suggestions = await search_terms(query, db, limit)
    except StoreUnavailable as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"suggestions": [], "error": str(e)},
        )

    return {
        "suggestions": [s.model_dump() for s in suggestions],
        "query": query,
    }


@router.post("/search/popularity")
async def record_popularity(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Record that a term was chosen.

    Body (JSON or form-encoded):
      - term (str): the chosen term
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        body = await request.form()
    else:
        try:
            body = await request.json()
        except ValueError:
            body = None
    term = body.get("term") if hasattr(body, "get") else None

    try:
        await record_selection(term if isinstance(term, str) else None, db)
    except InvalidTerm as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})
    except StoreUnavailable as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)}
        )

    return {"success": True}
