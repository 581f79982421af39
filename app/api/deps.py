from fastapi import Request

from app.config import settings
from app.middleware.rate_limiter import check_rate_limit


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request) -> None:
    """Apply the anonymous per-IP rate limit."""
    await check_rate_limit(
        request,
        key=f"anon:{client_ip(request)}",
        limit=settings.rate_limit_per_minute,
    )
