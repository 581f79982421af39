from app.models.term import SearchTerm

__all__ = [
    "SearchTerm",
]
