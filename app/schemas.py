from pydantic import BaseModel, ConfigDict, Field


def normalize_query(text: str | None) -> str:
    """Trim and lower-case raw user input.

    The result is both the match input for ranking and the client cache key.
    An empty string means "no filter".
    """
    if not text:
        return ""
    return text.strip().lower()


class Suggestion(BaseModel):
    """Read-only projection of a stored term, returned for one query."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    term: str
    popularity: int = 0
    description: str | None = None
    image_src: str | None = None

    @classmethod
    def from_record(cls, record) -> "Suggestion":
        return cls.model_validate(record)

    def image_url(self, base_url: str) -> str | None:
        if not self.image_src:
            return None
        if not base_url:
            return self.image_src
        return f"{base_url.rstrip('/')}/{self.image_src.lstrip('/')}"


class SuggestionResponse(BaseModel):
    suggestions: list[Suggestion] = Field(default_factory=list)
    query: str = ""
