from app.schemas import Suggestion


class SuggestionCache:
    """Session-lifetime map from normalized query to its last fetched results.

    Entries never expire and are not invalidated by popularity updates, so a
    hit can show an ordering that predates a later selection.
    """

    def __init__(self):
        self._entries: dict[str, tuple[Suggestion, ...]] = {}

    def get(self, query: str) -> tuple[Suggestion, ...] | None:
        return self._entries.get(query)

    def put(self, query: str, suggestions) -> None:
        self._entries[query] = tuple(suggestions)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, query: str) -> bool:
        return query in self._entries

    def __len__(self) -> int:
        return len(self._entries)
