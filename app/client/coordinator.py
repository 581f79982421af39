import asyncio
import logging
from enum import Enum
from typing import Callable, Protocol

from app.client.cache import SuggestionCache
from app.client.debounce import Debouncer
from app.config import settings
from app.schemas import Suggestion, SuggestionResponse, normalize_query

logger = logging.getLogger("termsuggest.client.coordinator")


class QueryState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    SETTLED = "settled"


class SuggestionSource(Protocol):
    async def fetch_suggestions(self, query: str, limit: int = 10) -> SuggestionResponse: ...


class QueryCoordinator:
    """Turns raw keystrokes into published suggestion lists.

    Input is debounced; once typing pauses the normalized query is served
    from the cache or fetched from ``source``. Every input change bumps a
    request generation, and a fetch result is only published when its
    generation and echoed query are still the current ones. Older results
    are cached but never displayed.

    ``on_publish`` is called with the current suggestions on every state
    transition, so listeners can reset their selection.
    """

    def __init__(
        self,
        source: SuggestionSource,
        cache: SuggestionCache | None = None,
        *,
        debounce_seconds: float | None = None,
        limit: int = 10,
        on_publish: Callable[[tuple[Suggestion, ...]], None] | None = None,
    ):
        if debounce_seconds is None:
            debounce_seconds = settings.debounce_ms / 1000
        self.source = source
        self.cache = cache if cache is not None else SuggestionCache()
        self.limit = limit
        self.on_publish = on_publish

        self.state = QueryState.IDLE
        self.raw_input = ""
        self.current_query = ""
        self.suggestions: tuple[Suggestion, ...] = ()

        self._generation = 0
        self._debouncer = Debouncer(debounce_seconds)
        self._fetches: set[asyncio.Task] = set()
        self._closed = False

    @property
    def generation(self) -> int:
        return self._generation

    def input_changed(self, text: str) -> None:
        """Record new raw input and restart the debounce window."""
        if self._closed:
            return
        self.raw_input = text
        self.current_query = normalize_query(text)
        self._generation += 1
        self._debouncer.replace(self._on_quiet)
        self._transition(QueryState.DEBOUNCING)

    def replace_input(self, text: str) -> None:
        """Set the input text without fetching (used after a commit)."""
        if self._closed:
            return
        self.raw_input = text
        self.current_query = normalize_query(text)
        self._generation += 1
        self._debouncer.cancel()
        self._transition(QueryState.SETTLED)

    async def load_initial(self) -> None:
        """Show a random sample of terms before the user starts typing."""
        generation = self._generation
        try:
            response = await self.source.fetch_suggestions("", self.limit)
        except Exception as e:
            logger.warning("Initial suggestions unavailable: %s", e)
            return
        if self._closed or generation != self._generation:
            return
        self._transition(QueryState.IDLE, tuple(response.suggestions))

    def teardown(self) -> None:
        """Cancel the pending timer and in-flight fetches; ignore later input."""
        self._closed = True
        self._debouncer.cancel()
        for task in list(self._fetches):
            task.cancel()
        self._fetches.clear()

    def _on_quiet(self) -> None:
        if self._closed:
            return
        query = self.current_query
        if not query:
            self._transition(QueryState.IDLE, ())
            return

        cached = self.cache.get(query)
        if cached is not None:
            logger.debug("Cache hit for q=%r", query)
            self._transition(QueryState.SETTLED, cached)
            return

        self._transition(QueryState.FETCHING)
        task = asyncio.create_task(self._fetch(query, self._generation))
        self._fetches.add(task)
        task.add_done_callback(self._fetches.discard)

    async def _fetch(self, query: str, generation: int) -> None:
        try:
            response = await self.source.fetch_suggestions(query, self.limit)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Suggestion fetch failed for q=%r: %s", query, e)
            if self._is_current(generation, query):
                self._transition(QueryState.SETTLED, ())
            return

        self.cache.put(response.query, response.suggestions)
        if not self._is_current(generation, response.query):
            logger.debug(
                "Discarding stale response for q=%r (current q=%r)",
                response.query,
                self.current_query,
            )
            return
        self._transition(QueryState.SETTLED, tuple(response.suggestions))

    def _is_current(self, generation: int, query: str) -> bool:
        return (
            not self._closed
            and generation == self._generation
            and query == self.current_query
        )

    def _transition(
        self, state: QueryState, suggestions: tuple[Suggestion, ...] | None = None
    ) -> None:
        self.state = state
        if suggestions is not None:
            self.suggestions = suggestions
        if self.on_publish is not None:
            self.on_publish(self.suggestions)
