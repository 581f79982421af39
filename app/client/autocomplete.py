import asyncio
import logging
from typing import Callable

from app.client.cache import SuggestionCache
from app.client.coordinator import QueryCoordinator
from app.client.selection import SelectionState
from app.config import settings
from app.schemas import Suggestion

logger = logging.getLogger("termsuggest.client")

KEY_DOWN = "ArrowDown"
KEY_UP = "ArrowUp"
KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"


class Autocomplete:
    """Interaction core for an autocomplete input.

    A UI forwards typing, keys and clicks here and renders ``query``,
    ``suggestions`` and ``selected_index``. Committing a term replaces the
    input, reports the selection to the popularity endpoint in the
    background and calls ``on_search`` with the chosen term.
    """

    def __init__(
        self,
        client,
        on_search: Callable[[str], None] | None = None,
        *,
        cache: SuggestionCache | None = None,
        debounce_seconds: float | None = None,
        limit: int = 10,
        image_base_url: str | None = None,
        initial_suggestions=(),
    ):
        self.client = client
        self.on_search = on_search
        self.image_base_url = (
            settings.image_base_url if image_base_url is None else image_base_url
        )
        self.selection = SelectionState()
        self.coordinator = QueryCoordinator(
            client,
            cache,
            debounce_seconds=debounce_seconds,
            limit=limit,
            on_publish=self.selection.reset,
        )
        self.coordinator.suggestions = tuple(initial_suggestions)
        self.selection.reset(self.coordinator.suggestions)
        self._feedback: set[asyncio.Task] = set()

    @property
    def query(self) -> str:
        return self.coordinator.raw_input

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        return self.coordinator.suggestions

    @property
    def selected_index(self) -> int:
        return self.selection.index

    def type(self, text: str) -> None:
        self.coordinator.input_changed(text)

    def key(self, name: str) -> str | None:
        """Handle a key press. Returns the chosen term when Enter commits one."""
        if name == KEY_DOWN:
            self.selection.move_down()
        elif name == KEY_UP:
            self.selection.move_up()
        elif name == KEY_ENTER:
            return self.commit()
        elif name == KEY_ESCAPE:
            self.selection.cancel()
        return None

    def click(self, index: int) -> str | None:
        self.selection.select(index)
        return self.commit()

    def click_outside(self) -> None:
        self.selection.cancel()

    def commit(self) -> str | None:
        term = self.selection.choose(self.coordinator.raw_input)
        if term is None:
            return None

        self.coordinator.replace_input(term)
        self.selection.cancel()
        self._send_feedback(term)
        if self.on_search is not None:
            self.on_search(term)
        return term

    def image_url(self, suggestion: Suggestion) -> str | None:
        return suggestion.image_url(self.image_base_url)

    async def load_initial(self) -> None:
        await self.coordinator.load_initial()

    async def aclose(self) -> None:
        """Stop reacting to input and let pending feedback requests finish."""
        self.coordinator.teardown()
        if self._feedback:
            await asyncio.gather(*self._feedback, return_exceptions=True)

    def _send_feedback(self, term: str) -> None:
        task = asyncio.create_task(self.client.record_selection(term))
        self._feedback.add(task)
        task.add_done_callback(self._feedback_done)

    def _feedback_done(self, task: asyncio.Task) -> None:
        self._feedback.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Popularity update failed: %s", exc)
