from app.schemas import Suggestion


class SelectionState:
    """Keyboard/pointer cursor over the current suggestion list.

    ``index`` is -1 when nothing is selected.
    """

    def __init__(self):
        self.suggestions: tuple[Suggestion, ...] = ()
        self.index = -1

    def reset(self, suggestions=None) -> None:
        if suggestions is not None:
            self.suggestions = tuple(suggestions)
        self.index = -1

    @property
    def selected(self) -> Suggestion | None:
        if 0 <= self.index < len(self.suggestions):
            return self.suggestions[self.index]
        return None

    def move_down(self) -> None:
        if not self.suggestions:
            return
        self.index = min(self.index + 1, len(self.suggestions) - 1)

    def move_up(self) -> None:
        self.index = max(self.index - 1, -1)

    def select(self, index: int) -> None:
        if 0 <= index < len(self.suggestions):
            self.index = index

    def cancel(self) -> None:
        self.index = -1

    def choose(self, raw_input: str) -> str | None:
        """Resolve the term a commit would choose, or None for a no-op."""
        if self.selected is not None:
            return self.selected.term
        text = (raw_input or "").strip()
        return text or None
