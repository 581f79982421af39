class SuggestError(Exception):
    """Base class for term suggestion errors."""


class StoreUnavailable(SuggestError):
    """The backing term store is unreachable or returned an error."""


class InvalidTerm(SuggestError):
    """A feedback term was empty or whitespace-only."""
