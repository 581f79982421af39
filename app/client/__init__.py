from app.client.api import SuggestClient, SuggestFetchError
from app.client.autocomplete import Autocomplete
from app.client.cache import SuggestionCache
from app.client.coordinator import QueryCoordinator, QueryState
from app.client.selection import SelectionState

__all__ = [
    "Autocomplete",
    "QueryCoordinator",
    "QueryState",
    "SelectionState",
    "SuggestClient",
    "SuggestFetchError",
    "SuggestionCache",
]
