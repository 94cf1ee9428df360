"""Exceptions raised by the search engine."""


class SearchServiceError(Exception):
    """Base class for search engine errors."""


class CatalogError(SearchServiceError):
    """The catalog store failed to answer a query."""


class SearchFailedError(SearchServiceError):
    """A search request could not be completed.

    Raised for any upstream catalog failure; partial catalog results are
    never returned to the caller.
    """

    def __init__(self, message: str = "Search failed"):
        super().__init__(message)
        self.message = message
