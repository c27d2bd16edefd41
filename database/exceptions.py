# database/exceptions.py
"""
Errors surfaced to the caller of the collections listing.

None of them is recovered from locally: the API layer maps them to HTTP
responses and any retry is the client's business.
"""


class CollectionsError(Exception):
    """Base class for collections listing errors."""


class InvalidRequest(CollectionsError):
    """No selective filter was supplied."""


class InvalidCursor(CollectionsError):
    """The continuation token could not be decoded for the active sort dimension."""


class UpstreamFailure(CollectionsError):
    """The store or the collection-set resolver failed."""


class DatabaseNotConfigured(ValueError):
    """DATABASE_URL is not set."""
