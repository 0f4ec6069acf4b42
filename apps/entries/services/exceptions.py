"""
Domain-specific exceptions for entries app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class EntriesServiceError(Exception):
    """Base exception for all entries service errors."""
    pass


class EntryNotFoundError(EntriesServiceError):
    """Raised when an entry does not exist."""
    pass


class PurchaseMemberNotFoundError(EntriesServiceError):
    """Raised when a member is not part of the entry."""
    pass


class InvalidMembersError(EntriesServiceError):
    """Raised when a member list is malformed (e.g. duplicate member ids)."""
    pass


class ProductReferenceError(EntriesServiceError):
    """Raised when an entry points at a product that does not exist."""
    pass
