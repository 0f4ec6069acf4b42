"""
Domain-specific exceptions for masters app.

These exceptions represent missing master records and should be
caught in views and converted to appropriate HTTP responses.
"""


class MastersServiceError(Exception):
    """Base exception for all masters service errors."""
    pass


class ProductNotFoundError(MastersServiceError):
    """Raised when a product does not exist."""
    pass


class ShopNotFoundError(MastersServiceError):
    """Raised when a shop does not exist."""
    pass


class MemberNotFoundError(MastersServiceError):
    """Raised when a member does not exist."""
    pass
