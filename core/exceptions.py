"""
Typed errors raised by the service layer.

Services never return an empty result to hide a failure; the HTTP layer maps
these onto status codes in main.py.
"""


class RestaurantServiceError(Exception):
    """Base class for all service-layer errors."""


class StorageError(RestaurantServiceError):
    """Database connection or query failure."""


class ExternalServiceError(RestaurantServiceError):
    """Third-party search API failure or malformed response."""


class NotFoundError(RestaurantServiceError):
    """No record exists for the requested key."""


class DuplicateUserError(RestaurantServiceError):
    """A user with the requested ID already exists."""
