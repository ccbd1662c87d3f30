"""
Error taxonomy shared by the service layer and the API layer.

Services raise these exceptions; ``main.create_app`` registers handlers
that turn them into JSON responses of the form ``{"error": message}``
with the status code stored on the exception class.
"""


class StorefrontError(Exception):
    """Base class for all storefront errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(StorefrontError, ValueError):
    """Missing or malformed input."""

    status_code = 400


class NotFound(StorefrontError, LookupError):
    """Unknown product or cart entry."""

    status_code = 404


class StoreError(StorefrontError):
    """The underlying SQLite store failed."""

    status_code = 500
