"""
Domain exceptions raised by services and dependencies.

Each error subclasses FastAPI's ``HTTPException`` so the framework
renders it with the right status code and a ``{"detail": "..."}``
body without extra exception handlers.  Services raise them directly;
routers let them propagate.
"""

from fastapi import HTTPException, status


class PokedexError(HTTPException):
    """Base class for all errors surfaced by the Pokedex API."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(status_code=self.status_code, detail=message)


class NotFoundError(PokedexError):
    """Raised when a term or id does not resolve to a stored Pokemon."""

    status_code = status.HTTP_404_NOT_FOUND


class DuplicateResourceError(PokedexError):
    """Raised when a write violates the unique ``name`` or ``no`` index."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidIdError(PokedexError):
    """Raised when a path parameter is not a valid MongoDB ObjectId."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"'{value}' is not a valid MongoId")


class InternalFailureError(PokedexError):
    """Raised for unexpected store failures.

    The message is deliberately generic; the original exception is
    logged server side and chained as ``__cause__``.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(PokedexError):
    """Raised when an external API (PokeAPI) fails during seeding."""

    status_code = status.HTTP_502_BAD_GATEWAY
