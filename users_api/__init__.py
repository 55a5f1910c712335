"""users-api: naive URL router and in-memory users CRUD server."""

from enum import Enum


class StatusCode(Enum):
    """HTTP status codes returned by the API."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


from users_api.proxy import API  # noqa: E402
from users_api.routing import (  # noqa: E402
    MatchResult,
    PatternError,
    RouteEntry,
    RoutePattern,
    RouteTable,
    dispatch,
)

__version__ = "1.0.0"

__all__ = [
    "API",
    "MatchResult",
    "PatternError",
    "RouteEntry",
    "RoutePattern",
    "RouteTable",
    "StatusCode",
    "dispatch",
]
