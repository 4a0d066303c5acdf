"""Fellowship SDK: typed, filterable client for The One API."""

from .api import FellowshipClient, MoviesClient, QuotesClient
from .errors import (
    ApiError,
    FellowshipError,
    InvalidFieldSelector,
    InvalidRegexPattern,
    RequestCancelled,
    ResponseDecodeError,
    UnsupportedOperator,
)
from .filters import Filter, FilterOperator
from .models import ApiResponse, Movie, Quote

__version__ = "1.0.0"

__all__ = [
    "ApiError",
    "ApiResponse",
    "FellowshipClient",
    "FellowshipError",
    "Filter",
    "FilterOperator",
    "InvalidFieldSelector",
    "InvalidRegexPattern",
    "Movie",
    "MoviesClient",
    "Quote",
    "QuotesClient",
    "RequestCancelled",
    "ResponseDecodeError",
    "UnsupportedOperator",
]
