"""Resource clients: the public query surface of the SDK.

Clients only compose the fetcher. They do not page, cache or retry; each
call is exactly one request.
"""

from .base import ResourceClient
from .client import FellowshipClient
from .movies_api import MoviesClient
from .quotes_api import QuotesClient

__all__ = ["FellowshipClient", "MoviesClient", "QuotesClient", "ResourceClient"]
