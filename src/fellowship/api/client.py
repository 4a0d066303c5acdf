"""FellowshipClient: one entry point owning the fetcher and both resource clients."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ..config.loader import get_api_settings, load_config
from ..retrieval.fetcher import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ResourceFetcher
from .movies_api import MoviesClient
from .quotes_api import QuotesClient


class FellowshipClient:
    """
    Typed client for The One API.

    Example:
        >>> with FellowshipClient("my-key") as client:
        ...     movies = client.movies.get_all(limit=5)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        encode_values: bool = True,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.fetcher = ResourceFetcher(
            api_key,
            base_url,
            timeout=timeout,
            user_agent=user_agent,
            encode_values=encode_values,
            session=session,
            logger=logger,
        )
        self.movies = MoviesClient(self.fetcher, logger=logger)
        self.quotes = QuotesClient(self.fetcher, logger=logger)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], **kwargs: Any) -> "FellowshipClient":
        """Build from a resolved ``api`` settings dict (see get_api_settings)."""
        return cls(
            settings["api_key"],
            settings.get("base_url") or DEFAULT_BASE_URL,
            timeout=settings.get("timeout_seconds"),
            user_agent=settings.get("user_agent") or DEFAULT_USER_AGENT,
            encode_values=settings.get("encode_query_values", True),
            **kwargs,
        )

    @classmethod
    def from_config(cls, path: Optional[Path] = None, **kwargs: Any) -> "FellowshipClient":
        """Build from a YAML config file."""
        return cls.from_settings(get_api_settings(load_config(path)), **kwargs)

    def close(self) -> None:
        self.fetcher.close()

    def __enter__(self) -> "FellowshipClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
