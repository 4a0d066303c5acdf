"""Resource fetcher: one GET per call, classified into a page or an error."""

import logging
import threading
import time
from typing import Iterable, List, Optional, Type
from urllib.parse import urljoin

import requests
from pydantic import ValidationError

from ..errors import ApiError, RequestCancelled, ResponseDecodeError
from ..filters.filter import Filter
from ..models.resources import ApiResponse, ModelT
from ..utils.logging import BestEffortLogger, get_logger
from .query import build_url

DEFAULT_BASE_URL = "https://the-one-api.dev/v2/"
DEFAULT_USER_AGENT = "fellowship-sdk/1.0"
CHUNK_SIZE = 16 * 1024


def _charset_from_content_type(content_type: str) -> Optional[str]:
    for param in content_type.split(";")[1:]:
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "charset":
            return value.strip().strip("\"'") or None
    return None


class ResourceFetcher:
    """Issues authenticated GET requests and decodes page envelopes."""

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
        """
        Initialize fetcher.

        Args:
            api_key: Bearer token sent with every request
            base_url: API root; relative resource paths are joined onto it
            timeout: Passed to the transport as-is. None = no timeout.
            user_agent: User-Agent header value
            encode_values: Percent-encode filter fields/values in queries
            session: Optional pre-built requests session (tests, proxies)
            logger: Optional log sink; defaults to the module logger
        """
        if not api_key:
            raise ValueError("API key is required")

        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout = timeout
        self.encode_values = encode_values
        self.logger = BestEffortLogger(logger if logger is not None else get_logger(__name__))

        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "User-Agent": user_agent,
        })
        self.logger.debug(f"ResourceFetcher initialized with base URL: {self.base_url}")

    def url_for(
        self,
        path: str,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        filters: Optional[Iterable[Filter]] = None,
    ) -> str:
        """Absolute request URL for a resource path plus query."""
        relative = build_url(path.lstrip("/"), limit, page, filters, encode_values=self.encode_values)
        return urljoin(self.base_url, relative)

    def fetch(
        self,
        path: str,
        model: Type[ModelT],
        limit: Optional[int] = None,
        page: Optional[int] = None,
        filters: Optional[Iterable[Filter]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ApiResponse[ModelT]:
        """
        GET one page of ``model`` documents.

        ``cancel_event`` is checked before sending, once the response
        headers arrive, and between body chunks. It cannot interrupt a
        connect or a server that has not answered yet; pass ``timeout``
        to bound that wait.

        Args:
            path: Resource path relative to the base URL (e.g. "movie/123")
            model: Document model for the envelope's ``docs``
            limit: Optional page size
            page: Optional page number
            filters: Optional filters, rendered in order
            cancel_event: Set it from another thread to abandon the request

        Returns:
            Decoded page envelope

        Raises:
            ApiError: Non-2xx status; message is the raw body
            ResponseDecodeError: 2xx body is not a valid envelope
            RequestCancelled: cancel_event was set
            requests.RequestException: Transport failure
        """
        url = self.url_for(path, limit, page, filters)
        start_time = time.monotonic()
        self._raise_if_cancelled(cancel_event, url, start_time)

        self.logger.debug(f"Making HTTP request to: {url}")

        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as e:
            duration_ms = (time.monotonic() - start_time) * 1000
            self.logger.error(f"HTTP request to {url} failed after {duration_ms:.1f}ms: {e}")
            raise
        try:
            self._raise_if_cancelled(cancel_event, url, start_time)
            body = self._read_body(response, cancel_event, url, start_time)
        finally:
            response.close()

        duration_ms = (time.monotonic() - start_time) * 1000
        status_code = response.status_code
        self.logger.debug(f"HTTP request completed in {duration_ms:.1f}ms with status: {status_code}")

        if not 200 <= status_code < 300:
            message = self._decode_text(response, body)
            self.logger.error(f"API request failed: {status_code} {message}")
            raise ApiError(status_code, message)

        try:
            result = ApiResponse[model].model_validate_json(body)
        except ValidationError as e:
            self.logger.error(f"Failed to decode response from {url}: {e.error_count()} error(s)")
            raise ResponseDecodeError(status_code, str(e)) from e

        self.logger.debug(f"Successfully deserialized {len(result.docs)} items")
        return result

    def _read_body(
        self,
        response: requests.Response,
        cancel_event: Optional[threading.Event],
        url: str,
        start_time: float,
    ) -> bytes:
        """Read the streamed body, checking for cancellation between chunks."""
        chunks: List[bytes] = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            self._raise_if_cancelled(cancel_event, url, start_time)
            if chunk:
                chunks.append(chunk)
        self._raise_if_cancelled(cancel_event, url, start_time)
        return b"".join(chunks)

    def _raise_if_cancelled(
        self,
        cancel_event: Optional[threading.Event],
        url: str,
        start_time: float,
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            duration_ms = (time.monotonic() - start_time) * 1000
            self.logger.info(f"Request cancelled after {duration_ms:.1f}ms: {url}")
            raise RequestCancelled(f"Request to {url} was cancelled")

    @staticmethod
    def _decode_text(response: requests.Response, body: bytes) -> str:
        """Decode an error body with the Content-Type charset, else UTF-8."""
        encoding = _charset_from_content_type(response.headers.get("Content-Type", "")) or "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ResourceFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
