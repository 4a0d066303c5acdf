"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, Iterator, List, Optional

import pytest

from fellowship.retrieval.fetcher import ResourceFetcher


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = b"",
        *,
        chunks: Optional[List[bytes]] = None,
        headers: Optional[dict] = None,
        on_chunk: Optional[Callable[[int], None]] = None,
    ):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status_code = status_code
        self.headers = dict(headers or {})
        self._chunks = chunks if chunks is not None else ([body] if body else [])
        self._on_chunk = on_chunk
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for index, chunk in enumerate(self._chunks):
            if self._on_chunk is not None:
                self._on_chunk(index)
            yield chunk

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Records GET calls and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses: Any):
        self.headers: dict = {}
        self.responses = list(responses)
        self.calls: List[dict] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]

    def close(self) -> None:
        self.closed = True


MOVIE_DOCS = [
    {
        "_id": "5cd95395de30eff6ebccde5c",
        "name": "The Fellowship of the Ring",
        "runtimeInMinutes": 178,
        "budgetInMillions": 93,
        "boxOfficeRevenueInMillions": 871.5,
        "academyAwardNominations": 13,
        "academyAwardWins": 4,
        "rottenTomatoesScore": 91,
    },
    {
        "_id": "5cd95395de30eff6ebccde5b",
        "name": "The Two Towers",
        "runtimeInMinutes": 179,
        "rottenTomatoesScore": 96,
    },
]

QUOTE_DOCS = [
    {
        "_id": "5cd96e05de30eff6ebcce7e9",
        "dialog": "Deagol!",
        "movie": "5cd95395de30eff6ebccde5d",
        "character": "5cd99d4bde30eff6ebccfe9e",
    },
    {
        "_id": "5cd96e05de30eff6ebcce7ea",
        "dialog": "The ring is mine.",
        "movie": "5cd95395de30eff6ebccde5d",
        "character": "5cd99d4bde30eff6ebccfe9e",
    },
]


def page_of(docs: List[dict], **meta: int) -> dict:
    payload = {"docs": docs, "total": len(docs), "limit": 1000, "offset": 0, "page": 1, "pages": 1}
    payload.update(meta)
    return payload


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fetcher(fake_session):
    """ResourceFetcher wired to the fake session."""
    return ResourceFetcher("test-key", "https://api.test.com/v2/", session=fake_session)
