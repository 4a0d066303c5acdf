"""Movies API: list, lookup, and per-movie quotes."""

import threading
from typing import List, Optional

from ..models.resources import Movie, Quote
from .base import ResourceClient


class MoviesClient(ResourceClient[Movie]):
    model = Movie
    collection = "movie"
    label = "movies"

    def describe(self, item: Movie) -> str:
        return f"{item.name} ({item.id})"

    def get_quotes_for_movie(
        self,
        movie_id: str,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Quote]:
        """Quotes spoken in one movie (``movie/{id}/quote``)."""
        self.logger.info(f"Getting quotes for movie: {movie_id} with limit={limit}, page={page}")

        path = f"{self.item_path(movie_id)}/quote"
        result = self.fetcher.fetch(path, Quote, limit, page, cancel_event=cancel_event)

        self.logger.info(f"Retrieved {len(result.docs)} quotes for movie {movie_id}")
        return list(result.docs)
