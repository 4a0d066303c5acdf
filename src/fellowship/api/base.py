"""Shared list/lookup behaviour for resource clients."""

import logging
import threading
from typing import Generic, Iterable, List, Optional, Type
from urllib.parse import quote

from ..errors import InvalidFieldSelector
from ..filters.filter import Filter
from ..models.resources import ModelT
from ..retrieval.fetcher import ResourceFetcher
from ..utils.logging import BestEffortLogger, get_logger


class ResourceClient(Generic[ModelT]):
    """Binds a ResourceFetcher to one API collection."""

    model: Type[ModelT]
    collection: str
    label: str  # plural used in log lines

    def __init__(self, fetcher: ResourceFetcher, logger: Optional[logging.Logger] = None):
        self.fetcher = fetcher
        self.logger = BestEffortLogger(logger if logger is not None else get_logger(type(self).__module__))

    def item_path(self, resource_id: str) -> str:
        if not resource_id:
            raise ValueError(f"{self.model.__name__} id must not be empty")
        return f"{self.collection}/{quote(resource_id, safe='')}"

    def describe(self, item: ModelT) -> str:
        """Short label for log lines."""
        return item.id

    def _check_filters(self, filters: Optional[Iterable[Filter]]) -> List[Filter]:
        checked = list(filters or ())
        for f in checked:
            if f.model is not None and f.model is not self.model:
                raise InvalidFieldSelector(
                    f"Filter on {f.model.__name__}.{f.field} cannot be used with {self.model.__name__} queries"
                )
        return checked

    def get_all(
        self,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        filters: Optional[Iterable[Filter]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ModelT]:
        """Fetch one page of the collection and return its documents."""
        checked = self._check_filters(filters)
        self.logger.info(f"Getting all {self.label} with limit={limit}, page={page}, filters={len(checked)}")

        result = self.fetcher.fetch(self.collection, self.model, limit, page, checked, cancel_event=cancel_event)

        self.logger.info(f"Retrieved {len(result.docs)} {self.label}")
        return list(result.docs)

    def get_by_id(self, resource_id: str, cancel_event: Optional[threading.Event] = None) -> Optional[ModelT]:
        """Return the document with this id, or None when the page comes back empty."""
        self.logger.info(f"Getting {self.model.__name__.lower()} by ID: {resource_id}")

        result = self.fetcher.fetch(self.item_path(resource_id), self.model, cancel_event=cancel_event)

        if not result.docs:
            self.logger.warning(f"{self.model.__name__} not found: {resource_id}")
            return None
        item = result.docs[0]
        self.logger.debug(f"Found {self.model.__name__.lower()}: {self.describe(item)}")
        return item
