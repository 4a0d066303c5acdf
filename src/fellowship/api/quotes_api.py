from ..models.resources import Quote
from .base import ResourceClient


class QuotesClient(ResourceClient[Quote]):
    model = Quote
    collection = "quote"
    label = "quotes"

    def describe(self, item: Quote) -> str:
        return f"{item.dialog} ({item.id})"
