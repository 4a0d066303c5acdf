"""Resource models returned by The One API.

Wire names are declared once, as pydantic aliases. The filter field
resolver reads the same table, so a field renamed here is renamed in every
query string too.
"""

from typing import Any, Dict, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WireModel(BaseModel):
    """Base for payloads read off the wire.

    Keys are matched to wire names case-insensitively and explicit nulls
    fall back to the field default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def wire_names(cls) -> Dict[str, str]:
        """Map in-language field name -> wire name."""
        return {name: info.alias or name for name, info in cls.model_fields.items()}

    @model_validator(mode="before")
    @classmethod
    def match_wire_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        by_lower = {wire.lower(): wire for wire in cls.wire_names().values()}
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if not isinstance(key, str):
                normalized[key] = value
                continue
            target = by_lower.get(key.lower(), key)
            if key == target:
                normalized[target] = value  # exact case wins
            else:
                normalized.setdefault(target, value)
        return normalized


class Movie(WireModel):
    id: str = Field(default="", alias="_id")
    name: str = ""
    runtime_in_minutes: int = Field(default=0, alias="runtimeInMinutes")
    budget_in_millions: float = Field(default=0, alias="budgetInMillions")
    box_office_revenue_in_millions: float = Field(default=0, alias="boxOfficeRevenueInMillions")
    academy_award_nominations: int = Field(default=0, alias="academyAwardNominations")
    academy_award_wins: int = Field(default=0, alias="academyAwardWins")
    rotten_tomatoes_score: float = Field(default=0, alias="rottenTomatoesScore")


class Quote(WireModel):
    id: str = Field(default="", alias="_id")
    dialog: str = ""
    movie: str = ""  # movie _id
    character: str = ""  # character _id


ModelT = TypeVar("ModelT", bound=WireModel)


class ApiResponse(WireModel, Generic[ModelT]):
    """Page envelope wrapping every list and lookup response.

    Pagination metadata is optional on the wire; a body of ``{"docs": []}``
    is a valid, empty page.
    """

    docs: List[ModelT] = Field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0
    page: int = 0
    pages: int = 0
