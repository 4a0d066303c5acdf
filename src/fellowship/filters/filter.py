"""Typed query filters."""

import re
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Type

from ..errors import InvalidFieldSelector, InvalidRegexPattern, UnsupportedOperator
from ..models.resources import WireModel
from .fields import FieldSelector, resolve_field


class FilterOperator(str, Enum):
    MATCH = "match"
    NOT_MATCH = "not_match"
    IN = "in"  # value is a comma-joined list
    NOT_IN = "not_in"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"
    REGEX = "regex"
    NOT_REGEX = "not_regex"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"


# (prefix, separator) per operator; a separator of None means no value part
_FRAGMENTS = {
    FilterOperator.MATCH: ("", "="),
    FilterOperator.IN: ("", "="),
    FilterOperator.REGEX: ("", "="),
    FilterOperator.NOT_MATCH: ("", "!="),
    FilterOperator.NOT_IN: ("", "!="),
    FilterOperator.NOT_REGEX: ("", "!="),
    FilterOperator.GREATER_THAN: ("", ">"),
    FilterOperator.GREATER_THAN_OR_EQUAL: ("", ">="),
    FilterOperator.LESS_THAN: ("", "<"),
    FilterOperator.LESS_THAN_OR_EQUAL: ("", "<="),
    FilterOperator.EXISTS: ("", None),
    FilterOperator.NOT_EXISTS: ("!", None),
}

_REGEX_OPERATORS = (FilterOperator.REGEX, FilterOperator.NOT_REGEX)


def _coerce_operator(operator: Any) -> FilterOperator:
    if isinstance(operator, FilterOperator):
        return operator
    try:
        return FilterOperator(operator)
    except ValueError:
        pass
    if isinstance(operator, str):
        try:
            return FilterOperator[operator.upper()]
        except KeyError:
            pass
    raise UnsupportedOperator(operator)


def split_regex_literal(literal: str) -> Tuple[str, int]:
    """
    Split a regex literal into a pattern and ``re`` flags.

    ``/ring/i`` -> ("ring", re.IGNORECASE); ``/ring/`` or anything else after
    the closing slash -> ("ring", 0); a bare pattern is returned as-is.
    """
    if len(literal) >= 2 and literal.startswith("/"):
        closing = literal.rfind("/")
        if closing > 0:
            flags = re.IGNORECASE if literal[closing + 1:] == "i" else 0
            return literal[1:closing], flags
    return literal, 0


def validate_regex(literal: str) -> None:
    pattern, flags = split_regex_literal(literal)
    try:
        re.compile(pattern, flags)
    except re.error as e:
        raise InvalidRegexPattern(literal) from e


@dataclass(frozen=True)
class Filter:
    """
    One query condition: field, operator and optional value.

    Build with ``Filter.on(Movie, "name", FilterOperator.MATCH, "x")`` to
    resolve the field from a model, or pass an already resolved wire name
    as ``field``. Instances are immutable.
    """

    field: str
    operator: FilterOperator
    value: Optional[str] = None
    model: Optional[Type[WireModel]] = dataclass_field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.field, str) or not self.field:
            raise InvalidFieldSelector("Filter field must be a non-empty wire name")
        operator = _coerce_operator(self.operator)
        object.__setattr__(self, "operator", operator)
        if self.value is not None and not isinstance(self.value, str):
            object.__setattr__(self, "value", str(self.value))
        if operator in _REGEX_OPERATORS and self.value is not None:
            validate_regex(self.value)

    @classmethod
    def on(
        cls,
        model: Type[WireModel],
        selector: FieldSelector,
        operator: Any,
        value: Optional[Any] = None,
    ) -> "Filter":
        """Build a filter whose field is resolved against ``model``."""
        return cls(field=resolve_field(model, selector), operator=operator, value=value, model=model)

    def render(self, encode: Optional[Callable[[str], str]] = None) -> str:
        """Render the query fragment, passing field and value through ``encode``."""
        fragment = _FRAGMENTS.get(self.operator)
        if fragment is None:
            raise UnsupportedOperator(self.operator)
        prefix, separator = fragment

        enc = encode or (lambda part: part)
        name = enc(self.field)
        if separator is None:
            return f"{prefix}{name}"
        return f"{prefix}{name}{separator}{enc(self.value or '')}"

    def __str__(self) -> str:
        return self.render()
