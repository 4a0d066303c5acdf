"""Filter construction: field resolution, operators and rendering."""

from .fields import FieldSelector, resolve_field
from .filter import Filter, FilterOperator, split_regex_literal, validate_regex

__all__ = ["FieldSelector", "Filter", "FilterOperator", "resolve_field", "split_regex_literal", "validate_regex"]
