"""Resolve field selectors to wire names."""

from typing import Any, Callable, List, Type, Union

from ..errors import InvalidFieldSelector
from ..models.resources import WireModel

FieldSelector = Union[str, Callable[[Any], Any]]


class _FieldRead:
    """Result of reading one attribute off a _RecordingModel."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __getattr__(self, attr: str) -> Any:
        raise InvalidFieldSelector(f"Nested field path '{self.name}.{attr}' is not supported")

    def __bool__(self) -> bool:
        raise InvalidFieldSelector(f"Field '{self.name}' cannot be used in a condition")


class _RecordingModel:
    """Stand-in model instance handed to accessor callables; records every read."""

    __slots__ = ("_reads",)

    def __init__(self):
        self._reads: List[_FieldRead] = []

    def __getattr__(self, name: str) -> _FieldRead:
        read = _FieldRead(name)
        self._reads.append(read)
        return read


def _selector_to_name(selector: FieldSelector) -> str:
    if isinstance(selector, str):
        return selector
    if not callable(selector):
        raise InvalidFieldSelector(f"Field selector must be a string or callable, got {type(selector).__name__}")

    stand_in = _RecordingModel()
    try:
        result = selector(stand_in)
    except InvalidFieldSelector:
        raise
    except Exception as e:
        raise InvalidFieldSelector(f"Field selector is not a plain field read: {e}") from e

    if not isinstance(result, _FieldRead):
        raise InvalidFieldSelector(f"Field selector returned {result!r} instead of reading a field")
    if len(stand_in._reads) != 1 or stand_in._reads[0] is not result:
        names = ", ".join(read.name for read in stand_in._reads)
        raise InvalidFieldSelector(f"Field selector must read exactly one field, read: {names}")
    return result.name


def resolve_field(model: Type[WireModel], selector: FieldSelector) -> str:
    """
    Resolve a selector against a model to the field's wire name.

    Args:
        model: WireModel subclass that declares the field
        selector: In-language field name, wire name, or an accessor such
            as ``lambda m: m.runtime_in_minutes``

    Returns:
        The wire name (alias if declared, else the field name)

    Raises:
        InvalidFieldSelector: If the selector is not a single read of a
            declared field
    """
    name = _selector_to_name(selector)
    if not name:
        raise InvalidFieldSelector("Field selector resolved to an empty name")

    wire_names = model.wire_names()
    if name in wire_names:
        return wire_names[name]
    if name in wire_names.values():
        return name

    raise InvalidFieldSelector(f"'{name}' is not a field of {model.__name__}")
