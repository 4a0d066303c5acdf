"""Exception types raised by the Fellowship SDK."""

from typing import Any


class FellowshipError(Exception):
    """Base class for every error the SDK raises on purpose."""


class InvalidFieldSelector(FellowshipError):
    """A field selector does not name exactly one declared model field.

    Raised while a filter is being built, never at request time.
    """


class InvalidRegexPattern(FellowshipError):
    """A Regex/NotRegex filter value does not compile."""

    def __init__(self, pattern: str):
        super().__init__(f"Invalid regex pattern: {pattern}")
        self.pattern = pattern


class UnsupportedOperator(FellowshipError):
    """Operator is not part of FilterOperator."""

    def __init__(self, operator: Any):
        super().__init__(f"Unsupported operator {operator!r}")
        self.operator = operator


class ApiError(FellowshipError):
    """The API answered with a non-2xx status.

    ``message`` is the raw response body, empty string included.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(f"API Error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ResponseDecodeError(FellowshipError):
    """A 2xx response body could not be parsed as a page envelope."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Could not decode response (status {status_code}): {detail}")
        self.status_code = status_code


class RequestCancelled(Exception):
    """The caller's cancel event was set before the request finished.

    Not a FellowshipError subclass.
    """
