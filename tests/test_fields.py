"""Tests for field selector resolution."""

import pytest

from fellowship.errors import InvalidFieldSelector
from fellowship.filters.fields import resolve_field
from fellowship.models.resources import Movie, Quote


@pytest.mark.parametrize(
    "selector,expected",
    [
        ("name", "name"),
        ("id", "_id"),
        ("runtime_in_minutes", "runtimeInMinutes"),
        ("rotten_tomatoes_score", "rottenTomatoesScore"),
        (lambda m: m.id, "_id"),
        (lambda m: m.name, "name"),
        (lambda m: m.academy_award_wins, "academyAwardWins"),
    ],
)
def test_movie_selectors_resolve_to_wire_names(selector, expected):
    assert resolve_field(Movie, selector) == expected


def test_wire_name_is_accepted_as_selector():
    assert resolve_field(Movie, "runtimeInMinutes") == "runtimeInMinutes"
    assert resolve_field(Quote, "_id") == "_id"


def test_identity_field_is_always_underscore_id():
    assert resolve_field(Movie, lambda m: m.id) == "_id"
    assert resolve_field(Quote, lambda q: q.id) == "_id"


def test_unknown_field_is_rejected():
    with pytest.raises(InvalidFieldSelector, match="not a field of Movie"):
        resolve_field(Movie, "dialog")


def test_unknown_attribute_in_accessor_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Quote, lambda q: q.runtime_in_minutes)


def test_constant_accessor_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, lambda m: "name")


def test_computed_accessor_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, lambda m: m.runtime_in_minutes + 1)


def test_comparison_accessor_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, lambda m: m.runtime_in_minutes == 1)


def test_nested_path_is_rejected():
    with pytest.raises(InvalidFieldSelector, match="Nested field path"):
        resolve_field(Quote, lambda q: q.movie.name_part)


def test_method_call_on_field_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, lambda m: m.name.upper())


def test_non_callable_selector_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, 42)


def test_empty_selector_is_rejected():
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, "")


@pytest.mark.parametrize(
    "selector",
    [
        lambda m: m.name or m.id,
        lambda m: m.name and m.id,
        lambda m: (m.name, m.id)[1],
        lambda m: m.id if m.name else m.name,
    ],
    ids=["or", "and", "tuple-index", "conditional"],
)
def test_accessor_combining_fields_is_rejected(selector):
    with pytest.raises(InvalidFieldSelector):
        resolve_field(Movie, selector)


def test_accessor_reading_extra_field_is_rejected():
    def selector(m):
        m.dialog
        return m.name

    with pytest.raises(InvalidFieldSelector, match="exactly one field"):
        resolve_field(Movie, selector)


def test_repeated_resolution_does_not_share_reads():
    assert resolve_field(Movie, lambda m: m.name) == "name"
    assert resolve_field(Movie, lambda m: m.name) == "name"
