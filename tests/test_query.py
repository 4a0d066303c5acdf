"""Tests for query string construction."""

from fellowship.filters.filter import Filter, FilterOperator
from fellowship.models.resources import Movie, Quote
from fellowship.retrieval.query import build_query, build_url, encode_component


def test_limit_page_then_filters_in_order():
    f1 = Filter.on(Movie, "name", FilterOperator.MATCH, "Fellowship")
    f2 = Filter.on(Movie, "runtime_in_minutes", FilterOperator.GREATER_THAN_OR_EQUAL, "160")

    query = build_query(limit=5, page=2, filters=[f1, f2])

    assert query == f"limit=5&page=2&{f1}&{f2}"
    assert query.split("&") == ["limit=5", "page=2", "name=Fellowship", "runtimeInMinutes>=160"]


def test_filter_order_is_preserved():
    f1 = Filter("a", FilterOperator.EXISTS)
    f2 = Filter("b", FilterOperator.NOT_EXISTS)

    assert build_query(filters=[f2, f1]) == "!b&a"
    assert build_query(filters=[f1, f2]) == "a&!b"


def test_optional_parts_are_omitted():
    assert build_query() == ""
    assert build_query(limit=10) == "limit=10"
    assert build_query(page=3) == "page=3"
    assert build_query(filters=[]) == ""


def test_zero_limit_is_still_emitted():
    assert build_query(limit=0, page=0) == "limit=0&page=0"


def test_build_url_without_query_is_bare_path():
    assert build_url("movie") == "movie"
    assert build_url("movie/123/quote", filters=None) == "movie/123/quote"


def test_build_url_appends_query():
    f = Filter.on(Quote, "dialog", FilterOperator.REGEX, "/ring/i")
    assert build_url("quote", limit=2, page=2, filters=[f]) == "quote?limit=2&page=2&dialog=/ring/i"


def test_values_are_percent_encoded_by_default():
    f = Filter("name", FilterOperator.MATCH, "Frodo & Sam=#1")
    assert build_query(filters=[f]) == "name=Frodo%20%26%20Sam%3D%231"


def test_non_ascii_values_are_encoded():
    f = Filter("name", FilterOperator.MATCH, "Éowyn")
    assert build_query(filters=[f]) == "name=%C3%89owyn"


def test_in_lists_and_regex_slashes_stay_literal():
    in_filter = Filter("race", FilterOperator.IN, "Hobbit,Human")
    regex_filter = Filter("name", FilterOperator.REGEX, "/foo/i")

    assert build_query(filters=[in_filter, regex_filter]) == "race=Hobbit,Human&name=/foo/i"


def test_operator_syntax_is_never_encoded():
    f = Filter("runtimeInMinutes", FilterOperator.LESS_THAN_OR_EQUAL, "100")
    assert build_query(filters=[f, Filter("name", FilterOperator.NOT_EXISTS)]) == "runtimeInMinutes<=100&!name"


def test_raw_mode_passes_values_through():
    f = Filter("name", FilterOperator.MATCH, "Frodo & Sam")
    assert build_query(filters=[f], encode_values=False) == "name=Frodo & Sam"


def test_encode_component():
    assert encode_component("_id") == "_id"
    assert encode_component("a/b,c") == "a/b,c"
    assert encode_component("a+b") == "a%2Bb"
