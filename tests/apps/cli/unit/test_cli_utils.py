"""
Unit tests for CLI helpers.
"""

import pytest

from apps.cli.utils import build_term_filter, column_key, parse_sort
from entity_search.opensearch.entities import Document
from entity_search.opensearch.services import SortOrder


@pytest.mark.unit
class TestParseSort:
    """Tests for sort argument parsing."""

    def test_parses_fields_and_directions(self) -> None:
        assert parse_sort(["name", "age:desc", "id:ASC"]) == [
            ("name", SortOrder.ASC),
            ("age", SortOrder.DESC),
            ("id", SortOrder.ASC),
        ]

    def test_none_is_empty(self) -> None:
        assert parse_sort(None) == []

    @pytest.mark.parametrize("value", [":desc", "name:sideways"])
    def test_invalid_values(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_sort([value])


@pytest.mark.unit
class TestBuildTermFilter:
    """Tests for the exact-match filter helper."""

    def test_builds_keyword_term(self) -> None:
        assert build_term_filter("country", "FR") == {"term": {"country.keyword": "FR"}}

    def test_missing_field_or_value(self) -> None:
        assert build_term_filter(None, "FR") is None
        assert build_term_filter("country", None) is None


@pytest.mark.unit
class TestColumnKey:
    """Tests for the id extractor."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("abc", "abc"),
            (42, "42"),
            (42.0, "42"),
            (4.5, "4.5"),
            ("", None),
        ],
    )
    def test_extracts_id(self, value: object, expected: str | None) -> None:
        key = column_key("id")

        assert key(Document(id=value)) == expected

    def test_missing_column(self) -> None:
        assert column_key("id")(Document(name="no id")) is None
