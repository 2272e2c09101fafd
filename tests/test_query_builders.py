"""Tests for query builders."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

import pytest
from pydantic import BaseModel, Field
from requestkit import (
    AbstractQueryBuilder,
    FlatQueryBuilder,
    JsonQueryBuilder,
    ParameterTranslationError,
    QueryBuilder,
)


class Color(str, Enum):
    RED = "red"


class Priority(Enum):
    HIGH = 1


@dataclass
class Address:
    city: str
    zip_code: Optional[str] = None


@dataclass
class Search:
    q: str
    tags: list[str] = field(default_factory=list)
    page: Optional[int] = None
    exact: bool = False


class Listing(BaseModel):
    page_size: int = Field(10, alias="pageSize")
    color: Color = Color.RED
    note: Optional[str] = None


class Paged:
    def query_fields(self):
        return [("offset", 0), ("limit", 50)]


class Plain:
    def __init__(self):
        self.name = "ann"
        self._secret = "hidden"
        self.callback = lambda: None


class TestJsonQueryBuilder:
    """Tests for the default JSON query builder."""

    def test_implements_protocol(self):
        """Test that builders satisfy the QueryBuilder protocol."""
        assert isinstance(JsonQueryBuilder(), QueryBuilder)
        assert isinstance(FlatQueryBuilder(), QueryBuilder)

    def test_none_model(self):
        """Test that no model gives no map."""
        assert JsonQueryBuilder().build_primary_map(None) is None

    def test_dataclass_fields_in_order(self):
        """Test dataclass translation, None fields omitted."""
        result = JsonQueryBuilder().build_primary_map(Search(q="cats", tags=["a", "b"], exact=True))

        assert result == {"q": "cats", "tags": '["a","b"]', "exact": "true"}
        assert list(result) == ["q", "tags", "exact"]

    def test_pydantic_model_uses_alias(self):
        """Test pydantic translation with aliases and enums."""
        result = JsonQueryBuilder().build_primary_map(Listing(pageSize=20))
        assert result == {"pageSize": "20", "color": "red"}

    def test_mapping(self):
        """Test that plain mappings are accepted."""
        result = JsonQueryBuilder().build_primary_map({"a": 1, "b": None, "c": 2.5})
        assert result == {"a": "1", "c": "2.5"}

    def test_query_fields_method(self):
        """Test the explicit query_fields() contract."""
        assert JsonQueryBuilder().build_primary_map(Paged()) == {"offset": "0", "limit": "50"}

    def test_plain_object_public_attributes(self):
        """Test that private and callable attributes are skipped."""
        assert JsonQueryBuilder().build_primary_map(Plain()) == {"name": "ann"}

    def test_primitive_rendering(self):
        """Test booleans, decimals and enums."""
        result = JsonQueryBuilder().build_primary_map(
            {"yes": True, "no": False, "price": Decimal("9.90"), "prio": Priority.HIGH}
        )
        assert result == {"yes": "true", "no": "false", "price": "9.90", "prio": "1"}

    def test_nested_values_become_json(self):
        """Test nested dict and dataclass rendering."""
        result = JsonQueryBuilder().build_primary_map(
            {"filter": {"name": "café", "n": [1, 2]}, "address": Address(city="Paris")}
        )
        assert result == {
            "filter": '{"name":"café","n":[1,2]}',
            "address": '{"city":"Paris","zip_code":null}',
        }

    def test_bytes_decoded_with_charset(self):
        """Test that bytes values use the request charset."""
        result = JsonQueryBuilder().build_primary_map({"token": "é".encode("latin-1")}, charset="ISO-8859-1")
        assert result == {"token": "é"}

    def test_bytes_decode_failure(self):
        """Test that undecodable bytes raise ParameterTranslationError."""
        with pytest.raises(ParameterTranslationError) as exc_info:
            JsonQueryBuilder().build_primary_map({"token": b"\xe9"}, charset="UTF-8")
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_object_without_fields(self):
        """Test that primitives cannot be used as models."""
        with pytest.raises(ParameterTranslationError) as exc_info:
            JsonQueryBuilder().build_primary_map(42)
        assert "int" in str(exc_info.value)


class TestFlatQueryBuilder:
    """Tests for the dotted-key query builder."""

    def test_nested_mappings_expand(self):
        """Test dotted keys for nested structures."""
        result = FlatQueryBuilder().build_primary_map(
            {"user": {"name": "ann", "address": Address(city="Paris")}, "ids": [1, 2]}
        )
        assert result == {"user.name": "ann", "user.address.city": "Paris", "ids": "1,2"}

    def test_custom_separators(self):
        """Test configurable separators."""
        result = FlatQueryBuilder(separator="|", key_separator="_").build_primary_map(
            {"a": {"b": "c"}, "ids": ("x", "y")}
        )
        assert result == {"a_b": "c", "ids": "x|y"}

    def test_scalar_like_values_unquoted(self):
        """Test that values serializing to JSON strings are not quoted."""
        result = FlatQueryBuilder().build_primary_map({"when": date(2024, 1, 2)})
        assert result == {"when": "2024-01-02"}

    def test_complex_sequence_items_become_json(self):
        """Test that structured items inside sequences fall back to JSON."""
        result = FlatQueryBuilder().build_primary_map({"items": [{"a": 1}, True]})
        assert result == {"items": '{"a":1},true'}


class TestAbstractQueryBuilder:
    """Tests for subclassing the base builder."""

    def test_custom_secondary_value(self):
        """Test that subclasses only decide how complex values render."""

        class CountingBuilder(AbstractQueryBuilder):
            def build_secondary_value(self, value, charset):
                return str(len(value))

        result = CountingBuilder().build_primary_map({"tags": ["a", "b", "c"], "q": "x"})
        assert result == {"tags": "3", "q": "x"}

    def test_secondary_value_errors_are_wrapped(self):
        """Test that subclass failures become ParameterTranslationError."""

        class FailingBuilder(AbstractQueryBuilder):
            def build_secondary_value(self, value, charset):
                raise RuntimeError("nope")

        with pytest.raises(ParameterTranslationError) as exc_info:
            FailingBuilder().build_primary_map({"tags": ["a"]})
        assert "RuntimeError: nope" in str(exc_info.value)
