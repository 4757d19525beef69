"""Tests for product field coercion."""

import pytest

from boutique.core.modules.product.validators import parse_price, parse_size
from boutique.errors import ValidationError


class TestParsePrice:
    def test_numeric_strings_coerced(self):
        assert parse_price("49.99") == 49.99
        assert parse_price(" 12 ") == 12.0

    def test_numbers_pass_through(self):
        assert parse_price(10) == 10.0
        assert parse_price(7.5) == 7.5

    @pytest.mark.parametrize("value", ["abc", "", None, "nan", "inf", True])
    def test_non_numeric_rejected(self, value):
        with pytest.raises(ValidationError, match="Invalid price"):
            parse_price(value)


class TestParseSize:
    def test_json_array(self):
        assert parse_size('["S", "M", "L"]') == ["S", "M", "L"]

    def test_json_object(self):
        assert parse_size('{"S": 2, "M": 0}') == {"S": 2, "M": 0}

    def test_structures_pass_through(self):
        assert parse_size(["XL"]) == ["XL"]

    def test_invalid_json_rejected(self):
        with pytest.raises(ValidationError, match="Invalid size"):
            parse_size("[S, M")

    @pytest.mark.parametrize("value", ['"M"', "42", "null", None])
    def test_scalars_rejected(self, value):
        with pytest.raises(ValidationError, match="expected a JSON array or object"):
            parse_size(value)
