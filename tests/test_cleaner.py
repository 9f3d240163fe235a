"""Tests for the property seed cleaning pipeline"""
from decimal import Decimal

import pandas as pd
import pytest

from urbannest.cleaner import CleaningPolicy, ParsePrice, clean_properties, parse_price


class TestParsePrice:

    @pytest.mark.parametrize("raw,expected", [
        ("350000", Decimal("350000.00")),
        ("$1,250,000", Decimal("1250000.00")),
        ("1,250", Decimal("1250.00")),
        ("1,250.75", Decimal("1250.75")),
        ("99,5", Decimal("99.50")),
        ("€ 420 000", Decimal("420000.00")),
        ("9999999999.99", Decimal("9999999999.99")),
    ])
    def test_parses(self, raw, expected):
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "call for price", "-5000", "1.2.3", "$1.2M", "12345678901"])
    def test_rejects(self, raw):
        assert parse_price(raw) is None


def _frame(rows):
    return pd.DataFrame(rows, columns=["Title", "Location", "Price", "Description", "imageUrl"])


def test_full_pipeline():
    raw = _frame([
        ["  Sunny flat ", " Brooklyn   Heights ", "$500,000", "", "https://img.example.com/a.jpg"],
        ["No price", "Queens", "ask", "x", ""],
        ["", "Bronx", "100", "", ""],
        ["Sunny flat", "Brooklyn Heights", "500000", "dup", ""],
        ["Long", "Harlem", "1", "y" * 1500, ""],
    ])
    df, ctx = clean_properties(raw)

    assert list(df.columns) == ["title", "location", "price", "description", "image_url"]
    assert len(df) == 2

    first = df.iloc[0]
    assert first["title"] == "Sunny flat"
    assert first["location"] == "Brooklyn Heights"
    assert first["price"] == Decimal("500000.00")
    assert pd.isna(first["description"])
    assert first["image_url"] == "https://img.example.com/a.jpg"

    assert len(df.iloc[1]["description"]) == 1000

    assert any(line.startswith("drop_incomplete:") for line in ctx["log"])
    assert "parse_price" in ctx["details"]


def test_missing_optional_columns_added():
    raw = pd.DataFrame([["Loft", "Soho", "10"]], columns=["title", "location", "price"])
    df, _ = clean_properties(raw)
    assert pd.isna(df.iloc[0]["description"])
    assert pd.isna(df.iloc[0]["image_url"])


def test_custom_description_cap():
    raw = pd.DataFrame([["Loft", "Soho", "10", "abcdef"]],
                       columns=["title", "location", "price", "description"])
    df, _ = clean_properties(raw, CleaningPolicy(max_description=3))
    assert df.iloc[0]["description"] == "abc"


def test_step_without_required_column_fails_fast():
    ctx = {}
    with pytest.raises(ValueError, match="missing required columns"):
        ParsePrice().apply(pd.DataFrame({"title": ["x"]}), ctx)
    assert ctx["errors"]


def test_rejected_prices_counted_by_reason():
    raw = pd.DataFrame(
        [["A", "Soho", "$1.2M"], ["B", "Soho", "12,345,678,901"], ["C", "Soho", "-3"], ["D", "Soho", "500"]],
        columns=["title", "location", "price"],
    )
    df, ctx = clean_properties(raw)
    assert list(df["title"]) == ["D"]
    assert ctx["details"]["parse_price"] == {"letters": 1, "oversized": 1, "negative": 1}
