from __future__ import annotations

from decimal import Decimal

import pytest

from fxresolve.domain.errors import InvalidRateError
from fxresolve.domain.rates import RatePair, RateTable, parse_pair, validate_rate


def test_table_preserves_insertion_order(sample_rates) -> None:
    table = RateTable.from_mapping(sample_rates)

    assert table.pairs() == tuple(sample_rates)
    assert table.base_currencies() == ("DZD", "EUR", "USD")
    assert table.currencies() == ("DZD", "EUR", "USD", "GBP")
    assert len(table) == 4


def test_table_lookup_is_directional(sample_rates) -> None:
    table = RateTable.from_mapping(sample_rates)

    assert table.rate_for("DZD", "EUR") == Decimal("0.0069")
    assert table.rate_for("EUR", "DZD") is None
    assert ("EUR", "USD") in table
    assert RatePair("USD", "EUR") not in table


def test_table_is_read_only(sample_rates) -> None:
    table = RateTable.from_mapping(sample_rates)

    with pytest.raises(TypeError):
        table.rates[RatePair("AAA", "BBB")] = Decimal("1")  # type: ignore[index]


def test_table_is_isolated_from_source_mapping(sample_rates) -> None:
    table = RateTable.from_mapping(sample_rates)
    sample_rates[RatePair("AAA", "BBB")] = Decimal("1")

    assert RatePair("AAA", "BBB") not in table


def test_table_accepts_plain_tuple_keys_and_string_rates() -> None:
    table = RateTable.from_mapping({("AAA", "BBB"): "1.25"})

    assert table.rate_for("AAA", "BBB") == Decimal("1.25")
    assert isinstance(table.pairs()[0], RatePair)


@pytest.mark.parametrize(
    "rate",
    [Decimal("0"), Decimal("-1.5"), Decimal("NaN"), Decimal("Infinity"), "abc"],
)
def test_table_rejects_invalid_rates(rate) -> None:
    with pytest.raises(InvalidRateError):
        RateTable.from_mapping({("AAA", "BBB"): rate})


@pytest.mark.parametrize("key", [("", "BBB"), ("AAA", "")])
def test_table_rejects_empty_codes(key) -> None:
    with pytest.raises(InvalidRateError):
        RateTable.from_mapping({key: Decimal("1")})


@pytest.mark.parametrize("rate", [1.06, True, None])
def test_validate_rate_rejects_non_decimal_types(rate) -> None:
    with pytest.raises(TypeError):
        validate_rate(RatePair("EUR", "USD"), rate)


def test_validate_rate_accepts_int_and_padded_string() -> None:
    pair = RatePair("EUR", "USD")

    assert validate_rate(pair, 2) == Decimal("2")
    assert validate_rate(pair, " 1.06 ") == Decimal("1.06")


def test_parse_pair_strips_padding_and_keeps_case() -> None:
    assert parse_pair(" dzd / EUR ") == RatePair("dzd", "EUR")
    assert str(RatePair("DZD", "EUR")) == "DZD/EUR"


@pytest.mark.parametrize("raw", ["DZDEUR", "DZD/", "/EUR", "A/B/C"])
def test_parse_pair_rejects_malformed(raw: str) -> None:
    with pytest.raises(InvalidRateError):
        parse_pair(raw)
