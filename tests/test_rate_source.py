from __future__ import annotations

from decimal import Decimal

import pytest

from fxresolve.domain.rates import RatePair
from fxresolve.services.rate_source import DEFAULT_SEED_RATES, SeedRateSource


def test_seed_source_waits_for_configured_delay() -> None:
    sleeps: list[float] = []
    source = SeedRateSource(
        {RatePair("AAA", "BBB"): Decimal("2")},
        delay_seconds=1.5,
        sleep_fn=sleeps.append,
    )

    rates = source.load()

    assert sleeps == [1.5]
    assert rates == {RatePair("AAA", "BBB"): Decimal("2")}


def test_seed_source_skips_sleep_without_delay() -> None:
    sleeps: list[float] = []
    source = SeedRateSource(sleep_fn=sleeps.append)

    assert source.load() == dict(DEFAULT_SEED_RATES)
    assert sleeps == []


def test_seed_source_returns_fresh_copy() -> None:
    source = SeedRateSource()

    first = source.load()
    first.clear()

    assert len(source.load()) == len(DEFAULT_SEED_RATES)


@pytest.mark.parametrize("delay", [-1, float("inf"), float("nan")])
def test_seed_source_rejects_negative_or_non_finite_delay(delay: float) -> None:
    with pytest.raises(ValueError, match="delay_seconds"):
        SeedRateSource(delay_seconds=delay)


def test_default_seed_spans_a_currency_cycle() -> None:
    pairs = set(DEFAULT_SEED_RATES)

    assert {RatePair("DZD", "EUR"), RatePair("EUR", "USD"), RatePair("USD", "DZD")} <= pairs
    assert all(rate > 0 for rate in DEFAULT_SEED_RATES.values())
