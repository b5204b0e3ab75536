from __future__ import annotations

import os
from decimal import Decimal

import pytest

from fxresolve.config import Settings
from fxresolve.domain.rates import RatePair
from fxresolve.services.rate_resolver import RateResolver, reset_default_resolver
from fxresolve.services.rate_source import SeedRateSource

SAMPLE_RATES = {
    RatePair("DZD", "EUR"): Decimal("0.0069"),
    RatePair("EUR", "USD"): Decimal("1.06"),
    RatePair("USD", "DZD"): Decimal("137.0"),
    RatePair("EUR", "GBP"): Decimal("0.85"),
}


@pytest.fixture(autouse=True)
def isolate_settings_from_host_env(monkeypatch: pytest.MonkeyPatch):
    original_env_file = Settings.model_config.get("env_file")
    Settings.model_config["env_file"] = None

    settings_env_keys: set[str] = set()
    for field in Settings.model_fields.values():
        if isinstance(field.alias, str):
            settings_env_keys.add(field.alias)

    for key in list(os.environ):
        if key in settings_env_keys:
            monkeypatch.delenv(key, raising=False)

    reset_default_resolver()
    yield
    reset_default_resolver()

    Settings.model_config["env_file"] = original_env_file


@pytest.fixture
def sample_rates() -> dict[RatePair, Decimal]:
    return dict(SAMPLE_RATES)


@pytest.fixture
def resolver(sample_rates: dict[RatePair, Decimal]) -> RateResolver:
    return RateResolver(SeedRateSource(sample_rates))
