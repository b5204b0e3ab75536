from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from decimal import Decimal
from time import sleep

from fxresolve.domain.rates import RatePair

logger = logging.getLogger(__name__)

DEFAULT_SEED_RATES: Mapping[RatePair, Decimal] = {
    RatePair("DZD", "EUR"): Decimal("0.0069"),
    RatePair("DZD", "GBP"): Decimal("0.0053"),
    RatePair("GBP", "DZD"): Decimal("188.0"),
    RatePair("EUR", "USD"): Decimal("1.06"),
    RatePair("USD", "DZD"): Decimal("137.0"),
    RatePair("EUR", "GBP"): Decimal("0.85"),
}


class SeedRateSource:
    """Serve a fixed set of rates, optionally after a simulated fetch delay."""

    def __init__(
        self,
        rates: Mapping[tuple[str, str], Decimal] | None = None,
        *,
        delay_seconds: float = 0.0,
        sleep_fn: Callable[[float], None] = sleep,
    ) -> None:
        if not math.isfinite(delay_seconds) or delay_seconds < 0:
            raise ValueError("delay_seconds must be finite and >= 0")
        self._rates = dict(DEFAULT_SEED_RATES if rates is None else rates)
        self._delay_seconds = float(delay_seconds)
        self._sleep = sleep_fn

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    def load(self) -> dict[tuple[str, str], Decimal]:
        if self._delay_seconds > 0:
            logger.debug(
                "seed_rates_fetch_delay",
                extra={"extra": {"delay_seconds": self._delay_seconds}},
            )
            self._sleep(self._delay_seconds)
        return dict(self._rates)
