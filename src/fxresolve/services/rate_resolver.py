from __future__ import annotations

import logging
from decimal import Decimal, Overflow, localcontext
from enum import StrEnum
from threading import Lock

from fxresolve.config import Settings
from fxresolve.domain.conversion import ConversionResult, ConversionStatus
from fxresolve.domain.errors import RateNotFoundError
from fxresolve.domain.rates import RateTable
from fxresolve.logging_context import with_conversion_context
from fxresolve.ports_rate_source import RateSource
from fxresolve.services.rate_source import SeedRateSource

logger = logging.getLogger(__name__)


class ResolverState(StrEnum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class RateResolver:
    """Answer conversion queries against a rate table loaded exactly once.

    The table is built lazily on first use. Concurrent first callers block on
    the same load and all observe the completed table; once ready, lookups take
    no lock.
    """

    def __init__(self, source: RateSource) -> None:
        self._source = source
        self._table: RateTable | None = None
        self._state = ResolverState.UNINITIALIZED
        self._load_count = 0
        self._lock = Lock()

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def load_count(self) -> int:
        return self._load_count

    def ensure_loaded(self) -> RateTable:
        table = self._table
        if table is not None:
            return table
        with self._lock:
            if self._table is None:
                self._state = ResolverState.INITIALIZING
                logger.info("rate_table_loading")
                try:
                    table = RateTable.from_mapping(self._source.load())
                except Exception:
                    self._state = ResolverState.UNINITIALIZED
                    logger.exception("rate_table_load_failed")
                    raise
                self._load_count += 1
                self._table = table
                self._state = ResolverState.READY
                logger.info(
                    "rate_table_loaded",
                    extra={
                        "extra": {
                            "rate_count": len(table),
                            "currencies": list(table.currencies()),
                        }
                    },
                )
            return self._table

    def find_route(self, base: str, target: str) -> tuple[tuple[str, ...], tuple[Decimal, ...]]:
        """Return the currency path and per-leg rates for ``base -> target``.

        A direct rate wins. Otherwise the first base-side currency (in table
        order) that links ``base`` to ``target`` is used.
        """

        table = self.ensure_loaded()
        direct = table.rate_for(base, target)
        if direct is not None:
            return (base, target), (direct,)

        for intermediate in table.base_currencies():
            first_leg = table.rate_for(base, intermediate)
            if first_leg is None:
                continue
            second_leg = table.rate_for(intermediate, target)
            if second_leg is None:
                continue
            return (base, intermediate, target), (first_leg, second_leg)

        raise RateNotFoundError(base, target)

    def lookup_rate(self, base: str, target: str) -> Decimal:
        _path, legs = self.find_route(base, target)
        _value, rate = _apply_legs(Decimal("1"), legs)
        return rate

    def resolve(self, base: str, target: str, amount: Decimal) -> ConversionResult:
        with with_conversion_context(base, target):
            try:
                path, legs = self.find_route(base, target)
            except RateNotFoundError as exc:
                logger.warning(
                    "rate_not_found",
                    extra={"extra": {"pair": f"{exc.base}/{exc.target}", "reason": str(exc)}},
                )
                return ConversionResult.not_found(
                    base=base, target=target, amount=amount, reason=str(exc)
                )

            try:
                value, rate = _apply_legs(amount, legs)
            except Overflow:
                reason = f"converting {amount} {base} -> {target} exceeds the decimal range"
                logger.warning(
                    "conversion_overflow",
                    extra={"extra": {"path": list(path), "amount": str(amount), "reason": reason}},
                )
                return ConversionResult.failed(
                    ConversionStatus.OVERFLOW,
                    base=base,
                    target=target,
                    amount=amount,
                    reason=reason,
                    path=path,
                )

            status = ConversionStatus.DIRECT if len(legs) == 1 else ConversionStatus.COMPOSED
            logger.debug(
                "conversion_resolved",
                extra={"extra": {"status": status.value, "path": list(path), "rate": str(rate)}},
            )
            return ConversionResult(
                status=status,
                base=base,
                target=target,
                amount=amount,
                value=value,
                rate=rate,
                path=path,
            )

    def convert(self, base: str, target: str, amount: Decimal) -> Decimal:
        return self.resolve(base, target, amount).value


def _apply_legs(amount: Decimal, legs: tuple[Decimal, ...]) -> tuple[Decimal, Decimal]:
    with localcontext() as ctx:
        ctx.traps[Overflow] = True
        value = amount
        rate = Decimal("1")
        for leg in legs:
            value *= leg
            rate *= leg
    return value, rate


_default_resolver: RateResolver | None = None
_default_lock = Lock()


def build_resolver(settings: Settings) -> RateResolver:
    source = SeedRateSource(
        settings.seed_rates,
        delay_seconds=settings.rates_load_delay_seconds,
    )
    return RateResolver(source)


def get_default_resolver(settings: Settings | None = None) -> RateResolver:
    global _default_resolver
    resolver = _default_resolver
    if resolver is not None:
        return resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = build_resolver(settings or Settings())
        return _default_resolver


def reset_default_resolver() -> None:
    global _default_resolver
    with _default_lock:
        _default_resolver = None
