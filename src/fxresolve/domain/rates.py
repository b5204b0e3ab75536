from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import NamedTuple

from fxresolve.domain.errors import InvalidRateError

PAIR_SEPARATOR = "/"


class RatePair(NamedTuple):
    base: str
    target: str

    def __str__(self) -> str:
        return f"{self.base}{PAIR_SEPARATOR}{self.target}"


def parse_pair(raw: str) -> RatePair:
    """Parse a ``BASE/TARGET`` string into a pair; codes are kept verbatim apart from padding."""

    base, sep, target = str(raw).partition(PAIR_SEPARATOR)
    base = base.strip()
    target = target.strip()
    if not sep or not base or not target or PAIR_SEPARATOR in target:
        raise InvalidRateError(f"rate pair must look like BASE{PAIR_SEPARATOR}TARGET: {raw!r}")
    return RatePair(base, target)


def validate_rate(pair: RatePair, rate: object) -> Decimal:
    """Coerce a seed rate to a positive, finite Decimal. Floats and bools are refused."""

    if isinstance(rate, (bool, float)) or not isinstance(rate, (Decimal, int, str)):
        raise TypeError(f"rate for {pair} must be a Decimal, int or str, got {type(rate).__name__}")
    try:
        value = Decimal(rate.strip() if isinstance(rate, str) else rate)
    except InvalidOperation as exc:
        raise InvalidRateError(f"rate for {pair} is not a decimal value: {rate!r}") from exc
    if not value.is_finite():
        raise InvalidRateError(f"rate for {pair} must be finite, got {value}")
    if value <= 0:
        raise InvalidRateError(f"rate for {pair} must be > 0, got {value}")
    return value


@dataclass(frozen=True)
class RateTable:
    """Immutable table of directed exchange rates.

    ``rates[(base, target)]`` is the multiplier such that
    ``amount_in_target = amount_in_base * rate``. Iteration follows the order
    the rates were supplied in, which also fixes the order in which
    intermediate currencies are tried during composition.
    """

    rates: Mapping[RatePair, Decimal]

    def __post_init__(self) -> None:
        normalized: dict[RatePair, Decimal] = {}
        for key, rate in dict(self.rates).items():
            if not isinstance(key, tuple) or len(key) != 2:
                raise InvalidRateError(f"rate key must be a (base, target) pair: {key!r}")
            pair = RatePair(*key)
            if not isinstance(pair.base, str) or not pair.base:
                raise InvalidRateError(f"base currency must be a non-empty string: {key!r}")
            if not isinstance(pair.target, str) or not pair.target:
                raise InvalidRateError(f"target currency must be a non-empty string: {key!r}")
            normalized[pair] = validate_rate(pair, rate)
        object.__setattr__(self, "rates", MappingProxyType(normalized))

    @classmethod
    def from_mapping(cls, rates: Mapping[tuple[str, str], object]) -> RateTable:
        return cls(rates=rates)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.rates)

    def __iter__(self) -> Iterator[RatePair]:
        return iter(self.rates)

    def __contains__(self, pair: object) -> bool:
        return pair in self.rates

    def rate_for(self, base: str, target: str) -> Decimal | None:
        return self.rates.get(RatePair(base, target))

    def pairs(self) -> tuple[RatePair, ...]:
        return tuple(self.rates)

    def base_currencies(self) -> tuple[str, ...]:
        """Distinct currencies on the base side, in first-seen order."""

        return tuple(dict.fromkeys(pair.base for pair in self.rates))

    def currencies(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for pair in self.rates:
            seen.setdefault(pair.base, None)
            seen.setdefault(pair.target, None)
        return tuple(seen)
