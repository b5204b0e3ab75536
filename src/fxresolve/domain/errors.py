from __future__ import annotations


class FxResolveError(RuntimeError):
    """Base class for conversion errors raised by fxresolve."""


class RateNotFoundError(FxResolveError):
    """Raised when neither a direct nor a one-hop rate exists for a pair."""

    def __init__(self, base: str, target: str) -> None:
        super().__init__(f"no conversion rate found for {base} -> {target}")
        self.base = base
        self.target = target


class InvalidRateError(FxResolveError, ValueError):
    """Raised when seed data violates the rate table invariants."""


class InvalidAmountError(FxResolveError, ValueError):
    """Raised when an amount entered by a caller is not a finite decimal."""
