"""Rate table, conversion result and error types."""

from fxresolve.domain.conversion import ConversionResult, ConversionStatus
from fxresolve.domain.errors import (
    FxResolveError,
    InvalidAmountError,
    InvalidRateError,
    RateNotFoundError,
)
from fxresolve.domain.rates import RatePair, RateTable

__all__ = [
    "ConversionResult",
    "ConversionStatus",
    "FxResolveError",
    "InvalidAmountError",
    "InvalidRateError",
    "RateNotFoundError",
    "RatePair",
    "RateTable",
]
