"""Currency conversion over a lazily loaded table of directed rates."""

from fxresolve.services.rate_resolver import RateResolver, get_default_resolver

__all__ = ["RateResolver", "get_default_resolver"]
