from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from uuid import uuid4

LOG_FIELDS = ("conversion_id", "base", "target")


@dataclass(frozen=True)
class ConversionContext:
    conversion_id: str
    base: str
    target: str


_current: ContextVar[ConversionContext | None] = ContextVar("fx_conversion", default=None)


def current_log_fields() -> dict[str, str | None]:
    """Correlation fields for the conversion in progress; all ``None`` outside one."""

    active = _current.get()
    if active is None:
        return dict.fromkeys(LOG_FIELDS)
    return asdict(active)


@contextmanager
def with_conversion_context(
    base: str, target: str, conversion_id: str | None = None
) -> Iterator[ConversionContext]:
    active = ConversionContext(conversion_id or uuid4().hex[:12], base, target)
    token = _current.set(active)
    try:
        yield active
    finally:
        _current.reset(token)
