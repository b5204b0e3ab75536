from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Protocol


class RateSource(Protocol):
    def load(self) -> Mapping[tuple[str, str], Decimal]: ...
