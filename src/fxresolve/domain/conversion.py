from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

ZERO = Decimal("0")


class ConversionStatus(StrEnum):
    DIRECT = "direct"
    COMPOSED = "composed"
    NOT_FOUND = "not_found"
    OVERFLOW = "overflow"


_SUCCESS_STATUSES = frozenset({ConversionStatus.DIRECT, ConversionStatus.COMPOSED})


@dataclass(frozen=True)
class ConversionResult:
    status: ConversionStatus
    base: str
    target: str
    amount: Decimal
    value: Decimal
    rate: Decimal | None = None
    path: tuple[str, ...] = ()
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in _SUCCESS_STATUSES

    @property
    def intermediate(self) -> str | None:
        if self.status != ConversionStatus.COMPOSED:
            return None
        return self.path[1]

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "base": self.base,
            "target": self.target,
            "amount": str(self.amount),
            "value": str(self.value),
            "rate": str(self.rate) if self.rate is not None else None,
            "path": list(self.path),
            "reason": self.reason,
        }

    @classmethod
    def failed(
        cls,
        status: ConversionStatus,
        *,
        base: str,
        target: str,
        amount: Decimal,
        reason: str,
        path: tuple[str, ...] = (),
    ) -> ConversionResult:
        """Failure result; the value is always exactly zero."""

        return cls(
            status=status,
            base=base,
            target=target,
            amount=amount,
            value=ZERO,
            path=path,
            reason=reason,
        )

    @classmethod
    def not_found(cls, *, base: str, target: str, amount: Decimal, reason: str) -> ConversionResult:
        return cls.failed(
            ConversionStatus.NOT_FOUND, base=base, target=target, amount=amount, reason=reason
        )
