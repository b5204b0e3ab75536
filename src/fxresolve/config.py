from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from fxresolve.domain.errors import InvalidRateError
from fxresolve.domain.rates import RatePair, parse_pair, validate_rate


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    rates_load_delay_seconds: float = Field(default=2.0, alias="RATES_LOAD_DELAY_SECONDS")
    seed_rates: Annotated[dict[tuple[str, str], Decimal] | None, NoDecode] = Field(
        default=None, alias="SEED_RATES"
    )

    @field_validator("rates_load_delay_seconds")
    def validate_rates_load_delay_seconds(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise ValueError("RATES_LOAD_DELAY_SECONDS must be finite and >= 0")
        return value

    @field_validator("seed_rates", mode="before")
    def parse_seed_rates(cls, value: object) -> dict[RatePair, Decimal] | None:
        if value is None:
            return None
        items: list[tuple[object, object]]
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return None
            if raw.startswith("{"):
                parsed = json.loads(raw, parse_float=Decimal)
                if not isinstance(parsed, dict):
                    raise ValueError("SEED_RATES JSON value must be an object")
                items = list(parsed.items())
            else:
                items = []
                for chunk in raw.split(","):
                    if not chunk.strip():
                        continue
                    key, sep, rate = chunk.partition("=")
                    if not sep:
                        raise ValueError(f"SEED_RATES entry must be BASE/TARGET=RATE: {chunk!r}")
                    items.append((key, rate))
        elif isinstance(value, dict):
            items = list(value.items())
        else:
            raise ValueError("SEED_RATES must be a JSON object, CSV string or mapping")

        rates: dict[RatePair, Decimal] = {}
        for key, rate in items:
            try:
                pair = RatePair(*key) if isinstance(key, tuple) else parse_pair(str(key))
                rates[pair] = validate_rate(pair, rate if not isinstance(rate, float) else str(rate))
            except (InvalidRateError, TypeError) as exc:
                raise ValueError(f"invalid SEED_RATES entry {key!r}: {exc}") from exc
        if not rates:
            raise ValueError("SEED_RATES must contain at least one rate")
        return rates
