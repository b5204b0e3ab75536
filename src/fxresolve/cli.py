from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

from fxresolve.config import Settings
from fxresolve.domain.errors import InvalidAmountError
from fxresolve.logging_utils import setup_logging
from fxresolve.services.rate_resolver import RateResolver, get_default_resolver

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 46
BASE_PROMPT = "Base currency (e.g. DZD, EUR, USD, GBP): "
TARGET_PROMPT = "Target currency (e.g. EUR, USD, GBP, DZD): "
AMOUNT_PROMPT = "Amount to convert: "
INVALID_AMOUNT_MESSAGE = "Invalid amount, please try again.\n"
MAX_AMOUNT_EXPONENT = 30


def parse_amount(raw: str) -> Decimal:
    """Parse user input into a finite Decimal, raising InvalidAmountError otherwise."""

    text = (raw or "").strip()
    if not text:
        raise InvalidAmountError("amount is empty")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"not a decimal number: {raw!r}") from exc
    if not value.is_finite():
        raise InvalidAmountError(f"amount must be finite: {raw!r}")
    if value.adjusted() > MAX_AMOUNT_EXPONENT:
        raise InvalidAmountError(f"amount must be below 1e{MAX_AMOUNT_EXPONENT + 1}: {raw!r}")
    return value


def format_conversion(amount: Decimal, base: str, value: Decimal, target: str) -> str:
    return f"{amount} {base} = {value} {target}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fxresolve",
        epilog="Env overrides: LOG_LEVEL, LOG_JSON, RATES_LOAD_DELAY_SECONDS, SEED_RATES.",
    )
    parser.add_argument("--env-file", default=None, help="Optional dotenv file with settings")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command")

    interactive_parser = subparsers.add_parser(
        "interactive", help="Prompt for conversions until EOF (default)"
    )
    interactive_parser.add_argument(
        "--max-conversions",
        type=int,
        default=None,
        help="Stop after this many successful prompts (default: run until EOF)",
    )

    convert_parser = subparsers.add_parser("convert", help="Convert a single amount")
    convert_parser.add_argument("base", help="Base currency code")
    convert_parser.add_argument("target", help="Target currency code")
    convert_parser.add_argument("amount", help="Amount in the base currency")
    convert_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    rates_parser = subparsers.add_parser("rates", help="List the loaded rate table")
    rates_parser.add_argument("--json", action="store_true", help="Print the table as JSON")

    args = parser.parse_args(argv)

    settings = _load_settings(args.env_file)
    setup_logging(args.log_level or settings.log_level, json_output=settings.log_json)
    resolver = get_default_resolver(settings)

    if args.command == "convert":
        return run_convert(resolver, args.base, args.target, args.amount, json_output=args.json)
    if args.command == "rates":
        return run_rates(resolver, json_output=args.json)
    return run_interactive(
        resolver,
        max_conversions=getattr(args, "max_conversions", None),
    )


def _load_settings(env_file: str | None) -> Settings:
    if env_file in (None, ""):
        return Settings()
    return Settings(_env_file=env_file)


def run_interactive(
    resolver: RateResolver,
    *,
    input_fn: Callable[[str], str] | None = None,
    output: Callable[[str], None] = print,
    max_conversions: int | None = None,
) -> int:
    read = input_fn or input
    completed = 0
    try:
        while max_conversions is None or completed < max_conversions:
            base = read(BASE_PROMPT).strip()
            target = read(TARGET_PROMPT).strip()
            raw_amount = read(AMOUNT_PROMPT)
            try:
                amount = parse_amount(raw_amount)
            except InvalidAmountError as exc:
                logger.debug("invalid_amount_input", extra={"extra": {"reason": str(exc)}})
                output(INVALID_AMOUNT_MESSAGE)
                continue

            result = resolver.resolve(base, target, amount)
            if not result.ok:
                output(f"{result.reason}")
            output(format_conversion(amount, base, result.value, target))
            output(f"{SEPARATOR}\n")
            completed += 1
    except (EOFError, KeyboardInterrupt):
        output("")
    return 0


def run_convert(
    resolver: RateResolver,
    base: str,
    target: str,
    raw_amount: str,
    *,
    json_output: bool = False,
) -> int:
    try:
        amount = parse_amount(raw_amount)
    except InvalidAmountError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    result = resolver.resolve(base.strip(), target.strip(), amount)
    if json_output:
        print(json.dumps(result.to_dict(), sort_keys=True))
    else:
        if not result.ok:
            print(f"{result.reason}", file=sys.stderr)
        print(format_conversion(amount, result.base, result.value, result.target))
    return 0 if result.ok else 1


def run_rates(resolver: RateResolver, *, json_output: bool = False) -> int:
    table = resolver.ensure_loaded()
    if json_output:
        payload = {str(pair): str(rate) for pair, rate in table.rates.items()}
        print(json.dumps(payload))
        return 0
    for pair, rate in table.rates.items():
        print(f"{pair.base} -> {pair.target}: {rate}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
