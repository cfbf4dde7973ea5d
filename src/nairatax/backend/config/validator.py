"""Utilities for validating engine configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Iterable, Sequence

from .engine_config import (
    CurrencyConfig,
    EngineConfiguration,
    ExpenseCategory,
    SpecializedRate,
    TaxBand,
    load_configuration_file,
    resolve_config_path,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_bands(bands: Sequence[TaxBand]) -> list[str]:
    errors: list[str] = []

    if not bands:
        errors.append(_format_scope("bands", "no tax bands defined"))
        return errors

    open_bands = [index for index, band in enumerate(bands) if band.width is None]
    if open_bands != [len(bands) - 1]:
        errors.append(
            _format_scope("bands", "only the final band may have an open width")
        )

    previous_rate = -1.0
    for index, band in enumerate(bands):
        scope = f"bands[{index}]"
        if band.rate < 0 or band.rate > 1:
            errors.append(_format_scope(scope, "rate must be between 0 and 1"))
        if band.rate < previous_rate:
            errors.append(
                _format_scope(scope, "rates must not decrease across the schedule")
            )
        previous_rate = band.rate

    duplicates = _duplicates(band.label for band in bands)
    if duplicates:
        errors.append(
            _format_scope("bands", f"duplicate band labels detected: {duplicates}")
        )

    return errors


def _validate_relief(config: EngineConfiguration) -> list[str]:
    errors: list[str] = []
    relief = config.relief

    if relief.fixed_amount < 0:
        errors.append(_format_scope("relief", "fixed amount must be non-negative"))
    for label, value in {
        "gross_floor_rate": relief.gross_floor_rate,
        "gross_rate": relief.gross_rate,
    }.items():
        if value < 0 or value > 1:
            errors.append(_format_scope(f"relief.{label}", "must be between 0 and 1"))

    if config.pension.rate < 0 or config.pension.rate > 1:
        errors.append(_format_scope("pension.rate", "must be between 0 and 1"))

    return errors


def _validate_specialized_rates(rates: Sequence[SpecializedRate]) -> list[str]:
    errors: list[str] = []

    for index, entry in enumerate(rates):
        if entry.rate < 0 or entry.rate > 100:
            errors.append(
                _format_scope(
                    f"specialized_rates[{index}]",
                    "rate must be a percentage between 0 and 100",
                )
            )

    duplicates = _duplicates(entry.label.casefold() for entry in rates)
    if duplicates:
        errors.append(
            _format_scope(
                "specialized_rates", f"duplicate labels detected: {duplicates}"
            )
        )

    return errors


def _validate_expense_categories(categories: Sequence[ExpenseCategory]) -> list[str]:
    duplicates = _duplicates(entry.label.casefold() for entry in categories)
    if duplicates:
        return [
            _format_scope(
                "expense_categories",
                f"labels must be unique ignoring case: {duplicates}",
            )
        ]
    return []


def _validate_currencies(
    currencies: Sequence[CurrencyConfig], default_code: str
) -> list[str]:
    errors: list[str] = []

    duplicates = _duplicates(entry.code for entry in currencies)
    if duplicates:
        errors.append(
            _format_scope("currencies", f"duplicate currency codes: {duplicates}")
        )

    if currencies and default_code not in {entry.code for entry in currencies}:
        errors.append(
            _format_scope(
                "currencies",
                f"default currency {default_code} is not present in the configured set",
            )
        )

    return errors


def _duplicates(values: Iterable[str]) -> list[str]:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def validate_engine_configuration(config: EngineConfiguration) -> list[str]:
    """Return a list of human-readable issues detected in ``config``."""

    errors: list[str] = []

    errors.extend(_validate_bands(config.bands))
    errors.extend(_validate_relief(config))
    errors.extend(_validate_specialized_rates(config.specialized_rates))
    errors.extend(_validate_expense_categories(config.expense_categories))
    errors.extend(_validate_currencies(config.currencies, config.default_currency))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the PAYE engine configuration and report issues."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Configuration files to validate (defaults to the active configuration)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    paths = args.paths or [resolve_config_path()]

    exit_code = 0

    for path in paths:
        try:
            config = load_configuration_file(path)
        except (FileNotFoundError, ValueError) as error:
            print(f"[{path.name}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_engine_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{path.name}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{path.name}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
