"""Display helpers turning raw result magnitudes into strings."""

from __future__ import annotations

from typing import Any

from nairatax.backend.app.localization import LocalizedError, Translator
from nairatax.backend.config.engine_config import (
    CurrencyConfig,
    EngineConfiguration,
    load_engine_configuration,
)

# Salary tiers keyed by the lower bound of gross income for the result.
_SALARY_TIERS: tuple[tuple[float, str], ...] = (
    (5_000_000, "tycoon"),
    (1_000_000, "executive"),
    (200_000, "professional"),
    (0, "starter"),
)


def resolve_currency(
    code: str | None,
    config: EngineConfiguration | None = None,
    translator: Translator | None = None,
) -> CurrencyConfig:
    """Return the configured currency for ``code``.

    Unknown codes raise :class:`LocalizedError` so the HTTP layer can report
    them in the caller's locale.
    """

    config = config or load_engine_configuration()
    currency = config.find_currency(code)
    if currency is None:
        supported = ", ".join(entry.code for entry in config.currencies)
        raise LocalizedError(
            "validation.unsupported_currency", translator, code=code, supported=supported
        )
    return currency


def format_currency(value: Any, currency: CurrencyConfig) -> str:
    """Render ``value`` as a whole-unit amount with the currency symbol."""

    number = float(value or 0)
    rounded = round(number)
    if rounded < 0:
        return f"-{currency.symbol}{abs(rounded):,.0f}"
    return f"{currency.symbol}{rounded:,.0f}"


def format_percent(value: Any) -> str:
    """Render a percentage already expressed on a 0-100 scale."""

    number = float(value or 0)
    return f"{number:.2f}%"


def salary_tier(amount: float) -> str:
    """Return the tier key for a gross income ``amount``."""

    for threshold, tier in _SALARY_TIERS:
        if amount >= threshold:
            return tier
    return _SALARY_TIERS[-1][1]


__all__ = ["format_currency", "format_percent", "resolve_currency", "salary_tier"]
