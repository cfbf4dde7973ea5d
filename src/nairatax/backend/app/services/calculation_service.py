"""Orchestrate request validation, rate resolution, and tax calculations.

The calculation service validates the incoming payload, resolves flat or
specialised rates against configuration, runs the PAYE engine, and decorates
the engine result with localized labels and display strings. Storage is
optional and injected so that the engine itself never sees it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from nairatax.backend.app.localization import LocalizedError, Translator, get_translator
from nairatax.backend.app.models import (
    CalculationRequest,
    CalculationResponse,
    TaxResult,
    format_validation_error,
)
from nairatax.backend.config.engine_config import (
    EngineConfiguration,
    load_engine_configuration,
)

from .calculators import compute
from .formatting import format_currency, format_percent, resolve_currency, salary_tier
from .history_service import HistoryService, StatsService

_LOGGER = logging.getLogger(__name__)

_MONETARY_FIELDS: tuple[str, ...] = (
    "gross_income",
    "consolidated_relief",
    "pension",
    "taxable_income",
    "paye_tax",
    "net_income",
    "daily_net",
    "total_tax_deductible",
    "total_personal_expenses",
    "final_balance",
)

_LABEL_FIELDS: tuple[str, ...] = _MONETARY_FIELDS + (
    "effective_tax_rate",
    "breakdown",
    "transaction_history",
)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("NAIRATAX_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _locale_hint(payload: Any) -> str | None:
    if isinstance(payload, CalculationRequest):
        return payload.locale
    if isinstance(payload, Mapping) and isinstance(payload.get("locale"), str):
        return payload["locale"]
    return None


def _parse_request(payload: Any, translator: Translator) -> CalculationRequest:
    if isinstance(payload, CalculationRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise LocalizedError("validation.payload_not_mapping", translator)
    try:
        return CalculationRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc, translator=translator)) from exc


def resolve_override_rate(
    request: CalculationRequest,
    config: EngineConfiguration,
    translator: Translator | None = None,
) -> float | None:
    """Return the percentage replacing the progressive schedule, if any."""

    if request.override_rate is not None:
        return request.override_rate

    if request.special_rate is None:
        return None

    entry = config.find_specialized_rate(request.special_rate)
    if entry is None:
        raise LocalizedError(
            "validation.unknown_special_rate", translator, label=request.special_rate
        )
    return entry.rate


def build_display_values(result: TaxResult, currency_code: str | None) -> dict[str, str]:
    """Return currency-formatted strings for the scalar result fields."""

    currency = resolve_currency(currency_code)
    display = {
        field: format_currency(getattr(result, field), currency)
        for field in _MONETARY_FIELDS
    }
    display["effective_tax_rate"] = format_percent(result.effective_tax_rate)
    return display


def _build_labels(translator: Translator) -> dict[str, str]:
    return {field: translator(f"result.{field}") for field in _LABEL_FIELDS}


def calculate_tax(
    payload: Mapping[str, Any] | CalculationRequest,
    *,
    history: HistoryService | None = None,
    stats: StatsService | None = None,
) -> dict[str, Any]:
    """Compute the tax result for ``payload`` and return the response payload."""

    translator = get_translator(_locale_hint(payload))
    request_model = _parse_request(payload, translator)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    config = load_engine_configuration()
    override_rate = resolve_override_rate(request_model, config, translator)
    currency = resolve_currency(request_model.currency, config, translator)

    with _profile_section("compute", timings):
        result = compute(request_model.periods, override_rate, config=config)

    with _profile_section("display", timings):
        display = build_display_values(result, currency.code)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_tax timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    tier = salary_tier(result.gross_income)
    meta: dict[str, Any] = {
        "locale": translator.locale,
        "currency": currency.code,
        "mode": "override" if override_rate is not None else "progressive",
        "salary_tier": translator(f"tier.{tier}"),
    }
    if override_rate is not None:
        meta["override_rate"] = override_rate
    if request_model.special_rate is not None:
        meta["special_rate"] = request_model.special_rate

    result_payload = result.model_dump(mode="json")

    if stats is not None:
        stats.increment()

    if request_model.save and history is not None:
        saved = history.save(result_payload)
        meta["saved_id"] = saved.id

    response_model = CalculationResponse.model_validate(
        {
            "result": result_payload,
            "display": display,
            "labels": _build_labels(translator),
            "meta": meta,
        }
    )

    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = [
    "build_display_values",
    "calculate_tax",
    "resolve_override_rate",
]
