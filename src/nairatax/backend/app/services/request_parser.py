"""Helpers for normalising incoming calculation requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request

from nairatax.backend.app.http import require_json_object
from nairatax.backend.app.localization import normalise_locale


def resolve_locale(req: Request, payload: Mapping[str, Any] | None = None) -> str:
    """Return the catalogue locale hinted by ``payload``, the query or headers.

    The body's ``locale`` wins over ``?locale=``, which wins over the first
    ``Accept-Language`` entry.
    """

    locale = (payload or {}).get("locale")
    if isinstance(locale, str) and locale.strip():
        return normalise_locale(locale)

    locale_param = req.args.get("locale")
    if locale_param and locale_param.strip():
        return normalise_locale(locale_param)

    accept_language = req.headers.get("Accept-Language")
    if accept_language:
        primary = accept_language.split(",")[0].split(";")[0].strip()
        return normalise_locale(primary)

    return normalise_locale(None)


def _resolve_currency(req: Request, payload: dict[str, Any]) -> None:
    """Fall back to the ``currency`` query parameter when the body omits it."""

    currency = payload.get("currency")
    if isinstance(currency, str) and currency.strip():
        payload["currency"] = currency.strip().upper()
        return

    currency_param = req.args.get("currency")
    if currency_param and currency_param.strip():
        payload["currency"] = currency_param.strip().upper()


def parse_calculation_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON calculation payload from ``req`` and fill request hints."""

    payload = require_json_object(req)
    payload["locale"] = resolve_locale(req, payload)
    _resolve_currency(req, payload)
    return payload


__all__ = ["parse_calculation_payload", "resolve_locale"]
