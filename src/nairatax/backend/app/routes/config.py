"""Expose engine configuration consumed by the input form.

The form needs the relief constants, band schedule, named flat rates, common
expense categories and currencies so that it can render choices without
duplicating business rules.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from nairatax.backend.app.services.calculators import format_percentage
from nairatax.backend.config.engine_config import (
    EngineConfiguration,
    load_engine_configuration,
)
from nairatax.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata for health checks and clients."""

    config = load_engine_configuration()
    return {
        "version": get_project_version(),
        "default_currency": config.default_currency,
    }


def _serialise_bands(config: EngineConfiguration) -> list[dict[str, Any]]:
    bands: list[dict[str, Any]] = []
    lower = 0.0
    for band in config.bands:
        upper = lower + band.width if band.width is not None else None
        bands.append(
            {
                "label": band.label,
                "rate": band.rate,
                "rate_label": format_percentage(band.rate),
                "width": band.width,
                "lower": lower,
                "upper": upper,
            }
        )
        if upper is not None:
            lower = upper
    return bands


@blueprint.get("")
def get_configuration():
    """Return the active engine configuration."""

    config = load_engine_configuration()
    payload = {
        **get_configuration_metadata(),
        "relief": config.relief.model_dump(),
        "pension": config.pension.model_dump(),
        "bands": _serialise_bands(config),
        "override_label": config.override.label,
        "specialized_rates": [entry.model_dump() for entry in config.specialized_rates],
        "expense_categories": [
            entry.model_dump() for entry in config.expense_categories
        ],
        "currencies": [entry.model_dump() for entry in config.currencies],
    }
    return jsonify(payload), 200


__all__ = ["blueprint", "get_configuration_metadata"]
