"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from nairatax.backend.app.services.calculation_service import calculate_tax
from nairatax.backend.app.services.registry import get_services
from nairatax.backend.app.services.request_parser import parse_calculation_payload

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Create a tax calculation using the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    services = get_services()
    result = calculate_tax(payload, history=services.history, stats=services.stats)

    return jsonify(result), 200
