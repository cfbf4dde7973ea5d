"""Endpoints for stored calculation history and usage statistics."""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from flask import Blueprint, jsonify, request

from nairatax.backend.app.http import not_found, problem_response
from nairatax.backend.app.services.registry import get_services

blueprint = Blueprint("history", __name__, url_prefix="/api/v1/history")
stats_blueprint = Blueprint("stats", __name__, url_prefix="/api/v1/stats")


@blueprint.get("")
def list_history() -> tuple[Any, int]:
    records = get_services().history.list()
    return (
        jsonify({"items": [record.model_dump(mode="json") for record in records]}),
        HTTPStatus.OK,
    )


@blueprint.post("")
def save_history() -> tuple[Any, int]:
    payload = request.get_json(silent=True) or {}
    result = payload.get("result") if isinstance(payload, Mapping) else None
    if not isinstance(result, Mapping):
        return problem_response(
            "invalid_payload",
            status=HTTPStatus.BAD_REQUEST,
            message="Request body must include a 'result' mapping",
        ).to_response()

    record = get_services().history.save(result)
    return jsonify(record.model_dump(mode="json")), HTTPStatus.CREATED


@blueprint.get("/<string:calculation_id>")
def get_history_entry(calculation_id: str) -> tuple[Any, int]:
    try:
        record = get_services().history.get(calculation_id)
    except KeyError:
        return not_found("Calculation")
    return jsonify(record.model_dump(mode="json")), HTTPStatus.OK


@blueprint.delete("/<string:calculation_id>")
def delete_history_entry(calculation_id: str) -> tuple[Any, int]:
    if not get_services().history.delete(calculation_id):
        return not_found("Calculation")
    return jsonify({"status": "deleted", "id": calculation_id}), HTTPStatus.OK


@blueprint.delete("")
def clear_history() -> tuple[Any, int]:
    get_services().history.clear()
    return jsonify({"status": "cleared"}), HTTPStatus.OK


@stats_blueprint.get("")
def get_stats() -> tuple[Any, int]:
    return jsonify({"calculations": get_services().stats.count()}), HTTPStatus.OK


__all__ = ["blueprint", "stats_blueprint"]
