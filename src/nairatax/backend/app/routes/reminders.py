"""Endpoints for scheduling tax payment reminders."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from nairatax.backend.app.http import not_found, problem_response, require_json_object
from nairatax.backend.app.localization import get_translator
from nairatax.backend.app.models import ReminderInput, format_validation_error
from nairatax.backend.app.services.registry import get_services
from nairatax.backend.app.services.request_parser import resolve_locale

blueprint = Blueprint("reminders", __name__, url_prefix="/api/v1/reminders")


@blueprint.get("")
def list_reminders() -> tuple[Any, int]:
    user_id = (request.args.get("user_id") or "").strip()
    if not user_id:
        return problem_response(
            "invalid_payload",
            status=HTTPStatus.BAD_REQUEST,
            message="Query parameter 'user_id' is required",
        ).to_response()

    reminders = get_services().reminders.list_for_user(user_id)
    return (
        jsonify({"items": [reminder.model_dump(mode="json") for reminder in reminders]}),
        HTTPStatus.OK,
    )


@blueprint.post("")
def create_reminder() -> tuple[Any, int]:
    payload = require_json_object(request)
    try:
        reminder_input = ReminderInput.model_validate(payload)
    except ValidationError as exc:
        translator = get_translator(resolve_locale(request))
        raise ValueError(
            format_validation_error(exc, subject="reminder", translator=translator)
        ) from exc

    reminder = get_services().reminders.add(reminder_input)
    return jsonify(reminder.model_dump(mode="json")), HTTPStatus.CREATED


@blueprint.patch("/<string:reminder_id>")
def update_reminder(reminder_id: str) -> tuple[Any, int]:
    payload = require_json_object(request)
    is_completed = payload.get("is_completed", payload.get("isCompleted"))
    if not isinstance(is_completed, bool):
        return problem_response(
            "invalid_payload",
            status=HTTPStatus.BAD_REQUEST,
            message="Field 'is_completed' must be a boolean",
        ).to_response()

    try:
        reminder = get_services().reminders.set_completed(reminder_id, is_completed)
    except KeyError:
        return not_found("Reminder")
    return jsonify(reminder.model_dump(mode="json")), HTTPStatus.OK


@blueprint.delete("/<string:reminder_id>")
def delete_reminder(reminder_id: str) -> tuple[Any, int]:
    if not get_services().reminders.delete(reminder_id):
        return not_found("Reminder")
    return jsonify({"status": "deleted", "id": reminder_id}), HTTPStatus.OK


__all__ = ["blueprint"]
