"""Serve the label and validation message catalogues.

``/api/v1/translations/`` answers in the locale named by ``?locale=`` or the
``Accept-Language`` header; ``/api/v1/translations/<locale>`` pins it.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, jsonify, request

from nairatax.backend.app.localization import load_translations
from nairatax.backend.app.services.request_parser import resolve_locale

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


@blueprint.get("/", defaults={"locale": None})
@blueprint.get("/<string:locale>")
def get_translations(locale: str | None) -> tuple[Any, int]:
    payload = load_translations(locale or resolve_locale(request))
    return jsonify(payload), HTTPStatus.OK


__all__ = ["blueprint"]
