"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from nairatax.backend.app.services.request_parser import parse_calculation_payload

PERIODS = [{"label": "January", "income_sources": [{"amount": 500_000}]}]


def test_parse_payload_uses_accept_language(app: Flask) -> None:
    """Accept-Language header should supply the locale when absent."""

    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        json={"periods": PERIODS},
        headers={"Accept-Language": "en-NG,en;q=0.8"},
    ):
        payload = parse_calculation_payload(request)

    assert payload["locale"] == "en"


def test_parse_payload_falls_back_to_default_locale(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations?locale=yo",
        method="POST",
        json={"periods": PERIODS},
    ):
        payload = parse_calculation_payload(request)

    assert payload["locale"] == "en"


def test_parse_payload_reads_currency_from_query(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations?currency=gbp",
        method="POST",
        json={"periods": PERIODS},
    ):
        payload = parse_calculation_payload(request)

    assert payload["currency"] == "GBP"


def test_parse_payload_prefers_body_currency(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations?currency=gbp",
        method="POST",
        json={"periods": PERIODS, "currency": " usd "},
    ):
        payload = parse_calculation_payload(request)

    assert payload["currency"] == "USD"


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_calculation_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_calculation_payload(request)
