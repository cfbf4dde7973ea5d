"""Integration tests for the calculation endpoint."""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path

import pytest
from flask.testing import FlaskClient

from nairatax.backend.app.services.registry import ServiceRegistry

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"
SCENARIOS = json.loads(_DATA_PATH.read_text("utf-8"))


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda item: item["name"])
def test_calculation_endpoint_matches_regression_scenarios(
    client: FlaskClient, scenario: dict[str, object]
) -> None:
    response = client.post("/api/v1/calculations", json=scenario["payload"])

    assert response.status_code == HTTPStatus.OK
    result = response.get_json()["result"]
    for key, value in scenario["expectations"]["result"].items():
        if isinstance(value, str):
            assert result[key] == value
        else:
            assert result[key] == pytest.approx(value), key


def test_calculation_endpoint_accepts_camel_case_payload(client: FlaskClient) -> None:
    payload = {
        "periods": [
            {
                "month": "January",
                "incomeSources": [{"description": "Salary", "amount": 500_000}],
                "expenses": [
                    {"category": "Rent", "amount": 100_000, "isTaxDeductible": False}
                ],
            }
        ],
        "currency": "NGN",
    }

    response = client.post("/api/v1/calculations", json=payload)

    assert response.status_code == HTTPStatus.OK
    body = response.get_json()
    assert body["display"]["final_balance"] == "₦315,700"
    assert body["meta"]["mode"] == "progressive"
    assert body["labels"]["final_balance"] == "Disposable balance"
    ledger = body["result"]["transaction_history"]
    assert [entry["type"] for entry in ledger] == ["Income", "Expense"]


def test_calculation_endpoint_uses_query_currency(client: FlaskClient) -> None:
    payload = {"periods": [{"label": "May", "income_sources": [{"amount": 250_000}]}]}

    response = client.post("/api/v1/calculations?currency=usd", json=payload)

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["display"]["gross_income"] == "$250,000"


def test_calculation_endpoint_rejects_invalid_json(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations", data="{", content_type="application/json"
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {
        "error": "bad_request",
        "message": "Request body must be valid JSON",
    }


def test_calculation_endpoint_reports_missing_earnings(client: FlaskClient) -> None:
    payload = {
        "periods": [
            {"label": "February", "income_sources": [{"amount": 100_000}]},
            {"label": "March", "income_sources": []},
        ]
    }

    response = client.post("/api/v1/calculations", json=payload)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert "Enter earnings for March." in body["message"]


def test_calculation_endpoint_rejects_unknown_special_rate(client: FlaskClient) -> None:
    payload = {
        "periods": [{"label": "May", "income_sources": [{"amount": 100_000}]}],
        "special_rate": "Luxury Levy",
    }

    response = client.post("/api/v1/calculations", json=payload)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["message"] == "Unknown specialized rate 'Luxury Levy'"


def test_saved_calculation_appears_in_history(
    client: FlaskClient, services: ServiceRegistry
) -> None:
    payload = {
        "periods": [{"label": "June", "income_sources": [{"amount": 400_000}]}],
        "save": True,
    }

    response = client.post("/api/v1/calculations", json=payload)

    saved_id = response.get_json()["meta"]["saved_id"]
    assert [record.id for record in services.history.list()] == [saved_id]
    assert services.stats.count() == 14_521


def test_string_monthly_flags_do_not_turn_months_into_a_year(client: FlaskClient) -> None:
    payload = {
        "periods": [
            {"month": "January", "isAnnual": "0", "incomeSources": [{"amount": 500_000}]},
            {"month": "February", "isAnnual": "false", "incomeSources": [{"amount": 500_000}]},
        ]
    }

    response = client.post("/api/v1/calculations", json=payload)

    assert response.status_code == HTTPStatus.OK
    result = response.get_json()["result"]
    assert result["period"] == "2 Selected Months"
    assert result["paye_tax"] == pytest.approx(88_600)


def test_calculation_endpoint_rejects_zero_only_income(client: FlaskClient) -> None:
    payload = {"periods": [{"label": "April", "income_sources": [{"amount": 0}]}]}

    response = client.post("/api/v1/calculations", json=payload)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "Enter earnings for April." in response.get_json()["message"]
