"""Integration tests for history and stats endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask.testing import FlaskClient

RESULT = {"gross_income": 500_000, "paye_tax": 44_300}


def test_history_round_trip(client: FlaskClient) -> None:
    created = client.post("/api/v1/history", json={"result": RESULT})
    assert created.status_code == HTTPStatus.CREATED
    record = created.get_json()

    listing = client.get("/api/v1/history")
    assert listing.status_code == HTTPStatus.OK
    assert [item["id"] for item in listing.get_json()["items"]] == [record["id"]]

    fetched = client.get(f"/api/v1/history/{record['id']}")
    assert fetched.status_code == HTTPStatus.OK
    assert fetched.get_json()["result"] == RESULT

    deleted = client.delete(f"/api/v1/history/{record['id']}")
    assert deleted.status_code == HTTPStatus.OK
    assert client.get(f"/api/v1/history/{record['id']}").status_code == HTTPStatus.NOT_FOUND


def test_history_requires_result_mapping(client: FlaskClient) -> None:
    response = client.post("/api/v1/history", json={"result": [1, 2]})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "invalid_payload"


def test_history_clear_and_missing_entry(client: FlaskClient) -> None:
    client.post("/api/v1/history", json={"result": RESULT})

    assert client.delete("/api/v1/history").get_json() == {"status": "cleared"}
    assert client.get("/api/v1/history").get_json() == {"items": []}

    missing = client.delete("/api/v1/history/unknown")
    assert missing.status_code == HTTPStatus.NOT_FOUND
    assert missing.get_json() == {"error": "not_found", "message": "Calculation not found"}


def test_stats_count_calculations(client: FlaskClient) -> None:
    assert client.get("/api/v1/stats").get_json() == {"calculations": 14_520}

    client.post(
        "/api/v1/calculations",
        json={"periods": [{"label": "May", "income_sources": [{"amount": 1}]}]},
    )

    assert client.get("/api/v1/stats").get_json() == {"calculations": 14_521}
