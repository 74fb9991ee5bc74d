"""
Unit tests for FastAPI application setup.

- build_app() creates a configured FastAPI instance
- Routers are registered under the expected prefixes
- CORS origins come from configuration
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_finance_sim.entrypoints.http.app import build_app


def test_build_app_returns_new_fastapi_instance() -> None:
    app1 = build_app()
    app2 = build_app()

    assert isinstance(app1, FastAPI)
    assert app1 is not app2


def test_app_metadata() -> None:
    app = build_app()

    assert app.title == "Car Finance Simulator API"
    assert app.version == "0.1.0"


def test_routes_are_registered() -> None:
    paths = build_app().openapi()["paths"]

    assert "/health" in paths
    assert "/v1/finance/plan" in paths
    assert "/v1/scenarios" in paths
    assert "/v1/scenarios/start" in paths
    assert "/v1/scenarios/{node_id}" in paths
    assert "/v1/scenarios/{node_id}/choices/{choice_id}" in paths


def test_openapi_schema_is_generated() -> None:
    client = TestClient(build_app())

    response = client.get("/openapi.json")

    assert response.status_code == 200
    assert "/v1/finance/plan" in response.json()["paths"]


def test_end_to_end_start_and_choose() -> None:
    client = TestClient(build_app())

    start = client.post(
        "/v1/scenarios/start",
        json={"cash_price": "25000", "deposit": "5000", "apr_percent": "6.9", "term_months": 60},
    ).json()
    step = client.post(
        f"/v1/scenarios/{start['node']['id']}/choices/rate-up-extend-term",
        json=start["state"],
    ).json()

    assert step["state"]["monthly_payment"] == "349.69"
    assert step["state"]["term_months_remaining"] == 72
    assert step["next_node"]["id"] == 1


def test_cors_allows_configured_origin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://ui.example")
    client = TestClient(build_app())

    response = client.options(
        "/v1/finance/plan",
        headers={
            "Origin": "https://ui.example",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://ui.example"
