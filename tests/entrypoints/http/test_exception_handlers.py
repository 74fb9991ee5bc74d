"""Tests for FastAPI exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_finance_sim.domain.errors import (
    ConflictError,
    DomainError,
    InvalidScenarioGraph,
    NotFoundError,
    ValidationError,
)
from car_finance_sim.entrypoints.http.exception_handlers import register_exception_handlers


@pytest.fixture
def app() -> FastAPI:
    """Create a minimal FastAPI app with exception handlers registered."""
    test_app = FastAPI()
    register_exception_handlers(test_app)

    @test_app.get("/validation-error")
    def raise_validation_error() -> None:
        raise ValidationError("term_months must be > 0")

    @test_app.get("/validation-error-with-fields")
    def raise_validation_error_with_fields() -> None:
        raise ValidationError(
            errors=[
                {"field": "cash_price", "message": "Must be a valid decimal: abc", "code": "INVALID_DECIMAL"},
                {"field": "fees", "message": "Must be a valid decimal: x", "code": "INVALID_DECIMAL"},
            ]
        )

    @test_app.get("/not-found-error")
    def raise_not_found_error() -> None:
        raise NotFoundError("ScenarioNode", "9")

    @test_app.get("/conflict-error")
    def raise_conflict_error() -> None:
        raise ConflictError("Scenario run is already complete")

    @test_app.get("/graph-error")
    def raise_graph_error() -> None:
        raise InvalidScenarioGraph("choice 'a' points at unknown node 5", node_id=0)

    @test_app.get("/generic-domain-error")
    def raise_generic_domain_error() -> None:
        raise DomainError("Something odd")

    @test_app.get("/value-error")
    def raise_value_error() -> None:
        raise ValueError("'lease' is not a valid FinanceType")

    @test_app.get("/unexpected-error")
    def raise_unexpected_error() -> None:
        raise RuntimeError("Something went wrong")

    @test_app.get("/typed/{node_id}")
    def typed(node_id: int) -> dict:
        return {"node_id": node_id}

    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def test_validation_error_maps_to_422(client: TestClient) -> None:
    response = client.get("/validation-error")

    assert response.status_code == 422
    assert response.json() == {"detail": "term_months must be > 0", "code": "VALIDATION_ERROR"}


def test_validation_error_includes_field_errors(client: TestClient) -> None:
    response = client.get("/validation-error-with-fields")

    assert response.status_code == 422
    data = response.json()
    assert data["detail"] == "Validation failed"
    assert [error["field"] for error in data["errors"]] == ["cash_price", "fees"]


def test_not_found_error_maps_to_404(client: TestClient) -> None:
    response = client.get("/not-found-error")

    assert response.status_code == 404
    assert response.json() == {
        "detail": "ScenarioNode with identifier '9' not found",
        "code": "NOT_FOUND",
    }


def test_conflict_error_maps_to_409(client: TestClient) -> None:
    response = client.get("/conflict-error")

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_invalid_graph_maps_to_500(client: TestClient) -> None:
    response = client.get("/graph-error")

    assert response.status_code == 500
    assert response.json()["code"] == "INVALID_SCENARIO_GRAPH"


def test_unmapped_domain_error_maps_to_400(client: TestClient) -> None:
    response = client.get("/generic-domain-error")

    assert response.status_code == 400
    assert response.json()["code"] == "DOMAIN_ERROR"


def test_value_error_maps_to_422(client: TestClient) -> None:
    response = client.get("/value-error")

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_VALUE"


def test_unexpected_error_maps_to_500_without_details(client: TestClient) -> None:
    response = client.get("/unexpected-error")

    assert response.status_code == 500
    assert response.json() == {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"}


def test_request_validation_error_strips_location_prefix(client: TestClient) -> None:
    response = client.get("/typed/abc")

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "node_id"
