import json
import logging
from collections.abc import Iterator
from decimal import Decimal

import pytest

from car_finance_sim.infra import config
from car_finance_sim.infra.logging_setup import configure_logging


def test_log_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert config.log_level() == "INFO"


def test_log_level_is_upper_cased(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert config.log_level() == "DEBUG"


def test_cors_origins_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CORS_ALLOWED_ORIGINS", raising=False)

    assert config.cors_allowed_origins() == ["http://localhost:3000"]


def test_cors_origins_split_and_trimmed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example ,")

    assert config.cors_allowed_origins() == ["https://a.example", "https://b.example"]


def test_configure_logging_does_not_stack_handlers() -> None:
    configure_logging("WARNING")
    logger = configure_logging("DEBUG")

    assert logger.name == "car_finance_sim"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    yield logging.getLogger("car_finance_sim")
    for handler in list(logging.getLogger("car_finance_sim").handlers):
        logging.getLogger("car_finance_sim").removeHandler(handler)


def test_configured_logger_emits_extra_fields_as_json(
    package_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
) -> None:
    configure_logging("DEBUG")

    logging.getLogger("car_finance_sim.use_cases.run_scenario").info(
        "Scenario choice applied",
        extra={"choice_id": "settle-now", "monthly_payment": Decimal("395.08")},
    )

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "Scenario choice applied"
    assert record["choice_id"] == "settle-now"
    assert record["monthly_payment"] == "395.08"
    assert record["level"] == "INFO"
    assert record["service"] == "car-finance-sim"
    assert record["name"] == "car_finance_sim.use_cases.run_scenario"
    assert "timestamp" in record


def test_configured_logger_respects_level(
    package_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
) -> None:
    configure_logging("WARNING")

    logger = logging.getLogger("car_finance_sim.use_cases.calculate_finance_plan")
    logger.info("Finance plan calculated")

    assert capsys.readouterr().out == ""
