"""
Dependency injection for FastAPI routes.

Everything wired here is stateless: the scenario graph is immutable and the
use cases hold no per-run state, so fresh instances per request are cheap.
Simulation state lives with the client.
"""

from __future__ import annotations

from fastapi import Depends

from car_finance_sim.adapters.in_memory_scenario_graph_repository import (
    InMemoryScenarioGraphRepository,
)
from car_finance_sim.ports.scenario_graph_repository import ScenarioGraphRepository
from car_finance_sim.use_cases.calculate_finance_plan import CalculateFinancePlan
from car_finance_sim.use_cases.run_scenario import ApplyScenarioChoice, StartScenario


def get_scenario_graph_repository() -> ScenarioGraphRepository:
    """Repository serving the built-in car finance scenarios."""
    return InMemoryScenarioGraphRepository()


def get_calculate_finance_plan_use_case() -> CalculateFinancePlan:
    return CalculateFinancePlan()


def get_start_scenario_use_case(
    repository: ScenarioGraphRepository = Depends(get_scenario_graph_repository),
    calculate_finance_plan: CalculateFinancePlan = Depends(get_calculate_finance_plan_use_case),
) -> StartScenario:
    """
    Factory for StartScenario.

    Args:
        repository: Scenario graph source (injected)
        calculate_finance_plan: Plan calculator (injected)
    """
    return StartScenario(
        scenario_graph_repository=repository,
        calculate_finance_plan=calculate_finance_plan,
    )


def get_apply_scenario_choice_use_case(
    repository: ScenarioGraphRepository = Depends(get_scenario_graph_repository),
) -> ApplyScenarioChoice:
    return ApplyScenarioChoice(scenario_graph_repository=repository)
