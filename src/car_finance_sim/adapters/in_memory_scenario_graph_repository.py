from __future__ import annotations

from car_finance_sim.domain.scenario import ScenarioGraph
from car_finance_sim.domain.scenario_library import CAR_FINANCE_SCENARIOS
from car_finance_sim.ports.scenario_graph_repository import ScenarioGraphRepository


class InMemoryScenarioGraphRepository(ScenarioGraphRepository):
    """
    Serves a graph held in memory.

    - Defaults to the built-in car finance scenarios
    - Tests can inject a smaller or cyclic graph
    """

    def __init__(self, graph: ScenarioGraph = CAR_FINANCE_SCENARIOS) -> None:
        self._graph = graph

    def get_graph(self) -> ScenarioGraph:
        return self._graph
