from __future__ import annotations

from abc import ABC, abstractmethod

from car_finance_sim.domain.scenario import ScenarioGraph


class ScenarioGraphRepository(ABC):
    """
    Port for scenario graph access.

    Contract:
        - The returned graph has already passed its integrity check
        - The graph is immutable; callers may hold on to it
    """

    @abstractmethod
    def get_graph(self) -> ScenarioGraph:
        """
        Return the scenario graph that runs should play through.

        Returns:
            ScenarioGraph with every choice pointing at a known node (or Complete)
        """
        ...
