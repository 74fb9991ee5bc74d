"""Scenario runner use cases.

A run starts at node 0 with a LoanState derived from a successful
calculation, applies one choice per step and ends when a choice has no next
node. The runner is single-threaded and owns its state exclusively.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from car_finance_sim.domain.amortization import create_initial_state, recalculate
from car_finance_sim.domain.errors import ConflictError
from car_finance_sim.domain.finance import CalculationResult, LoanRequest, LoanState
from car_finance_sim.domain.scenario import (
    ChoiceOutcome,
    ScenarioGraph,
    ScenarioNode,
    apply_choice,
)
from car_finance_sim.ports.scenario_graph_repository import ScenarioGraphRepository
from car_finance_sim.use_cases.calculate_finance_plan import CalculateFinancePlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Decision:
    """One accepted choice, with the state on either side of it."""

    node_id: int
    choice_id: str
    label: str
    explanation: str
    state_before: LoanState
    state_after: LoanState


@dataclass(frozen=True, slots=True)
class ScenarioSummary:
    final_state: LoanState
    decisions: tuple[str, ...]


class ScenarioRunner:
    """
    Drives one run through a scenario graph.

    Responsibilities:
    - Track the current LoanState and node (None once Complete)
    - Apply choices offered by the current node
    - Record decision history for display
    - Restart from the snapshot taken at entry
    """

    def __init__(self, graph: ScenarioGraph, initial_state: LoanState) -> None:
        self._graph = graph
        self._initial_state = recalculate(initial_state)
        self._state = self._initial_state
        self._current_node_id: int | None = graph.initial_node_id
        self._history: list[Decision] = []

    @property
    def graph(self) -> ScenarioGraph:
        return self._graph

    @property
    def initial_state(self) -> LoanState:
        return self._initial_state

    @property
    def state(self) -> LoanState:
        return self._state

    @property
    def current_node_id(self) -> int | None:
        return self._current_node_id

    @property
    def current_node(self) -> ScenarioNode | None:
        if self._current_node_id is None:
            return None
        return self._graph.node(self._current_node_id)

    @property
    def is_complete(self) -> bool:
        return self._current_node_id is None

    @property
    def history(self) -> tuple[Decision, ...]:
        return tuple(self._history)

    def choose(self, choice_id: str) -> ChoiceOutcome:
        """
        Apply a choice from the current node.

        Raises:
            ConflictError: If the run is already complete
            NotFoundError: If the current node offers no such choice
        """
        node = self.current_node
        if node is None:
            raise ConflictError("Scenario run is already complete", choice_id=choice_id)

        choice = node.choice(choice_id)
        outcome = apply_choice(self._state, choice)

        self._history.append(
            Decision(
                node_id=node.id,
                choice_id=choice.id,
                label=choice.label,
                explanation=choice.explanation,
                state_before=self._state,
                state_after=outcome.state,
            )
        )
        self._state = outcome.state
        self._current_node_id = outcome.next_node_id

        logger.info(
            "Scenario choice applied",
            extra={
                "node_id": node.id,
                "choice_id": choice.id,
                "next_node_id": outcome.next_node_id,
                "monthly_payment": str(outcome.state.monthly_payment),
            },
        )

        return outcome

    def restart(self) -> None:
        self._state = self._initial_state
        self._current_node_id = self._graph.initial_node_id
        self._history.clear()

    def progress(self) -> tuple[int, int]:
        """(position of the current node, number of nodes); (n, n) once complete."""
        total = len(self._graph)
        if self._current_node_id is None:
            return total, total
        return self._graph.position_of(self._current_node_id), total

    def summary(self) -> ScenarioSummary:
        return ScenarioSummary(
            final_state=self._state,
            decisions=tuple(decision.label for decision in self._history),
        )


@dataclass(frozen=True, slots=True)
class ScenarioStart:
    request: LoanRequest
    plan: CalculationResult
    runner: ScenarioRunner


class StartScenario:
    """
    Use case for entering the scenario runner from raw loan inputs.

    A failed calculation raises before any LoanState exists.
    """

    def __init__(
        self,
        scenario_graph_repository: ScenarioGraphRepository,
        calculate_finance_plan: CalculateFinancePlan | None = None,
    ) -> None:
        self._repository = scenario_graph_repository
        self._calculate = calculate_finance_plan or CalculateFinancePlan()

    def execute(self, request: LoanRequest) -> ScenarioStart:
        plan = self._calculate.execute(request)
        state = create_initial_state(request, plan)
        runner = ScenarioRunner(self._repository.get_graph(), state)
        return ScenarioStart(request=request, plan=plan, runner=runner)


class ApplyScenarioChoice:
    """
    Stateless single step for callers that hold the LoanState themselves.

    Derived fields on the incoming state are recomputed before the choice is
    applied, so a stale monthly_payment from outside is never used.
    """

    def __init__(self, scenario_graph_repository: ScenarioGraphRepository) -> None:
        self._repository = scenario_graph_repository

    def execute(self, state: LoanState, node_id: int, choice_id: str) -> ChoiceOutcome:
        """
        Raises:
            NotFoundError: If the node or the choice does not exist
        """
        choice = self._repository.get_graph().node(node_id).choice(choice_id)
        return apply_choice(recalculate(state), choice)
