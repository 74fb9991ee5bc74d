"""Scenario model: decision nodes, choices and the transitions they apply.

Transitions are data (a TransitionKind plus parameters) dispatched through a
table of pure functions, so a graph can be enumerated and serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterator

from car_finance_sim.domain.amortization import ZERO, recalculate
from car_finance_sim.domain.errors import InvalidScenarioGraph, NotFoundError
from car_finance_sim.domain.finance import LoanState

INITIAL_NODE_ID = 0


class TransitionKind(str, Enum):
    KEEP = "keep"
    CHANGE_RATE = "change_rate"
    CHANGE_TERM = "change_term"
    ADD_TO_PRINCIPAL = "add_to_principal"
    PAY_DOWN_PRINCIPAL = "pay_down_principal"
    SETTLE = "settle"


@dataclass(frozen=True, slots=True)
class Transition:
    """A state-delta rule: kind plus the parameters that kind reads."""

    kind: TransitionKind
    rate_delta: Decimal = ZERO
    term_delta: int = 0
    min_term: int = 0
    amount: Decimal = ZERO
    months_elapsed: int = 0

    def apply(self, state: LoanState) -> LoanState:
        return _TRANSITIONS[self.kind](state, self)


def _keep(state: LoanState, transition: Transition) -> LoanState:
    return state


def _change_rate(state: LoanState, transition: Transition) -> LoanState:
    return recalculate(
        replace(
            state,
            annual_rate=state.annual_rate + transition.rate_delta,
            term_months_remaining=state.term_months_remaining + transition.term_delta,
            months_elapsed=state.months_elapsed + transition.months_elapsed,
        )
    )


def _change_term(state: LoanState, transition: Transition) -> LoanState:
    term = max(state.term_months_remaining + transition.term_delta, transition.min_term)
    return recalculate(replace(state, term_months_remaining=term))


def _add_to_principal(state: LoanState, transition: Transition) -> LoanState:
    return recalculate(replace(state, principal=state.principal + transition.amount))


def _pay_down_principal(state: LoanState, transition: Transition) -> LoanState:
    principal = max(state.principal - transition.amount, ZERO)
    return recalculate(replace(state, principal=principal))


def _settle(state: LoanState, transition: Transition) -> LoanState:
    return replace(
        state,
        principal=ZERO,
        balloon_amount=ZERO,
        term_months_remaining=0,
        monthly_payment=ZERO,
        total_interest_remaining=ZERO,
    )


_TRANSITIONS: dict[TransitionKind, Callable[[LoanState, Transition], LoanState]] = {
    TransitionKind.KEEP: _keep,
    TransitionKind.CHANGE_RATE: _change_rate,
    TransitionKind.CHANGE_TERM: _change_term,
    TransitionKind.ADD_TO_PRINCIPAL: _add_to_principal,
    TransitionKind.PAY_DOWN_PRINCIPAL: _pay_down_principal,
    TransitionKind.SETTLE: _settle,
}


@dataclass(frozen=True, slots=True)
class ScenarioChoice:
    id: str
    label: str
    transition: Transition
    explanation: str
    next_node_id: int | None = None  # None: the run is complete after this choice


@dataclass(frozen=True, slots=True)
class ScenarioNode:
    id: int
    title: str
    description: str
    choices: tuple[ScenarioChoice, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return all(choice.next_node_id is None for choice in self.choices)

    def choice(self, choice_id: str) -> ScenarioChoice:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        raise NotFoundError(resource="ScenarioChoice", identifier=choice_id, node_id=self.id)


@dataclass(frozen=True)
class ScenarioGraph:
    """Fixed, ordered set of scenario nodes.

    Integrity is checked on construction: unique node ids, unique choice ids
    per node, an initial node, and no choice pointing at a missing node.
    Cycles are allowed.
    """

    nodes: tuple[ScenarioNode, ...]
    initial_node_id: int = INITIAL_NODE_ID
    _by_id: dict[int, ScenarioNode] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_id: dict[int, ScenarioNode] = {}
        for node in self.nodes:
            if node.id in by_id:
                raise InvalidScenarioGraph(f"duplicate node id {node.id}", node_id=node.id)
            by_id[node.id] = node

        if self.initial_node_id not in by_id:
            raise InvalidScenarioGraph(
                f"initial node {self.initial_node_id} is missing",
                node_id=self.initial_node_id,
            )

        for node in self.nodes:
            seen: set[str] = set()
            for choice in node.choices:
                if choice.id in seen:
                    raise InvalidScenarioGraph(
                        f"duplicate choice id '{choice.id}' in node {node.id}",
                        node_id=node.id,
                        choice_id=choice.id,
                    )
                seen.add(choice.id)
                if choice.next_node_id is not None and choice.next_node_id not in by_id:
                    raise InvalidScenarioGraph(
                        f"choice '{choice.id}' points at unknown node {choice.next_node_id}",
                        node_id=node.id,
                        choice_id=choice.id,
                    )

        object.__setattr__(self, "_by_id", by_id)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ScenarioNode]:
        return iter(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    def node(self, node_id: int) -> ScenarioNode:
        try:
            return self._by_id[node_id]
        except KeyError:
            raise NotFoundError(resource="ScenarioNode", identifier=str(node_id)) from None

    def position_of(self, node_id: int) -> int:
        """1-based position of a node in display order."""
        return self.nodes.index(self.node(node_id)) + 1


@dataclass(frozen=True, slots=True)
class ChoiceOutcome:
    state: LoanState
    choice_id: str
    label: str
    explanation: str
    next_node_id: int | None

    @property
    def is_complete(self) -> bool:
        return self.next_node_id is None


def apply_choice(state: LoanState, choice: ScenarioChoice) -> ChoiceOutcome:
    """Apply one choice to a state and report where the run goes next.

    The transition's result is recalculated again here; recalculate is
    idempotent so a transition that already did it is unaffected.
    """
    new_state = recalculate(choice.transition.apply(state))
    return ChoiceOutcome(
        state=new_state,
        choice_id=choice.id,
        label=choice.label,
        explanation=choice.explanation,
        next_node_id=choice.next_node_id,
    )
