from __future__ import annotations

from decimal import Decimal

import pytest

from car_finance_sim.domain.amortization import recalculate
from car_finance_sim.domain.errors import InvalidScenarioGraph, NotFoundError
from car_finance_sim.domain.finance import FinanceType, LoanState
from car_finance_sim.domain.scenario import (
    ScenarioChoice,
    ScenarioGraph,
    ScenarioNode,
    Transition,
    TransitionKind,
    apply_choice,
)


@pytest.fixture
def state() -> LoanState:
    return recalculate(
        LoanState(
            finance_type=FinanceType.STANDARD,
            principal=Decimal("20000.00"),
            balloon_amount=Decimal("0"),
            annual_rate=Decimal("0.069"),
            term_months_remaining=60,
        )
    )


def choice(choice_id: str, next_node_id: int | None = None, transition: Transition | None = None) -> ScenarioChoice:
    return ScenarioChoice(
        id=choice_id,
        label=choice_id,
        transition=transition or Transition(TransitionKind.KEEP),
        explanation=f"{choice_id} explained",
        next_node_id=next_node_id,
    )


# ==============================================================================
# Transitions
# ==============================================================================


def test_keep_returns_state_unchanged(state: LoanState) -> None:
    assert Transition(TransitionKind.KEEP).apply(state) == state


def test_change_rate_updates_rate_term_and_elapsed(state: LoanState) -> None:
    transition = Transition(
        TransitionKind.CHANGE_RATE, rate_delta=Decimal("0.01"), term_delta=12, months_elapsed=12
    )

    updated = transition.apply(state)

    assert updated.annual_rate == Decimal("0.079")
    assert updated.term_months_remaining == 72
    assert updated.months_elapsed == 12
    assert updated.monthly_payment == Decimal("349.69")
    assert updated.total_interest_remaining == Decimal("5177.61")


def test_change_term_respects_floor(state: LoanState) -> None:
    short = LoanState(
        finance_type=state.finance_type,
        principal=state.principal,
        balloon_amount=state.balloon_amount,
        annual_rate=state.annual_rate,
        term_months_remaining=3,
    )

    updated = Transition(TransitionKind.CHANGE_TERM, term_delta=-6, min_term=1).apply(short)

    assert updated.term_months_remaining == 1
    assert updated.monthly_payment > state.principal


def test_add_to_principal_recalculates(state: LoanState) -> None:
    updated = Transition(TransitionKind.ADD_TO_PRINCIPAL, amount=Decimal("50")).apply(state)

    assert updated.principal == Decimal("20050.00")
    assert updated.monthly_payment == Decimal("396.07")
    assert updated.total_interest_remaining == Decimal("3714.13")


def test_pay_down_principal_floors_at_zero(state: LoanState) -> None:
    updated = Transition(TransitionKind.PAY_DOWN_PRINCIPAL, amount=Decimal("25000")).apply(state)

    assert updated.principal == Decimal("0")
    assert updated.monthly_payment == Decimal("0")


def test_settle_zeroes_the_agreement(state: LoanState) -> None:
    updated = Transition(TransitionKind.SETTLE).apply(state)

    assert updated.principal == 0
    assert updated.balloon_amount == 0
    assert updated.term_months_remaining == 0
    assert updated.monthly_payment == 0
    assert updated.total_interest_remaining == 0
    assert updated.annual_rate == state.annual_rate


@pytest.mark.parametrize("kind", list(TransitionKind))
def test_every_transition_returns_a_consistent_state(state: LoanState, kind: TransitionKind) -> None:
    """Derived fields always match what recalculate would produce."""
    updated = Transition(kind, rate_delta=Decimal("0.02"), term_delta=6, amount=Decimal("500")).apply(state)

    assert recalculate(updated) == updated


# ==============================================================================
# Nodes and graph integrity
# ==============================================================================


def test_node_finds_choice_by_id() -> None:
    node = ScenarioNode(id=0, title="t", description="d", choices=(choice("a"), choice("b")))

    assert node.choice("b").id == "b"


def test_node_unknown_choice_raises_not_found() -> None:
    node = ScenarioNode(id=0, title="t", description="d", choices=(choice("a"),))

    with pytest.raises(NotFoundError, match="ScenarioChoice with identifier 'z' not found"):
        node.choice("z")


def test_node_without_next_pointers_is_terminal() -> None:
    assert ScenarioNode(id=0, title="t", description="d", choices=(choice("a"),)).is_terminal
    assert ScenarioNode(id=0, title="t", description="d").is_terminal


def test_graph_rejects_dangling_next_id() -> None:
    with pytest.raises(InvalidScenarioGraph, match="unknown node 5"):
        ScenarioGraph(nodes=(ScenarioNode(id=0, title="t", description="d", choices=(choice("a", 5),)),))


def test_graph_rejects_duplicate_node_ids() -> None:
    with pytest.raises(InvalidScenarioGraph, match="duplicate node id 0"):
        ScenarioGraph(
            nodes=(
                ScenarioNode(id=0, title="t", description="d"),
                ScenarioNode(id=0, title="u", description="e"),
            )
        )


def test_graph_rejects_duplicate_choice_ids() -> None:
    with pytest.raises(InvalidScenarioGraph, match="duplicate choice id 'a'"):
        ScenarioGraph(
            nodes=(ScenarioNode(id=0, title="t", description="d", choices=(choice("a"), choice("a"))),)
        )


def test_graph_requires_initial_node() -> None:
    with pytest.raises(InvalidScenarioGraph, match="initial node 0 is missing"):
        ScenarioGraph(nodes=(ScenarioNode(id=1, title="t", description="d"),))


def test_graph_allows_cycles() -> None:
    graph = ScenarioGraph(
        nodes=(
            ScenarioNode(id=0, title="t", description="d", choices=(choice("to-1", 1),)),
            ScenarioNode(id=1, title="u", description="e", choices=(choice("to-0", 0),)),
        )
    )

    assert len(graph) == 2
    assert 1 in graph


def test_graph_node_lookup_and_position() -> None:
    graph = ScenarioGraph(
        nodes=(
            ScenarioNode(id=0, title="first", description="d", choices=(choice("a", 7),)),
            ScenarioNode(id=7, title="second", description="e"),
        )
    )

    assert graph.node(7).title == "second"
    assert graph.position_of(7) == 2
    assert [node.id for node in graph] == [0, 7]

    with pytest.raises(NotFoundError):
        graph.node(3)


# ==============================================================================
# apply_choice
# ==============================================================================


def test_apply_choice_reports_explanation_and_next(state: LoanState) -> None:
    rate_up = choice(
        "rate-up",
        next_node_id=1,
        transition=Transition(TransitionKind.CHANGE_RATE, rate_delta=Decimal("0.01")),
    )

    outcome = apply_choice(state, rate_up)

    assert outcome.choice_id == "rate-up"
    assert outcome.label == "rate-up"
    assert outcome.explanation == "rate-up explained"
    assert outcome.next_node_id == 1
    assert not outcome.is_complete
    assert outcome.state.monthly_payment == Decimal("404.57")


def test_apply_choice_without_next_completes(state: LoanState) -> None:
    outcome = apply_choice(state, choice("done"))

    assert outcome.is_complete
    assert outcome.state == state


def test_apply_choice_does_not_mutate_input(state: LoanState) -> None:
    before = state
    apply_choice(state, choice("add", transition=Transition(TransitionKind.ADD_TO_PRINCIPAL, amount=Decimal("1200"))))

    assert state == before
    assert state.principal == Decimal("20000.00")
