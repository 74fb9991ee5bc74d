from __future__ import annotations

from car_finance_sim.domain.errors import ValidationError
from car_finance_sim.domain.finance import FinanceType, LoanState
from car_finance_sim.domain.scenario import (
    ChoiceOutcome,
    ScenarioChoice,
    ScenarioGraph,
    ScenarioNode,
)
from car_finance_sim.entrypoints.http.dtos.scenario import (
    ChoiceOutcomeResponseDTO,
    LoanStateDTO,
    ScenarioChoiceDTO,
    ScenarioGraphDTO,
    ScenarioNodeDTO,
    TransitionDTO,
)
from car_finance_sim.entrypoints.http.mappers.finance_mapper import (
    format_decimal,
    parse_decimal,
)


class ScenarioMapper:
    """Maps between REST DTOs and the scenario domain model."""

    @staticmethod
    def to_domain_state(dto: LoanStateDTO) -> LoanState:
        """
        Converts a client-held state to a domain LoanState.

        Derived fields are left at zero; the use case recalculates them.

        Raises:
            ValidationError: If monetary strings are not valid decimals
        """
        errors: list[dict[str, str]] = []

        principal = parse_decimal(dto.principal, "principal", errors)
        balloon_amount = parse_decimal(dto.balloon_amount, "balloon_amount", errors)
        annual_rate = parse_decimal(dto.annual_rate, "annual_rate", errors)

        if errors:
            raise ValidationError(errors=errors)

        return LoanState(
            finance_type=FinanceType(dto.finance_type),
            principal=principal,
            balloon_amount=balloon_amount,
            annual_rate=annual_rate,
            term_months_remaining=dto.term_months_remaining,
            months_elapsed=dto.months_elapsed,
        )

    @staticmethod
    def to_state_dto(state: LoanState) -> LoanStateDTO:
        return LoanStateDTO(
            finance_type=state.finance_type.value,
            principal=format_decimal(state.principal),
            balloon_amount=format_decimal(state.balloon_amount),
            annual_rate=format_decimal(state.annual_rate),
            term_months_remaining=state.term_months_remaining,
            monthly_payment=format_decimal(state.monthly_payment),
            total_interest_remaining=format_decimal(state.total_interest_remaining),
            months_elapsed=state.months_elapsed,
        )

    @staticmethod
    def to_choice_dto(choice: ScenarioChoice) -> ScenarioChoiceDTO:
        transition = choice.transition
        return ScenarioChoiceDTO(
            id=choice.id,
            label=choice.label,
            explanation=choice.explanation,
            transition=TransitionDTO(
                kind=transition.kind.value,
                rate_delta=format_decimal(transition.rate_delta),
                term_delta=transition.term_delta,
                min_term=transition.min_term,
                amount=format_decimal(transition.amount),
                months_elapsed=transition.months_elapsed,
            ),
            next_node_id=choice.next_node_id,
        )

    @staticmethod
    def to_node_dto(node: ScenarioNode, graph: ScenarioGraph) -> ScenarioNodeDTO:
        return ScenarioNodeDTO(
            id=node.id,
            title=node.title,
            description=node.description,
            position=graph.position_of(node.id),
            choices=[ScenarioMapper.to_choice_dto(choice) for choice in node.choices],
        )

    @staticmethod
    def to_graph_dto(graph: ScenarioGraph) -> ScenarioGraphDTO:
        return ScenarioGraphDTO(
            initial_node_id=graph.initial_node_id,
            total=len(graph),
            nodes=[ScenarioMapper.to_node_dto(node, graph) for node in graph],
        )

    @staticmethod
    def to_outcome_response(
        outcome: ChoiceOutcome, graph: ScenarioGraph
    ) -> ChoiceOutcomeResponseDTO:
        next_node = None
        if outcome.next_node_id is not None:
            next_node = ScenarioMapper.to_node_dto(graph.node(outcome.next_node_id), graph)

        return ChoiceOutcomeResponseDTO(
            choice_id=outcome.choice_id,
            label=outcome.label,
            explanation=outcome.explanation,
            state=ScenarioMapper.to_state_dto(outcome.state),
            next_node_id=outcome.next_node_id,
            complete=outcome.is_complete,
            next_node=next_node,
        )
