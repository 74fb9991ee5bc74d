from fastapi import APIRouter, Depends

from car_finance_sim.entrypoints.http.dependencies import (
    get_apply_scenario_choice_use_case,
    get_scenario_graph_repository,
    get_start_scenario_use_case,
)
from car_finance_sim.entrypoints.http.dtos.finance import FinancePlanRequestDTO
from car_finance_sim.entrypoints.http.dtos.scenario import (
    ChoiceOutcomeResponseDTO,
    LoanStateDTO,
    ScenarioGraphDTO,
    ScenarioNodeDTO,
    ScenarioStartResponseDTO,
)
from car_finance_sim.entrypoints.http.error_responses import ErrorResponse
from car_finance_sim.entrypoints.http.mappers.finance_mapper import FinanceMapper
from car_finance_sim.entrypoints.http.mappers.scenario_mapper import ScenarioMapper
from car_finance_sim.ports.scenario_graph_repository import ScenarioGraphRepository
from car_finance_sim.use_cases.run_scenario import ApplyScenarioChoice, StartScenario

router = APIRouter(prefix="/scenarios", tags=["Scenarios"])


@router.get(
    "",
    response_model=ScenarioGraphDTO,
    summary="List scenario graph",
)
def get_scenario_graph(
    repository: ScenarioGraphRepository = Depends(get_scenario_graph_repository),
) -> ScenarioGraphDTO:
    return ScenarioMapper.to_graph_dto(repository.get_graph())


@router.post(
    "/start",
    response_model=ScenarioStartResponseDTO,
    summary="Enter the scenario runner",
    description="""
    Calculate the plan and derive the initial loan state for the scenario runner.

    The server keeps no simulation state. Hold on to the returned `state`:
    send the current state with each choice, and resend this first state
    against node 0 to restart.
    """,
    responses={422: {"description": "Validation error", "model": ErrorResponse}},
)
def start_scenario(
    payload: FinancePlanRequestDTO,
    use_case: StartScenario = Depends(get_start_scenario_use_case),
) -> ScenarioStartResponseDTO:
    request = FinanceMapper.to_domain_request(payload)

    start = use_case.execute(request)

    runner = start.runner
    return ScenarioStartResponseDTO(
        plan=FinanceMapper.to_response(start.plan),
        state=ScenarioMapper.to_state_dto(runner.state),
        node=ScenarioMapper.to_node_dto(runner.current_node, runner.graph),
    )


@router.get(
    "/{node_id}",
    response_model=ScenarioNodeDTO,
    summary="Get scenario node",
    responses={404: {"description": "Unknown node", "model": ErrorResponse}},
)
def get_scenario_node(
    node_id: int,
    repository: ScenarioGraphRepository = Depends(get_scenario_graph_repository),
) -> ScenarioNodeDTO:
    graph = repository.get_graph()
    return ScenarioMapper.to_node_dto(graph.node(node_id), graph)


@router.post(
    "/{node_id}/choices/{choice_id}",
    response_model=ChoiceOutcomeResponseDTO,
    summary="Apply a scenario choice",
    description="""
    Apply one choice to the supplied loan state.

    Derived fields in the body (monthly_payment, total_interest_remaining)
    are recomputed before the choice runs. `complete` is true when the
    choice ends the run.
    """,
    responses={
        404: {"description": "Unknown node or choice", "model": ErrorResponse},
        422: {"description": "Validation error", "model": ErrorResponse},
    },
)
def apply_scenario_choice(
    node_id: int,
    choice_id: str,
    payload: LoanStateDTO,
    use_case: ApplyScenarioChoice = Depends(get_apply_scenario_choice_use_case),
    repository: ScenarioGraphRepository = Depends(get_scenario_graph_repository),
) -> ChoiceOutcomeResponseDTO:
    state = ScenarioMapper.to_domain_state(payload)

    outcome = use_case.execute(state, node_id, choice_id)

    return ScenarioMapper.to_outcome_response(outcome, repository.get_graph())
