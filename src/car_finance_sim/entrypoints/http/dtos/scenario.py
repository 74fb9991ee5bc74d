from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from car_finance_sim.entrypoints.http.dtos.finance import (
    MONEY_PATTERN,
    RATE_PATTERN,
    FinancePlanResponseDTO,
)


class LoanStateDTO(BaseModel):
    """Loan state carried by the client between scenario steps.

    monthly_payment and total_interest_remaining are derived; the server
    recomputes them and ignores whatever the client sends.
    """

    finance_type: Literal["standard", "balloon_pcp"]
    principal: str = Field(examples=["20000.00"], pattern=MONEY_PATTERN)
    balloon_amount: str = Field(default="0", examples=["0"], pattern=MONEY_PATTERN)
    annual_rate: str = Field(
        description="Annual rate as decimal fraction (e.g., '0.069' = 6.9%)",
        examples=["0.069"],
        pattern=RATE_PATTERN,
    )
    term_months_remaining: int = Field(ge=0, examples=[60])
    monthly_payment: str = Field(default="0", examples=["395.08"])
    total_interest_remaining: str = Field(default="0", examples=["3704.86"])
    months_elapsed: int = Field(default=0, ge=0, examples=[0])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "finance_type": "standard",
                "principal": "20000.00",
                "balloon_amount": "0",
                "annual_rate": "0.069",
                "term_months_remaining": 60,
                "monthly_payment": "395.08",
                "total_interest_remaining": "3704.86",
                "months_elapsed": 0,
            }
        }
    )


class TransitionDTO(BaseModel):
    kind: str = Field(examples=["change_rate"])
    rate_delta: str = Field(examples=["0.01"])
    term_delta: int = Field(examples=[0])
    min_term: int = Field(examples=[0])
    amount: str = Field(examples=["0"])
    months_elapsed: int = Field(examples=[12])


class ScenarioChoiceDTO(BaseModel):
    id: str = Field(examples=["rate-up-keep-term"])
    label: str
    explanation: str
    transition: TransitionDTO
    next_node_id: int | None = Field(
        description="Next node, or null when this choice completes the run",
        examples=[1],
    )


class ScenarioNodeDTO(BaseModel):
    id: int = Field(examples=[0])
    title: str = Field(examples=["Interest Rate Increase"])
    description: str
    position: int = Field(description="1-based position for progress display", examples=[1])
    choices: list[ScenarioChoiceDTO]


class ScenarioGraphDTO(BaseModel):
    initial_node_id: int = Field(examples=[0])
    total: int = Field(examples=[7])
    nodes: list[ScenarioNodeDTO]


class ScenarioStartResponseDTO(BaseModel):
    """Entry into the scenario runner.

    Keep `state` as the restart snapshot: restarting means resending it
    against the initial node.
    """

    plan: FinancePlanResponseDTO
    state: LoanStateDTO
    node: ScenarioNodeDTO


class ChoiceOutcomeResponseDTO(BaseModel):
    choice_id: str = Field(examples=["rate-up-keep-term"])
    label: str
    explanation: str
    state: LoanStateDTO
    next_node_id: int | None = Field(examples=[1])
    complete: bool = Field(examples=[False])
    next_node: ScenarioNodeDTO | None = None
