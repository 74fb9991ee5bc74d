from fastapi import APIRouter, Depends

from car_finance_sim.entrypoints.http.dependencies import get_calculate_finance_plan_use_case
from car_finance_sim.entrypoints.http.dtos.finance import (
    FinancePlanRequestDTO,
    FinancePlanResponseDTO,
)
from car_finance_sim.entrypoints.http.error_responses import ErrorResponse
from car_finance_sim.entrypoints.http.mappers.finance_mapper import FinanceMapper
from car_finance_sim.use_cases.calculate_finance_plan import CalculateFinancePlan

router = APIRouter(tags=["Finance"])


@router.post(
    "/finance/plan",
    response_model=FinancePlanResponseDTO,
    summary="Calculate finance plan",
    description="""
    Calculate repayments for a standard car loan or a PCP with a balloon (GMFV).

    ## Monetary Values
    - All monetary values are strings (e.g., "25000.00")
    - Up to 2 decimal places; rates may carry more

    ## Calculation
    - Amount financed = cash_price - deposit + fees (never below zero)
    - Monthly rate = apr_percent / 100 / 12
    - Standard: annuity payment; PCP: annuity payment net of the discounted balloon
    - Total amount repayable = deposit + fees + monthly payments (+ balloon for PCP)
    - Total cost of credit = total amount repayable - cash_price (may be negative)
    - Schedule covers the first 12 months (or the whole term if shorter)

    ## Example
    ```
    POST /v1/finance/plan
    {
        "cash_price": "25000.00",
        "deposit": "5000.00",
        "apr_percent": "6.9",
        "term_months": 60
    }
    ```
    """,
    responses={422: {"description": "Validation error", "model": ErrorResponse}},
)
def calculate_finance_plan(
    payload: FinancePlanRequestDTO,
    use_case: CalculateFinancePlan = Depends(get_calculate_finance_plan_use_case),
) -> FinancePlanResponseDTO:
    """Parse → map → execute → map → return."""
    request = FinanceMapper.to_domain_request(payload)

    result = use_case.execute(request)

    return FinanceMapper.to_response(result)
