from __future__ import annotations

import logging
from dataclasses import dataclass

from car_finance_sim.domain.amortization import calculate
from car_finance_sim.domain.finance import CalculationResult, LoanRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CalculateFinancePlan:
    """
    Calculate a finance plan (standard loan or PCP) with its first-year schedule.

    Rounding policy:
    - All intermediate calculations use full precision Decimal
    - Reported currency values are rounded to cents using ROUND_HALF_UP
    - Totals are derived from the unrounded monthly payment, so
      total_monthly_paid may differ from monthly_payment * term by a few cents
    """

    def execute(self, req: LoanRequest) -> CalculationResult:
        result = calculate(req)

        logger.debug(
            "Finance plan calculated",
            extra={
                "finance_type": req.finance_type.value,
                "term_months": req.term_months,
                "amount_financed": str(result.amount_financed),
                "monthly_payment": str(result.monthly_payment),
            },
        )

        return result
