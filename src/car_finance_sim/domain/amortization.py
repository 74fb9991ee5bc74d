"""Amortization engine.

Pure functions that turn a LoanRequest into payments, totals and a schedule,
and keep a LoanState's derived fields consistent. No I/O, no shared state:
identical input gives identical Decimal output.

Rounding policy:
- Intermediate values keep full Decimal precision
- Currency outputs are rounded to cents (ROUND_HALF_UP) only where they are
  finally reported; schedule rows are rounded row by row
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, Overflow

from car_finance_sim.domain.finance import (
    SCHEDULE_PREVIEW_MONTHS,
    CalculationResult,
    FinanceType,
    LoanRequest,
    LoanState,
    ScheduleRow,
    round2,
)

ZERO = Decimal("0")
ONE = Decimal("1")
MONTHS_PER_YEAR = Decimal("12")


def growth_factor(monthly_rate: Decimal, term_months: int) -> Decimal | None:
    """(1+r)^n, or None once it exceeds the Decimal exponent range.

    None stands for the limit n -> infinity, where the payment tends to P * r.
    """
    try:
        return (ONE + monthly_rate) ** term_months
    except Overflow:
        return None


def standard_payment(principal: Decimal, monthly_rate: Decimal, term_months: int) -> Decimal:
    """Annuity payment: P * r / (1 - (1+r)^-n), or P / n at 0%."""
    if monthly_rate == 0:
        return principal / term_months
    factor = growth_factor(monthly_rate, term_months)
    if factor is None:
        return principal * monthly_rate
    return principal * monthly_rate / (ONE - ONE / factor)


def balloon_payment(
    principal: Decimal, balloon: Decimal, monthly_rate: Decimal, term_months: int
) -> Decimal:
    """Annuity payment with a future value: (P - FV/(1+r)^n) * r / (1 - (1+r)^-n)."""
    if monthly_rate == 0:
        return (principal - balloon) / term_months
    factor = growth_factor(monthly_rate, term_months)
    if factor is None:
        return principal * monthly_rate
    return ((principal - balloon / factor) * monthly_rate) / (ONE - ONE / factor)


def payment_for(
    finance_type: FinanceType,
    principal: Decimal,
    monthly_rate: Decimal,
    term_months: int,
    balloon: Decimal = ZERO,
) -> Decimal:
    if finance_type is FinanceType.BALLOON_PCP:
        return balloon_payment(principal, balloon, monthly_rate, term_months)
    return standard_payment(principal, monthly_rate, term_months)


def build_schedule(
    amount_financed: Decimal, monthly_rate: Decimal, term_months: int, payment: Decimal
) -> tuple[ScheduleRow, ...]:
    """First min(12, term) periods of the amortization table.

    Only the reported balance is clamped at zero. The running balance carries
    its rounding drift forward untouched.
    """
    rows = []
    balance = amount_financed

    for period in range(1, min(SCHEDULE_PREVIEW_MONTHS, term_months) + 1):
        interest = balance * monthly_rate
        principal_portion = payment - interest
        balance = balance + interest - payment
        rows.append(
            ScheduleRow(
                period=period,
                payment=round2(payment),
                interest=round2(interest),
                principal=round2(principal_portion),
                balance_after=round2(max(balance, ZERO)),
            )
        )

    return tuple(rows)


def calculate(request: LoanRequest) -> CalculationResult:
    """Validate a loan request and compute payment, totals and schedule.

    Raises:
        InvalidLoanRequest: If any input rule is violated
    """
    request.validate()

    amount_financed = max(ZERO, request.cash_price - request.deposit + request.fees)
    monthly_rate = request.apr_percent / Decimal("100") / MONTHS_PER_YEAR
    balloon = request.balloon_amount if request.is_pcp else ZERO

    payment = payment_for(
        request.finance_type, amount_financed, monthly_rate, request.term_months, balloon
    )

    total_monthly_paid = payment * request.term_months
    total_amount_repayable = round2(
        request.deposit + request.fees + total_monthly_paid + balloon
    )
    total_cost_of_credit = round2(total_amount_repayable - request.cash_price)

    return CalculationResult(
        amount_financed=round2(amount_financed),
        monthly_payment=round2(payment),
        total_monthly_paid=round2(total_monthly_paid),
        total_amount_repayable=total_amount_repayable,
        total_cost_of_credit=total_cost_of_credit,
        schedule=build_schedule(amount_financed, monthly_rate, request.term_months, payment),
    )


def recalculate(state: LoanState) -> LoanState:
    """Recompute monthly_payment and total_interest_remaining from the other fields.

    Must run after every change that can move the payment. Idempotent.
    A settled agreement (no months remaining) has no payment.
    """
    balloon = state.balloon_amount if state.is_pcp else ZERO

    if state.term_months_remaining <= 0:
        payment = ZERO
    else:
        payment = payment_for(
            state.finance_type,
            state.principal,
            state.annual_rate / MONTHS_PER_YEAR,
            state.term_months_remaining,
            balloon,
        )

    total_repaid = payment * max(state.term_months_remaining, 0) + balloon

    return replace(
        state,
        monthly_payment=round2(payment),
        total_interest_remaining=round2(total_repaid - state.principal),
    )


def create_initial_state(request: LoanRequest, result: CalculationResult) -> LoanState:
    """Seed the scenario runner from a successful calculation."""
    state = LoanState(
        finance_type=request.finance_type,
        principal=result.amount_financed,
        balloon_amount=request.balloon_amount if request.is_pcp else ZERO,
        annual_rate=request.apr_percent / Decimal("100"),
        term_months_remaining=request.term_months,
        months_elapsed=0,
    )
    return recalculate(state)
