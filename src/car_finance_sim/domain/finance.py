from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from car_finance_sim.domain.errors import ValidationError


class InvalidLoanRequest(ValidationError):
    pass


SCHEDULE_PREVIEW_MONTHS = 12
CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric input to Decimal. Floats go through str() so 6.9 stays 6.9."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class FinanceType(str, Enum):
    STANDARD = "standard"
    BALLOON_PCP = "balloon_pcp"


@dataclass(frozen=True, slots=True)
class LoanRequest:
    cash_price: Decimal
    deposit: Decimal
    fees: Decimal
    apr_percent: Decimal
    term_months: int
    finance_type: FinanceType = FinanceType.STANDARD
    balloon_amount: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        for name in ("cash_price", "deposit", "fees", "apr_percent", "balloon_amount"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(self, "finance_type", FinanceType(self.finance_type))

    @property
    def is_pcp(self) -> bool:
        return self.finance_type is FinanceType.BALLOON_PCP

    def validate(self) -> None:
        # deposit <= cash_price is a UI concern; the engine clamps amount financed at 0
        if self.cash_price <= 0:
            self._reject("cash_price", "cash_price must be > 0")
        if self.deposit < 0:
            self._reject("deposit", "deposit must be >= 0")
        if self.fees < 0:
            self._reject("fees", "fees must be >= 0")
        if self.term_months <= 0:
            self._reject("term_months", "term_months must be > 0")
        if self.apr_percent < 0:
            self._reject("apr_percent", "apr_percent must be >= 0")
        if self.is_pcp and self.balloon_amount < 0:
            self._reject("balloon_amount", "balloon_amount must be >= 0")
        if self.is_pcp and self.balloon_amount >= self.cash_price:
            self._reject("balloon_amount", "balloon_amount must be < cash_price")

    @staticmethod
    def _reject(field: str, message: str) -> None:
        raise InvalidLoanRequest(
            message,
            errors=[{"field": field, "message": message, "code": "INVALID_VALUE"}],
        )


@dataclass(frozen=True, slots=True)
class ScheduleRow:
    period: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance_after: Decimal


@dataclass(frozen=True, slots=True)
class CalculationResult:
    amount_financed: Decimal
    monthly_payment: Decimal
    total_monthly_paid: Decimal
    total_amount_repayable: Decimal
    total_cost_of_credit: Decimal
    schedule: tuple[ScheduleRow, ...]


@dataclass(frozen=True, slots=True)
class LoanState:
    """Loan as seen by the scenario runner.

    `principal` is a simplified aggregate: each step re-amortizes the whole
    remaining principal from scratch rather than tracking a running balance.
    `monthly_payment` and `total_interest_remaining` are derived; build new
    states through amortization.recalculate() so they never go stale.
    """

    finance_type: FinanceType
    principal: Decimal
    balloon_amount: Decimal
    annual_rate: Decimal
    term_months_remaining: int
    monthly_payment: Decimal = Decimal("0")
    total_interest_remaining: Decimal = Decimal("0")
    months_elapsed: int = 0

    @property
    def is_pcp(self) -> bool:
        return self.finance_type is FinanceType.BALLOON_PCP
