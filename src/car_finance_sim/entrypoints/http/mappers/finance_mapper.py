from __future__ import annotations

from decimal import Decimal, InvalidOperation

from car_finance_sim.domain.errors import ValidationError
from car_finance_sim.domain.finance import (
    CalculationResult,
    FinanceType,
    LoanRequest,
    ScheduleRow,
)
from car_finance_sim.entrypoints.http.dtos.finance import (
    FinancePlanRequestDTO,
    FinancePlanResponseDTO,
    ScheduleRowDTO,
)


def parse_decimal(value: str, field: str, errors: list[dict[str, str]]) -> Decimal:
    """Parse a decimal string, recording a field error instead of raising."""
    try:
        return Decimal(value)
    except (InvalidOperation, ValueError):
        errors.append(
            {
                "field": field,
                "message": f"Must be a valid decimal: {value}",
                "code": "INVALID_DECIMAL",
            }
        )
        return Decimal("0")  # Placeholder to continue validation


def format_decimal(value: Decimal) -> str:
    """Plain notation, never exponent form."""
    return format(value, "f")


class FinanceMapper:
    """Maps between REST DTOs and domain models for finance plans."""

    @staticmethod
    def to_domain_request(dto: FinancePlanRequestDTO) -> LoanRequest:
        """
        Converts request DTO to domain LoanRequest.

        Handles string → Decimal conversion at the boundary.

        Raises:
            ValidationError: If string values cannot be converted to valid Decimals
        """
        errors: list[dict[str, str]] = []

        cash_price = parse_decimal(dto.cash_price, "cash_price", errors)
        deposit = parse_decimal(dto.deposit, "deposit", errors)
        fees = parse_decimal(dto.fees, "fees", errors)
        apr_percent = parse_decimal(dto.apr_percent, "apr_percent", errors)
        balloon_amount = parse_decimal(dto.balloon_amount, "balloon_amount", errors)

        if errors:
            raise ValidationError(errors=errors)

        return LoanRequest(
            cash_price=cash_price,
            deposit=deposit,
            fees=fees,
            apr_percent=apr_percent,
            term_months=dto.term_months,
            finance_type=FinanceType(dto.finance_type),
            balloon_amount=balloon_amount,
        )

    @staticmethod
    def to_schedule_row(row: ScheduleRow) -> ScheduleRowDTO:
        return ScheduleRowDTO(
            period=row.period,
            payment=format_decimal(row.payment),
            interest=format_decimal(row.interest),
            principal=format_decimal(row.principal),
            balance_after=format_decimal(row.balance_after),
        )

    @staticmethod
    def to_response(result: CalculationResult) -> FinancePlanResponseDTO:
        """
        Converts domain CalculationResult to response DTO.

        Handles Decimal → string conversion at the boundary.
        """
        return FinancePlanResponseDTO(
            amount_financed=format_decimal(result.amount_financed),
            monthly_payment=format_decimal(result.monthly_payment),
            total_monthly_paid=format_decimal(result.total_monthly_paid),
            total_amount_repayable=format_decimal(result.total_amount_repayable),
            total_cost_of_credit=format_decimal(result.total_cost_of_credit),
            schedule=[FinanceMapper.to_schedule_row(row) for row in result.schedule],
        )
