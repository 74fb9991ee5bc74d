from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONEY_PATTERN = r"^\d+(\.\d{1,2})?$"
RATE_PATTERN = r"^\d+(\.\d+)?$"

# Input ranges offered by the calculator form
MAX_CASH_PRICE = Decimal("250000")
MAX_FEES = Decimal("5000")
MAX_APR_PERCENT = Decimal("50")
MAX_TERM_MONTHS = 96


class FinancePlanRequestDTO(BaseModel):
    """Request payload for calculating a finance plan."""

    cash_price: str = Field(
        description="Vehicle cash price (including VAT) as decimal string",
        examples=["25000.00"],
        pattern=MONEY_PATTERN,
    )
    deposit: str = Field(
        default="0",
        description="Upfront customer deposit as decimal string",
        examples=["5000.00"],
        pattern=MONEY_PATTERN,
    )
    fees: str = Field(
        default="0",
        description="Flat fees added to the amount financed as decimal string",
        examples=["0.00"],
        pattern=MONEY_PATTERN,
    )
    apr_percent: str = Field(
        description="Nominal annual rate in percent (e.g., '6.9' = 6.9%)",
        examples=["6.9"],
        pattern=RATE_PATTERN,
    )
    term_months: int = Field(
        description="Number of monthly repayments",
        examples=[60],
        ge=1,
        le=MAX_TERM_MONTHS,
    )
    finance_type: Literal["standard", "balloon_pcp"] = Field(
        default="standard",
        description="'standard' loan or 'balloon_pcp' with a final GMFV payment",
        examples=["standard"],
    )
    balloon_amount: str = Field(
        default="0",
        description="PCP only: final balloon (GMFV) payment as decimal string",
        examples=["10000.00"],
        pattern=MONEY_PATTERN,
    )

    @field_validator("cash_price", "deposit", "balloon_amount")
    @classmethod
    def _within_price_range(cls, value: str) -> str:
        if Decimal(value) > MAX_CASH_PRICE:
            raise ValueError(f"must be <= {MAX_CASH_PRICE}")
        return value

    @field_validator("fees")
    @classmethod
    def _within_fees_range(cls, value: str) -> str:
        if Decimal(value) > MAX_FEES:
            raise ValueError(f"must be <= {MAX_FEES}")
        return value

    @field_validator("apr_percent")
    @classmethod
    def _within_apr_range(cls, value: str) -> str:
        if Decimal(value) > MAX_APR_PERCENT:
            raise ValueError(f"must be <= {MAX_APR_PERCENT}")
        return value

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "cash_price": "25000.00",
                "deposit": "5000.00",
                "fees": "0.00",
                "apr_percent": "6.9",
                "term_months": 60,
                "finance_type": "standard",
                "balloon_amount": "0",
            }
        }
    )


class ScheduleRowDTO(BaseModel):
    period: int = Field(description="1-based payment number", examples=[1])
    payment: str = Field(examples=["395.08"])
    interest: str = Field(examples=["115.00"])
    principal: str = Field(examples=["280.08"])
    balance_after: str = Field(examples=["19719.92"])


class FinancePlanResponseDTO(BaseModel):
    """Response with calculated finance plan and first-year schedule."""

    amount_financed: str = Field(
        description="cash_price - deposit + fees (never below zero)",
        examples=["20000.00"],
    )
    monthly_payment: str = Field(examples=["395.08"])
    total_monthly_paid: str = Field(examples=["23704.86"])
    total_amount_repayable: str = Field(
        description="deposit + fees + all monthly payments (+ balloon if PCP)",
        examples=["28704.86"],
    )
    total_cost_of_credit: str = Field(
        description="total_amount_repayable - cash_price",
        examples=["3704.86"],
    )
    schedule: list[ScheduleRowDTO] = Field(
        description="First 12 months (or the whole term if shorter)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount_financed": "20000.00",
                "monthly_payment": "395.08",
                "total_monthly_paid": "23704.86",
                "total_amount_repayable": "28704.86",
                "total_cost_of_credit": "3704.86",
                "schedule": [
                    {
                        "period": 1,
                        "payment": "395.08",
                        "interest": "115.00",
                        "principal": "280.08",
                        "balance_after": "19719.92",
                    }
                ],
            }
        }
    )
