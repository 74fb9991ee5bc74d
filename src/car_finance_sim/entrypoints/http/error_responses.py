"""REST API error response models.

Documents the error body every handler in exception_handlers.py returns.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error detail."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "balloon_amount",
                "message": "balloon_amount must be < cash_price",
                "code": "INVALID_VALUE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response.

    Examples:
        Simple error:
            {"detail": "ScenarioNode with identifier '9' not found", "code": "NOT_FOUND"}

        Validation error:
            {
                "detail": "cash_price must be > 0",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "cash_price", "message": "cash_price must be > 0", "code": "INVALID_VALUE"}
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "ScenarioNode with identifier '9' not found", "code": "NOT_FOUND"},
                {
                    "detail": "cash_price must be > 0",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "cash_price",
                            "message": "cash_price must be > 0",
                            "code": "INVALID_VALUE",
                        }
                    ],
                },
            ]
        }
    )
