"""Pydantic schema for API error responses."""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["GENERATION_REFUSED"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["bank_account_id is required"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
    details: Optional[list[str]] = Field(
        None,
        description="Every failed rule, for validation refusals",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "GENERATION_REFUSED",
                    "message": "bank_account_id is required; chart_of_accounts_id is required",
                    "request_id": "abc123",
                    "details": [
                        "bank_account_id is required",
                        "chart_of_accounts_id is required",
                    ],
                }
            ]
        }
    }


class LedgerWriteErrorSchema(ErrorResponseSchema):
    """Error returned when a ledger write stopped part way."""

    parent_id: Optional[str] = Field(
        None,
        description="Movement created before the failure, if any",
    )
    created_ids: list[str] = Field(
        default_factory=list,
        description="Child records created before the failure",
    )
