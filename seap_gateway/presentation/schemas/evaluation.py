"""Evaluation-related Pydantic schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seap_gateway.domain.entities import EmploymentCategory
from seap_gateway.infrastructure.repositories import PROVINCES


class OperatorSchema(BaseModel):
    """The operator submitting the evaluation."""

    id: int = Field(..., ge=1, description="Operator identifier", examples=[1])
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Operator display name",
        examples=["Ana Gómez"],
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Operator email",
        examples=["ana.gomez@seap.example"],
    )


class EvaluationRequestSchema(BaseModel):
    """Schema for POST /v1/evaluations request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "first_name": "Juan",
                    "last_name": "Pérez",
                    "national_id": "30123456",
                    "net_income": 900000,
                    "employment": "public",
                    "province": "Córdoba",
                    "payer_bank_id": "nacion",
                    "account_number": None,
                    "operator": {
                        "id": 1,
                        "name": "Ana Gómez",
                        "email": "ana.gomez@seap.example",
                    },
                }
            ]
        }
    )

    first_name: str = Field(..., min_length=1, max_length=100, examples=["Juan"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Pérez"])
    national_id: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="National identity document number (7-8 digits)",
        examples=["30123456"],
    )
    net_income: float = Field(
        ...,
        ge=0,
        description="Net monthly income",
        examples=[900000],
    )
    employment: EmploymentCategory = Field(
        ...,
        description="Employment category",
        examples=["public"],
    )
    province: str = Field(..., description="Province of residence", examples=["Córdoba"])
    payer_bank_id: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Identifier of the bank paying the applicant's salary",
        examples=["nacion"],
    )
    account_number: Optional[str] = Field(
        None,
        max_length=50,
        description="Salary account number, required by some banks",
    )
    operator: OperatorSchema
    deadline_seconds: Optional[float] = Field(
        None,
        gt=0,
        description="Abort the evaluation after this many seconds",
    )

    @field_validator("first_name", "last_name", "national_id", "payer_bank_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure required text fields are not just whitespace."""
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v.strip()

    @field_validator("province")
    @classmethod
    def validate_province(cls, v: str) -> str:
        """Only provinces where the product is offered are accepted."""
        if v not in PROVINCES:
            raise ValueError(f"unsupported province: {v}")
        return v


class StageResultSchema(BaseModel):
    """One entry of the evaluation audit trail."""

    stage: str = Field(..., examples=["bureau"])
    passed: bool
    evaluated: bool = Field(
        ...,
        description="False when the pipeline stopped before reaching this stage",
    )
    message: str
    requires_manual_review: bool
    detail: dict[str, Any]


class CapApplicationSchema(BaseModel):
    rule: str = Field(..., examples=["employment_category"])
    limit: int
    triggered: bool


class AmountBreakdownSchema(BaseModel):
    """How the maximum amount was derived."""

    base_amount: int = Field(..., ge=0, examples=[150000])
    caps: list[CapApplicationSchema]
    amount: int = Field(..., ge=0, examples=[150000])


class EvaluationResponseSchema(BaseModel):
    """Schema for a full evaluation, as returned by create and get."""

    evaluation_id: str = Field(..., description="UUID of the evaluation record")
    result: str = Field(..., examples=["approved"])
    max_amount: Optional[int] = Field(
        None,
        ge=0,
        description="Maximum approvable amount (only when approved)",
        examples=[150000],
    )
    reason: Optional[str] = Field(
        None,
        description="Why the evaluation was rejected or left pending",
    )
    requires_manual_review: bool
    stages: list[StageResultSchema] = Field(
        ...,
        description="Audit trail in pipeline order",
    )
    amount_breakdown: Optional[AmountBreakdownSchema] = None
    created_at: str = Field(..., description="ISO 8601 timestamp of the evaluation")


class EvaluationSummarySchema(BaseModel):
    """Schema for an evaluation in history listings."""

    evaluation_id: str
    created_at: str
    applicant_name: str
    national_id: str
    payer_bank_id: str
    result: str
    max_amount: Optional[int] = None
    reason: Optional[str] = None
    operator_id: int
    operator_name: str


class EvaluationHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/evaluations and /v1/evaluations/recent."""

    evaluations: list[EvaluationSummarySchema] = Field(
        ...,
        description="Evaluations, newest first",
    )
    count: int = Field(..., ge=0)


class HistoryStatsSchema(BaseModel):
    """Schema for GET /v1/evaluations/stats."""

    total: int = Field(..., ge=0)
    approved: int = Field(..., ge=0)
    rejected: int = Field(..., ge=0)
    pending: int = Field(..., ge=0)
    average_amount: float = Field(..., ge=0, description="Average approved amount")
    total_amount: int = Field(..., ge=0, description="Sum of approved amounts")
    approval_rate: float = Field(..., ge=0, le=100, description="Percentage approved")
    today: int = Field(..., ge=0)
    last_7_days: int = Field(..., ge=0)


class HistoryExportSchema(BaseModel):
    """Schema for GET /v1/evaluations/export."""

    evaluations: list[dict[str, Any]]
    export_date: str
    version: str = Field(..., examples=["1.0"])


class HistoryClearedSchema(BaseModel):
    removed: int = Field(..., ge=0, description="Number of records deleted")
