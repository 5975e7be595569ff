"""Data transfer objects for loan evaluation operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from seap_gateway.domain.entities import (
    ApplicantProfile,
    EmploymentCategory,
    EvaluationRecord,
    OperatorIdentity,
)


@dataclass(frozen=True)
class EvaluationRequest:
    """Input data for requesting a loan evaluation."""

    first_name: str
    last_name: str
    national_id: str
    net_income: float
    employment: EmploymentCategory
    province: str
    payer_bank_id: str
    operator: OperatorIdentity
    account_number: Optional[str] = None
    deadline_seconds: Optional[float] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.first_name or not self.first_name.strip():
            errors.append("first_name is required")

        if not self.last_name or not self.last_name.strip():
            errors.append("last_name is required")

        if not self.national_id or not self.national_id.strip():
            errors.append("national_id is required")

        if self.net_income < 0:
            errors.append("net_income cannot be negative")

        if not self.payer_bank_id or not self.payer_bank_id.strip():
            errors.append("payer_bank_id is required")

        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            errors.append("deadline_seconds must be positive")

        return errors

    def to_profile(self) -> ApplicantProfile:
        return ApplicantProfile(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            national_id=self.national_id.strip(),
            net_income=self.net_income,
            employment=self.employment,
            province=self.province,
            payer_bank_id=self.payer_bank_id.strip(),
            account_number=self.account_number,
        )


@dataclass(frozen=True)
class StageResultDTO:
    """One audit trail entry included in evaluation responses."""

    stage: str
    passed: bool
    evaluated: bool
    message: str
    requires_manual_review: bool
    detail: Dict[str, Any]


@dataclass(frozen=True)
class EvaluationResponse:
    """Response data for a completed evaluation."""

    evaluation_id: str
    result: str
    max_amount: Optional[int]
    reason: Optional[str]
    requires_manual_review: bool
    stages: List[StageResultDTO]
    amount_breakdown: Optional[Dict[str, Any]]
    created_at: str

    @classmethod
    def from_record(cls, record: EvaluationRecord) -> "EvaluationResponse":
        outcome = record.outcome
        return cls(
            evaluation_id=str(record.id),
            result=outcome.result.value,
            max_amount=outcome.max_amount,
            reason=outcome.reason,
            requires_manual_review=outcome.requires_manual_review,
            stages=[
                StageResultDTO(
                    stage=s.stage.value,
                    passed=s.passed,
                    evaluated=s.evaluated,
                    message=s.message,
                    requires_manual_review=s.requires_manual_review,
                    detail=s.detail,
                )
                for s in outcome.stages
            ],
            amount_breakdown=(
                outcome.amount_breakdown.to_dict() if outcome.amount_breakdown else None
            ),
            created_at=record.created_at.isoformat(),
        )


@dataclass(frozen=True)
class EvaluationSummary:
    """Brief summary of an evaluation for history listings."""

    evaluation_id: str
    created_at: str
    applicant_name: str
    national_id: str
    payer_bank_id: str
    result: str
    max_amount: Optional[int]
    reason: Optional[str]
    operator_id: int
    operator_name: str

    @classmethod
    def from_record(cls, record: EvaluationRecord) -> "EvaluationSummary":
        return cls(
            evaluation_id=str(record.id),
            created_at=record.created_at.isoformat(),
            applicant_name=record.applicant.full_name,
            national_id=record.applicant.national_id,
            payer_bank_id=record.applicant.payer_bank_id,
            result=record.outcome.result.value,
            max_amount=record.outcome.max_amount,
            reason=record.outcome.reason,
            operator_id=record.operator.id,
            operator_name=record.operator.name,
        )


@dataclass(frozen=True)
class EvaluationHistoryResponse:
    """Response containing a filtered slice of the evaluation history."""

    evaluations: List[EvaluationSummary]

    @classmethod
    def from_records(cls, records: list) -> "EvaluationHistoryResponse":
        return cls(evaluations=[EvaluationSummary.from_record(r) for r in records])
