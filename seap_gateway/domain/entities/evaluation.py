"""Evaluation entities: stage verdicts, amount breakdown and final outcome."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class EvaluationResult(str, Enum):
    """Final tri-state result of an evaluation."""
    APPROVED = "approved"
    REJECTED = "rejected"
    PENDING = "pending"


class StageName(str, Enum):
    """Pipeline stages recorded in the audit trail, in execution order."""
    INCOME = "income"
    DELINQUENCY = "delinquency"
    BUREAU = "bureau"
    BANK = "bank"


NOT_EVALUATED_MESSAGE = "Not evaluated"


@dataclass(frozen=True)
class StageResult:
    """
    Uniform verdict produced by every stage.

    `detail` is always a mapping (possibly empty) so the audit trail stays
    complete even when the pipeline short-circuits.
    """

    stage: StageName
    passed: bool
    message: str
    detail: Dict[str, Any] = field(default_factory=dict)
    requires_manual_review: bool = False
    evaluated: bool = True

    @classmethod
    def not_evaluated(cls, stage: StageName) -> "StageResult":
        """Canonical result for a stage the pipeline never reached."""
        return cls(
            stage=stage,
            passed=False,
            message=NOT_EVALUATED_MESSAGE,
            detail={},
            evaluated=False,
        )

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.value,
            "passed": self.passed,
            "message": self.message,
            "detail": self.detail,
            "requires_manual_review": self.requires_manual_review,
            "evaluated": self.evaluated,
        }


@dataclass(frozen=True)
class CapApplication:
    """One named cap rule as applied by the amount calculator."""

    rule: str
    limit: int
    triggered: bool

    def to_dict(self) -> dict:
        return {"rule": self.rule, "limit": self.limit, "triggered": self.triggered}


@dataclass(frozen=True)
class AmountBreakdown:
    """Explains how the maximum amount was derived."""

    base_amount: int
    caps: Tuple[CapApplication, ...]
    amount: int

    @property
    def triggered_caps(self) -> Tuple[CapApplication, ...]:
        return tuple(cap for cap in self.caps if cap.triggered)

    def to_dict(self) -> dict:
        return {
            "base_amount": self.base_amount,
            "caps": [cap.to_dict() for cap in self.caps],
            "amount": self.amount,
        }


@dataclass(frozen=True)
class EvaluationOutcome:
    """
    The final artifact of one evaluation.

    Attributes:
        result: Approved, rejected or pending
        stages: Audit trail with one entry per stage, in pipeline order
        max_amount: Maximum approvable amount (only when approved)
        reason: Why the applicant was rejected or left pending
        amount_breakdown: Cap rules applied when the amount stage was reached
    """

    result: EvaluationResult
    stages: Tuple[StageResult, ...]
    max_amount: Optional[int] = None
    reason: Optional[str] = None
    amount_breakdown: Optional[AmountBreakdown] = None

    @property
    def approved(self) -> bool:
        return self.result == EvaluationResult.APPROVED

    @property
    def requires_manual_review(self) -> bool:
        return any(stage.requires_manual_review for stage in self.stages)

    def stage(self, name: StageName) -> StageResult:
        """Return the audit entry for a given stage."""
        for result in self.stages:
            if result.stage == name:
                return result
        raise KeyError(name)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "result": self.result.value,
            "max_amount": self.max_amount,
            "reason": self.reason,
            "requires_manual_review": self.requires_manual_review,
            "stages": [stage.to_dict() for stage in self.stages],
            "amount_breakdown": (
                self.amount_breakdown.to_dict() if self.amount_breakdown else None
            ),
        }
