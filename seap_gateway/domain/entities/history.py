"""History entities: what the audit store keeps for each evaluation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from .applicant import ApplicantProfile
from .evaluation import EvaluationOutcome


@dataclass(frozen=True)
class OperatorIdentity:
    """The operator (sales agent) who requested the evaluation."""

    id: int
    name: str
    email: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class EvaluationRecord:
    """A completed evaluation, stamped with operator and time."""

    applicant: ApplicantProfile
    operator: OperatorIdentity
    outcome: EvaluationOutcome
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def max_amount(self) -> Optional[int]:
        return self.outcome.max_amount

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": str(self.id),
            "created_at": self.created_at.isoformat(),
            "applicant": self.applicant.to_dict(),
            "operator": self.operator.to_dict(),
            "result": self.outcome.result.value,
            "max_amount": self.outcome.max_amount,
            "reason": self.outcome.reason,
            "stages": [stage.to_dict() for stage in self.outcome.stages],
        }


@dataclass(frozen=True)
class HistoryStats:
    """Aggregate statistics over the evaluation history."""

    total: int
    approved: int
    rejected: int
    pending: int
    average_amount: float
    total_amount: int
    approval_rate: float
    today: int
    last_7_days: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "approved": self.approved,
            "rejected": self.rejected,
            "pending": self.pending,
            "average_amount": round(self.average_amount, 2),
            "total_amount": self.total_amount,
            "approval_rate": round(self.approval_rate, 2),
            "today": self.today,
            "last_7_days": self.last_7_days,
        }
