"""Domain Entities - Core business objects."""

from .applicant import ApplicantProfile, EmploymentCategory
from .bank import BankProfile
from .bureau import BureauSummary, DebtRecord
from .delinquency import DelinquencyRecord
from .evaluation import (
    AmountBreakdown,
    CapApplication,
    EvaluationOutcome,
    EvaluationResult,
    NOT_EVALUATED_MESSAGE,
    StageName,
    StageResult,
)
from .history import EvaluationRecord, HistoryStats, OperatorIdentity

__all__ = [
    "ApplicantProfile",
    "EmploymentCategory",
    "BankProfile",
    "BureauSummary",
    "DebtRecord",
    "DelinquencyRecord",
    "AmountBreakdown",
    "CapApplication",
    "EvaluationOutcome",
    "EvaluationResult",
    "NOT_EVALUATED_MESSAGE",
    "StageName",
    "StageResult",
    "EvaluationRecord",
    "HistoryStats",
    "OperatorIdentity",
]
