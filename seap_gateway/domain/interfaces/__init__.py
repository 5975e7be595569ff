"""Domain Interfaces - Abstract contracts for external collaborators."""

from .clients import CreditBureauClient
from .repositories import (
    BankDirectory,
    DelinquencyRegistry,
    EvaluationHistoryRepository,
)

__all__ = [
    "CreditBureauClient",
    "BankDirectory",
    "DelinquencyRegistry",
    "EvaluationHistoryRepository",
]
