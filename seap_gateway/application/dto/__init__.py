"""Data Transfer Objects for application layer."""

from .evaluation import (
    EvaluationRequest,
    EvaluationResponse,
    EvaluationSummary,
    EvaluationHistoryResponse,
    StageResultDTO,
)

__all__ = [
    "EvaluationRequest",
    "EvaluationResponse",
    "EvaluationSummary",
    "EvaluationHistoryResponse",
    "StageResultDTO",
]
