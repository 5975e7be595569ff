"""Evaluation-related domain exceptions."""

from .base import DomainException


class EvaluationNotFoundException(DomainException):
    """Raised when an evaluation record cannot be found."""

    def __init__(self, evaluation_id: str):
        super().__init__(
            message=f"Evaluation not found: {evaluation_id}",
            code="EVALUATION_NOT_FOUND",
        )
        self.evaluation_id = evaluation_id


class InvalidEvaluationRequestException(DomainException):
    """Raised when an evaluation request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_EVALUATION_REQUEST",
        )
