"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .identifier import (
    InvalidIdentifierException,
    InvalidIdentifierLength,
)
from .bank import BankNotFoundException
from .bureau import (
    BureauException,
    BureauTimeoutException,
    BureauHTTPException,
    BureauUnknownException,
    BureauMaxRetriesExceededException,
    BureauCancelledException,
)
from .evaluation import (
    EvaluationNotFoundException,
    InvalidEvaluationRequestException,
)

__all__ = [
    "DomainException",
    "InvalidIdentifierException",
    "InvalidIdentifierLength",
    "BankNotFoundException",
    "BureauException",
    "BureauTimeoutException",
    "BureauHTTPException",
    "BureauUnknownException",
    "BureauMaxRetriesExceededException",
    "BureauCancelledException",
    "EvaluationNotFoundException",
    "InvalidEvaluationRequestException",
]
