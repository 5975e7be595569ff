"""Repository and reference table implementations."""

from .bank_directory import StaticBankDirectory
from .delinquency_registry import InMemoryDelinquencyRegistry
from .history_repository import InMemoryEvaluationHistoryRepository
from .reference_data import DEFAULT_BANKS, DEFAULT_DELINQUENT_PROFILES, PROVINCES

__all__ = [
    "StaticBankDirectory",
    "InMemoryDelinquencyRegistry",
    "InMemoryEvaluationHistoryRepository",
    "DEFAULT_BANKS",
    "DEFAULT_DELINQUENT_PROFILES",
    "PROVINCES",
]
