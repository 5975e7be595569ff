"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from seap_gateway.application.services import EvaluationService
from seap_gateway.domain.interfaces import (
    BankDirectory,
    CreditBureauClient,
    DelinquencyRegistry,
    EvaluationHistoryRepository,
)
from seap_gateway.infrastructure.clients import HttpCreditBureauClient
from seap_gateway.infrastructure.repositories import (
    InMemoryDelinquencyRegistry,
    InMemoryEvaluationHistoryRepository,
    StaticBankDirectory,
)
from seap_gateway.service.evaluation import EvaluationPipeline, EvaluationSettings
from seap_gateway.service.evaluation.settings import get_evaluation_settings


# Reference tables (read-only, shared by every request)
@lru_cache
def get_bank_directory() -> BankDirectory:
    """Get the process-wide bank directory."""
    return StaticBankDirectory()


@lru_cache
def get_delinquency_registry() -> DelinquencyRegistry:
    """Get the process-wide delinquency registry."""
    return InMemoryDelinquencyRegistry()


# History store (in-process)
@lru_cache
def get_history_repository() -> EvaluationHistoryRepository:
    """Get the process-wide evaluation history."""
    return InMemoryEvaluationHistoryRepository()


# External client dependencies
def get_bureau_client() -> CreditBureauClient:
    """Get a CreditBureauClient instance."""
    return HttpCreditBureauClient()


# Service dependencies
def get_pipeline(
    bureau_client: Annotated[CreditBureauClient, Depends(get_bureau_client)],
    delinquency_registry: Annotated[DelinquencyRegistry, Depends(get_delinquency_registry)],
    bank_directory: Annotated[BankDirectory, Depends(get_bank_directory)],
    settings: Annotated[EvaluationSettings, Depends(get_evaluation_settings)],
) -> EvaluationPipeline:
    """Get an EvaluationPipeline wired with its collaborators."""
    return EvaluationPipeline(
        bureau_client=bureau_client,
        delinquency_registry=delinquency_registry,
        bank_directory=bank_directory,
        settings=settings,
    )


def get_evaluation_service(
    pipeline: Annotated[EvaluationPipeline, Depends(get_pipeline)],
    history_repository: Annotated[EvaluationHistoryRepository, Depends(get_history_repository)],
) -> EvaluationService:
    """Get an EvaluationService instance with all dependencies."""
    return EvaluationService(
        pipeline=pipeline,
        history_repository=history_repository,
    )
