"""
Shared fixtures for unit and integration tests.

Provides:
- Evaluation settings without artificial latency
- Reference tables and a pipeline factory
"""

from typing import Optional

import pytest

from seap_gateway.domain.interfaces import CreditBureauClient
from seap_gateway.infrastructure.repositories import (
    InMemoryDelinquencyRegistry,
    StaticBankDirectory,
)
from seap_gateway.service.evaluation import EvaluationPipeline, EvaluationSettings

from factories import MockCreditBureauClient, never_blocked_rng


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fast_settings() -> EvaluationSettings:
    """Default policy without the simulated external latency."""
    return EvaluationSettings(
        delinquency_delay_seconds=0,
        bank_delay_seconds=0,
    )


@pytest.fixture
def bank_directory() -> StaticBankDirectory:
    return StaticBankDirectory()


@pytest.fixture
def delinquency_registry() -> InMemoryDelinquencyRegistry:
    return InMemoryDelinquencyRegistry()


@pytest.fixture
def mock_bureau_client() -> MockCreditBureauClient:
    """Bureau client reporting a clean tier 1/2 history for everyone."""
    return MockCreditBureauClient()


@pytest.fixture
def make_pipeline(fast_settings, bank_directory, delinquency_registry):
    """Factory for pipelines sharing the reference tables."""

    def _make(
        bureau_client: CreditBureauClient,
        settings: Optional[EvaluationSettings] = None,
        rng_factory=never_blocked_rng,
    ) -> EvaluationPipeline:
        return EvaluationPipeline(
            bureau_client=bureau_client,
            delinquency_registry=delinquency_registry,
            bank_directory=bank_directory,
            settings=settings or fast_settings,
            rng_factory=rng_factory,
        )

    return _make
