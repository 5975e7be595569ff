"""
Fixtures for integration tests.

Provides:
- Test client for the FastAPI app
- Mock credit bureau client
- A fresh in-process history store per test
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from seap_gateway.core.dependencies import get_bureau_client, get_history_repository
from seap_gateway.domain.exceptions import BureauHTTPException, BureauMaxRetriesExceededException
from seap_gateway.infrastructure.repositories import InMemoryEvaluationHistoryRepository
from seap_gateway.main import app
from seap_gateway.service.evaluation.settings import get_evaluation_settings

from factories import MockCreditBureauClient


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def history_repository() -> InMemoryEvaluationHistoryRepository:
    return InMemoryEvaluationHistoryRepository(capacity=100)


@pytest.fixture
def failing_bureau_client() -> MockCreditBureauClient:
    """Bureau client that has exhausted its retries."""
    return MockCreditBureauClient(
        error=BureauMaxRetriesExceededException(3, BureauHTTPException(503)),
    )


async def _client_with(bureau_client, history_repository, settings) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_bureau_client] = lambda: bureau_client
    app.dependency_overrides[get_history_repository] = lambda: history_repository
    app.dependency_overrides[get_evaluation_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    mock_bureau_client: MockCreditBureauClient,
    history_repository: InMemoryEvaluationHistoryRepository,
    fast_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Reports a clean bureau history for every applicant
    - Uses an empty history store
    - Skips the simulated external latency
    """
    async for ac in _client_with(mock_bureau_client, history_repository, fast_settings):
        yield ac


@pytest_asyncio.fixture
async def client_with_failing_bureau(
    failing_bureau_client: MockCreditBureauClient,
    history_repository: InMemoryEvaluationHistoryRepository,
    fast_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where the credit bureau is unavailable."""
    async for ac in _client_with(failing_bureau_client, history_repository, fast_settings):
        yield ac


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def operator() -> dict:
    return {"id": 1, "name": "Ana Gómez", "email": "ana.gomez@seap.example"}


@pytest.fixture
def approvable_request(operator) -> dict:
    """Public employee paid by a tier-1 bank, income 900,000."""
    return {
        "first_name": "Juan",
        "last_name": "Pérez",
        "national_id": "30123456",
        "net_income": 900000,
        "employment": "public",
        "province": "Córdoba",
        "payer_bank_id": "nacion",
        "operator": operator,
    }


@pytest.fixture
def low_income_request(approvable_request) -> dict:
    return {**approvable_request, "net_income": 300000}


@pytest.fixture
def delinquent_request(approvable_request) -> dict:
    """Applicant with an active credit in the delinquency registry."""
    return {
        **approvable_request,
        "national_id": "12345678",
        "net_income": 1200000,
        "employment": "private",
    }
