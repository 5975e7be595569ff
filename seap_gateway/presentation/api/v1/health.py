"""Liveness check reporting which bureau backend evaluations will hit."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from seap_gateway import __version__
from seap_gateway.core.config import resolve_bureau_token
from seap_gateway.core.dependencies import get_history_repository
from seap_gateway.domain.interfaces import EvaluationHistoryRepository

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    version: str
    bureau_mode: Literal["live", "simulated"]
    stored_evaluations: int


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description=(
        "Reports whether bureau queries go to the live registry or the "
        "simulator, and how many evaluations the in-process history holds."
    ),
)
async def health_check(
    history: Annotated[EvaluationHistoryRepository, Depends(get_history_repository)],
) -> HealthResponse:
    # The token is re-read so rotating it flips the mode without a restart
    bureau_mode = "live" if resolve_bureau_token() else "simulated"
    stats = await history.stats()
    return HealthResponse(
        version=__version__,
        bureau_mode=bureau_mode,
        stored_evaluations=stats.total,
    )
