"""Evaluation API endpoints."""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from seap_gateway.application.dto import (
    EvaluationHistoryResponse,
    EvaluationRequest,
    EvaluationResponse,
)
from seap_gateway.application.services import EvaluationService
from seap_gateway.core.dependencies import get_evaluation_service
from seap_gateway.core.metrics import (
    record_evaluation,
    record_stage_rejection,
    track_evaluation_latency,
)
from seap_gateway.domain.entities import EvaluationResult, OperatorIdentity
from seap_gateway.presentation.schemas import (
    ErrorResponseSchema,
    EvaluationHistoryResponseSchema,
    EvaluationRequestSchema,
    EvaluationResponseSchema,
    EvaluationSummarySchema,
    HistoryClearedSchema,
    HistoryExportSchema,
    HistoryStatsSchema,
)
from seap_gateway.presentation.schemas.evaluation import (
    AmountBreakdownSchema,
    StageResultSchema,
)

evaluation_router = APIRouter(
    prefix="/evaluations",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)


def _to_response_schema(response: EvaluationResponse) -> EvaluationResponseSchema:
    return EvaluationResponseSchema(
        evaluation_id=response.evaluation_id,
        result=response.result,
        max_amount=response.max_amount,
        reason=response.reason,
        requires_manual_review=response.requires_manual_review,
        stages=[
            StageResultSchema(
                stage=s.stage,
                passed=s.passed,
                evaluated=s.evaluated,
                message=s.message,
                requires_manual_review=s.requires_manual_review,
                detail=s.detail,
            )
            for s in response.stages
        ],
        amount_breakdown=(
            AmountBreakdownSchema(**response.amount_breakdown)
            if response.amount_breakdown
            else None
        ),
        created_at=response.created_at,
    )


def _to_history_schema(response: EvaluationHistoryResponse) -> EvaluationHistoryResponseSchema:
    return EvaluationHistoryResponseSchema(
        evaluations=[
            EvaluationSummarySchema(
                evaluation_id=e.evaluation_id,
                created_at=e.created_at,
                applicant_name=e.applicant_name,
                national_id=e.national_id,
                payer_bank_id=e.payer_bank_id,
                result=e.result,
                max_amount=e.max_amount,
                reason=e.reason,
                operator_id=e.operator_id,
                operator_name=e.operator_name,
            )
            for e in response.evaluations
        ],
        count=len(response.evaluations),
    )


@evaluation_router.post(
    "",
    response_model=EvaluationResponseSchema,
    status_code=200,
    summary="Evaluate Applicant",
    description="""
    Run the eligibility pipeline for an applicant.

    The result is approved, rejected or pending (manual review). The
    response carries the audit trail with one entry per stage.
    """,
    responses={
        200: {"description": "Evaluation completed"},
        422: {"description": "Malformed request body"},
    },
)
async def create_evaluation(
    request: EvaluationRequestSchema,
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
) -> EvaluationResponseSchema:
    """
    Evaluate an applicant and record the outcome.
    """
    dto = EvaluationRequest(
        first_name=request.first_name,
        last_name=request.last_name,
        national_id=request.national_id,
        net_income=request.net_income,
        employment=request.employment,
        province=request.province,
        payer_bank_id=request.payer_bank_id,
        account_number=request.account_number,
        operator=OperatorIdentity(
            id=request.operator.id,
            name=request.operator.name,
            email=request.operator.email,
        ),
        deadline_seconds=request.deadline_seconds,
    )

    with track_evaluation_latency():
        response = await evaluation_service.evaluate(dto)

    # Record business metrics
    record_evaluation(response.result, response.max_amount)
    for stage in response.stages:
        if stage.evaluated and not stage.passed:
            record_stage_rejection(stage.stage, response.result)
            break

    return _to_response_schema(response)


@evaluation_router.get(
    "",
    response_model=EvaluationHistoryResponseSchema,
    summary="Search Evaluation History",
    description="""
    Retrieve stored evaluations matching every given filter.

    Results are ordered by date (newest first).
    """,
)
async def list_evaluations(
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
    result: Annotated[
        Optional[EvaluationResult],
        Query(description="Only evaluations with this result"),
    ] = None,
    operator_id: Annotated[
        Optional[int],
        Query(ge=1, description="Only evaluations by this operator"),
    ] = None,
    date_from: Annotated[
        Optional[datetime],
        Query(description="Only evaluations at or after this instant"),
    ] = None,
    date_to: Annotated[
        Optional[datetime],
        Query(description="Only evaluations at or before this instant"),
    ] = None,
    search: Annotated[
        Optional[str],
        Query(max_length=100, description="Match applicant name or national id"),
    ] = None,
    limit: Annotated[
        Optional[int],
        Query(ge=1, le=100, description="Maximum number of evaluations to return"),
    ] = None,
) -> EvaluationHistoryResponseSchema:
    response = await evaluation_service.get_history(
        result=result,
        operator_id=operator_id,
        date_from=date_from,
        date_to=date_to,
        search=search,
        limit=limit,
    )
    return _to_history_schema(response)


@evaluation_router.get(
    "/recent",
    response_model=EvaluationHistoryResponseSchema,
    summary="Recent Evaluations",
)
async def list_recent_evaluations(
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of evaluations to return"),
    ] = 5,
) -> EvaluationHistoryResponseSchema:
    response = await evaluation_service.get_recent(limit)
    return _to_history_schema(response)


@evaluation_router.get(
    "/stats",
    response_model=HistoryStatsSchema,
    summary="Evaluation Statistics",
    description="Totals per result, approved amounts and recent activity.",
)
async def get_evaluation_stats(
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
    operator_id: Annotated[
        Optional[int],
        Query(ge=1, description="Restrict statistics to one operator"),
    ] = None,
) -> HistoryStatsSchema:
    stats = await evaluation_service.get_stats(operator_id)
    return HistoryStatsSchema(**stats.to_dict())


@evaluation_router.get(
    "/export",
    response_model=HistoryExportSchema,
    summary="Export Evaluation History",
)
async def export_evaluations(
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
) -> HistoryExportSchema:
    export = await evaluation_service.export_history()
    return HistoryExportSchema(**export)


@evaluation_router.get(
    "/{evaluation_id}",
    response_model=EvaluationResponseSchema,
    summary="Get Evaluation",
    responses={
        200: {"description": "Evaluation retrieved successfully"},
        404: {"model": ErrorResponseSchema, "description": "Evaluation not found"},
    },
)
async def get_evaluation(
    evaluation_id: Annotated[
        UUID,
        Path(description="UUID of the evaluation to retrieve"),
    ],
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
) -> EvaluationResponseSchema:
    response = await evaluation_service.get_evaluation(evaluation_id)
    return _to_response_schema(response)


@evaluation_router.delete(
    "",
    response_model=HistoryClearedSchema,
    summary="Clear Evaluation History",
)
async def clear_evaluations(
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
) -> HistoryClearedSchema:
    removed = await evaluation_service.clear_history()
    return HistoryClearedSchema(removed=removed)
