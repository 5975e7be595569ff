"""Pydantic schemas for API request/response validation."""

from .evaluation import (
    AmountBreakdownSchema,
    EvaluationHistoryResponseSchema,
    EvaluationRequestSchema,
    EvaluationResponseSchema,
    EvaluationSummarySchema,
    HistoryClearedSchema,
    HistoryExportSchema,
    HistoryStatsSchema,
    OperatorSchema,
    StageResultSchema,
)
from .reference import BankListResponseSchema, BankSchema, ProvinceListResponseSchema
from .error import ErrorResponseSchema

__all__ = [
    "AmountBreakdownSchema",
    "EvaluationHistoryResponseSchema",
    "EvaluationRequestSchema",
    "EvaluationResponseSchema",
    "EvaluationSummarySchema",
    "HistoryClearedSchema",
    "HistoryExportSchema",
    "HistoryStatsSchema",
    "OperatorSchema",
    "StageResultSchema",
    "BankListResponseSchema",
    "BankSchema",
    "ProvinceListResponseSchema",
    "ErrorResponseSchema",
]
