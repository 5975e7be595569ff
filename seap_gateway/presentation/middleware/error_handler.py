"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from seap_gateway.domain.exceptions import (
    DomainException,
    EvaluationNotFoundException,
    InvalidEvaluationRequestException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Evaluation
    failures themselves never reach here: the pipeline turns them into a
    rejected or pending result.
    """

    @app.exception_handler(EvaluationNotFoundException)
    async def evaluation_not_found_handler(
        request: Request,
        exc: EvaluationNotFoundException,
    ) -> JSONResponse:
        """Handle evaluation not found errors."""
        return JSONResponse(
            status_code=404,
            content={**exc.to_dict(), "request_id": get_request_id()},
        )

    @app.exception_handler(InvalidEvaluationRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidEvaluationRequestException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        logger.info(
            "invalid_evaluation_request",
            request_id=get_request_id(),
            message=exc.message,
        )
        return JSONResponse(
            status_code=400,
            content={**exc.to_dict(), "request_id": get_request_id()},
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return JSONResponse(
            status_code=400,
            content={**exc.to_dict(), "request_id": get_request_id()},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
