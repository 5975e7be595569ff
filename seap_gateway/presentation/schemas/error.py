"""Body returned by every non-2xx response raised from a domain error."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """
    Domain error payload.

    `error` is the stable machine code of the raised exception; `message`
    is meant for the operator console and may change between releases.
    """
    error: str = Field(
        ...,
        description="Machine-readable code of the domain error",
        examples=["EVALUATION_NOT_FOUND", "INVALID_EVALUATION_REQUEST", "INTERNAL_ERROR"],
    )
    message: str = Field(
        ...,
        description="Explanation suitable for showing to the operator",
        examples=["Evaluation not found: 3f2b9c1e-8d4a-4e57-9b0f-6a1d2c3e4f50"],
    )
    request_id: str | None = Field(
        None,
        description="Value of the X-Request-ID header for this call, for log correlation",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "EVALUATION_NOT_FOUND",
                    "message": "Evaluation not found: 3f2b9c1e-8d4a-4e57-9b0f-6a1d2c3e4f50",
                    "request_id": "c0a8012e-7f3d-4b1a-9e62-51d4a9b0e7c3",
                },
                {
                    "error": "INVALID_EVALUATION_REQUEST",
                    "message": "national_id is required; payer_bank_id is required",
                    "request_id": "operator-console-42",
                },
            ]
        }
    }
