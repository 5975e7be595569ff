"""Reference data schemas."""

from pydantic import BaseModel, Field


class BankSchema(BaseModel):
    """A supported payer bank."""

    id: str = Field(..., examples=["nacion"])
    name: str = Field(..., examples=["Banco Nación"])
    has_restrictions: bool = Field(
        ...,
        description="Requires a higher minimum income",
    )
    risk_tier: int = Field(..., ge=1, le=5)
    requires_account: bool = Field(
        ...,
        description="Requires a salary account number",
    )


class BankListResponseSchema(BaseModel):
    banks: list[BankSchema]


class ProvinceListResponseSchema(BaseModel):
    provinces: list[str]
