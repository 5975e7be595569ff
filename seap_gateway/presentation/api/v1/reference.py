"""Reference data endpoints used to populate operator forms."""

from typing import Annotated

from fastapi import APIRouter, Depends

from seap_gateway.core.dependencies import get_bank_directory
from seap_gateway.domain.interfaces import BankDirectory
from seap_gateway.infrastructure.repositories import PROVINCES
from seap_gateway.presentation.schemas import (
    BankListResponseSchema,
    BankSchema,
    ProvinceListResponseSchema,
)

reference_router = APIRouter(prefix="/reference")


@reference_router.get(
    "/banks",
    response_model=BankListResponseSchema,
    summary="List Payer Banks",
)
async def list_banks(
    bank_directory: Annotated[BankDirectory, Depends(get_bank_directory)],
) -> BankListResponseSchema:
    return BankListResponseSchema(
        banks=[BankSchema(**bank.to_dict()) for bank in bank_directory.list()]
    )


@reference_router.get(
    "/provinces",
    response_model=ProvinceListResponseSchema,
    summary="List Provinces",
)
async def list_provinces() -> ProvinceListResponseSchema:
    return ProvinceListResponseSchema(provinces=list(PROVINCES))
