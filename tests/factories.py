"""
Test data factories and mock clients shared by unit and integration tests.

Provides:
- Mock credit bureau client with scripted summaries or failures
- Applicant and bureau summary factories
"""

import asyncio
import random
from typing import Dict, List, Optional

from seap_gateway.domain.entities import (
    ApplicantProfile,
    BureauSummary,
    DebtRecord,
    EmploymentCategory,
)
from seap_gateway.domain.exceptions import BureauCancelledException, BureauException
from seap_gateway.domain.interfaces import CreditBureauClient


# =============================================================================
# Helpers
# =============================================================================

def make_applicant(
    national_id: str = "30123456",
    net_income: float = 900_000,
    employment: EmploymentCategory = EmploymentCategory.PUBLIC,
    payer_bank_id: str = "nacion",
    account_number: Optional[str] = None,
    province: str = "Córdoba",
) -> ApplicantProfile:
    """Build an applicant with sensible defaults."""
    return ApplicantProfile(
        first_name="Juan",
        last_name="Pérez",
        national_id=national_id,
        net_income=net_income,
        employment=employment,
        province=province,
        payer_bank_id=payer_bank_id,
        account_number=account_number,
    )


def make_summary(tax_id: str = "20301234563", tiers: List[int] = None, amount: float = 10_000) -> BureauSummary:
    """Build a bureau summary with one debt per given tier."""
    tiers = [1, 2] if tiers is None else tiers
    debts = [
        DebtRecord(entity=f"Entity {i + 1}", tier=tier, amount=amount)
        for i, tier in enumerate(tiers)
    ]
    return BureauSummary.from_debts(tax_id=tax_id, debts=debts)


def never_blocked_rng(profile: ApplicantProfile) -> random.Random:
    """RNG factory whose draws never fall under any probability."""

    class _Rng(random.Random):
        def random(self) -> float:
            return 0.999999

    return _Rng()


# =============================================================================
# Mock Clients
# =============================================================================

class MockCreditBureauClient(CreditBureauClient):
    """Mock bureau client returning scripted summaries by tax id."""

    def __init__(
        self,
        summaries: Optional[Dict[str, BureauSummary]] = None,
        default_tiers: Optional[List[int]] = None,
        error: Optional[BureauException] = None,
        hang: bool = False,
    ):
        self.summaries = summaries or {}
        self.default_tiers = [1, 2] if default_tiers is None else default_tiers
        self.error = error
        self.hang = hang
        self.calls: List[str] = []

    async def query(self, tax_id: str, cancel: Optional[asyncio.Event] = None) -> BureauSummary:
        self.calls.append(tax_id)

        if self.hang:
            # Waits until the caller cancels; the real client raises then
            if cancel is None:
                await asyncio.sleep(3600)
            await cancel.wait()
            raise BureauCancelledException()

        if self.error is not None:
            raise self.error

        if tax_id in self.summaries:
            return self.summaries[tax_id]
        return make_summary(tax_id=tax_id, tiers=self.default_tiers)

