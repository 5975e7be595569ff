"""
Unit tests for the rule stages.

These tests verify:
1. Income threshold
2. Delinquency registry lookups
3. Bureau classification, identifier errors and technical failures
4. Payer bank checks, in order
"""

import random

import pytest

from seap_gateway.domain.entities import EmploymentCategory, StageName
from seap_gateway.domain.exceptions import (
    BureauHTTPException,
    BureauMaxRetriesExceededException,
)
from seap_gateway.service.evaluation import EvaluationSettings
from seap_gateway.service.evaluation.stages import (
    check_bank,
    check_bureau,
    check_delinquency,
    check_income,
)

from factories import MockCreditBureauClient, make_applicant, make_summary


class FixedRng(random.Random):
    """Random source whose draws always return the same value."""

    def __init__(self, value: float):
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


NEVER = FixedRng(0.99)
ALWAYS = FixedRng(0.0)


# =============================================================================
# Income Stage
# =============================================================================

class TestIncomeStage:

    def test_below_minimum_rejected(self, fast_settings):
        result = check_income(make_applicant(net_income=499_999), fast_settings)

        assert result.stage == StageName.INCOME
        assert result.passed is False
        assert "Minimum required: $500,000" in result.message

    def test_exact_minimum_passes(self, fast_settings):
        assert check_income(make_applicant(net_income=500_000), fast_settings).passed is True

    def test_custom_minimum(self):
        settings = EvaluationSettings(minimum_income=1_000)

        assert check_income(make_applicant(net_income=1_000), settings).passed is True


# =============================================================================
# Delinquency Stage
# =============================================================================

class TestDelinquencyStage:

    def test_active_debt_rejected(self, delinquency_registry):
        result = check_delinquency(make_applicant(national_id="12345678"), delinquency_registry)

        assert result.passed is False
        assert result.detail["outstanding_amount"] == 50_000

    def test_inactive_record_passes(self, delinquency_registry):
        result = check_delinquency(make_applicant(national_id="87654321"), delinquency_registry)

        assert result.passed is True

    def test_unknown_applicant_passes(self, delinquency_registry):
        result = check_delinquency(make_applicant(national_id="30123456"), delinquency_registry)

        assert result.passed is True
        assert result.detail["outstanding_amount"] == 0


# =============================================================================
# Bureau Stage
# =============================================================================

class TestBureauStage:

    @pytest.mark.asyncio
    async def test_clean_history_passes(self, fast_settings):
        client = MockCreditBureauClient(default_tiers=[1, 1, 2])

        result = await check_bureau(make_applicant(), client, fast_settings)

        assert result.passed is True
        assert result.detail["tax_id"] == "20301234563"
        assert result.detail["problematic_pct"] == 0.0
        assert client.calls == ["20301234563"]

    @pytest.mark.asyncio
    async def test_problematic_share_at_threshold_rejected(self, fast_settings):
        """2 of 5 entities in tiers 3-5 is exactly 40%."""
        client = MockCreditBureauClient(default_tiers=[1, 1, 1, 3, 4])

        result = await check_bureau(make_applicant(), client, fast_settings)

        assert result.passed is False
        assert result.requires_manual_review is False
        assert result.detail["problematic_pct"] == 40.0

    @pytest.mark.asyncio
    async def test_problematic_share_below_threshold_passes(self, fast_settings):
        client = MockCreditBureauClient(default_tiers=[1, 1, 2, 3])

        result = await check_bureau(make_applicant(), client, fast_settings)

        assert result.passed is True
        assert result.detail["problematic_pct"] == 25.0

    @pytest.mark.asyncio
    async def test_tier5_rejected_by_default(self, fast_settings):
        client = MockCreditBureauClient(default_tiers=[1, 1, 1, 1, 5])

        result = await check_bureau(make_applicant(), client, fast_settings)

        assert result.passed is False
        assert result.detail["disqualified"] is True
        assert result.detail["max_amount_cap"] == 100_000

    @pytest.mark.asyncio
    async def test_tier5_passes_under_cap_policy(self):
        settings = EvaluationSettings(disqualified_policy="cap")
        client = MockCreditBureauClient(default_tiers=[1, 1, 1, 1, 5])

        result = await check_bureau(make_applicant(), client, settings)

        assert result.passed is True
        assert result.detail["disqualified"] is True

    @pytest.mark.asyncio
    async def test_no_reporting_entities_passes(self, fast_settings):
        client = MockCreditBureauClient(default_tiers=[])

        result = await check_bureau(make_applicant(), client, fast_settings)

        assert result.passed is True
        assert result.detail["total_entities"] == 0

    @pytest.mark.asyncio
    async def test_remainder_one_identifier_is_queried(self, fast_settings):
        """A weighted sum with remainder 1 still yields check digit 0."""
        client = MockCreditBureauClient()

        result = await check_bureau(make_applicant(national_id="12345676"), client, fast_settings)

        assert result.passed is True
        assert client.calls == ["20123456760"]

    @pytest.mark.asyncio
    async def test_short_identifier_rejected(self, fast_settings):
        """Malformed identifiers are a data error, not a bureau outage."""
        client = MockCreditBureauClient()

        result = await check_bureau(make_applicant(national_id="123"), client, fast_settings)

        assert result.passed is False
        assert result.requires_manual_review is False
        assert client.calls == []
        assert result.detail["error"] == "INVALID_IDENTIFIER_LENGTH"

    @pytest.mark.asyncio
    async def test_technical_failure_requires_manual_review(self, fast_settings):
        error = BureauMaxRetriesExceededException(3, BureauHTTPException(503))
        client = MockCreditBureauClient(error=error)

        result = await check_bureau(make_applicant(), client, fast_settings)

        assert result.passed is False
        assert result.requires_manual_review is True
        assert result.detail["error"] == "MAX_RETRIES_EXCEEDED"
        assert result.detail["last_error"] == "HTTP_ERROR_503"

    @pytest.mark.asyncio
    async def test_accepts_tax_id_directly(self, fast_settings):
        summary = make_summary(tax_id="20876543215", tiers=[1])
        client = MockCreditBureauClient(summaries={"20876543215": summary})

        result = await check_bureau(make_applicant(national_id="20876543215"), client, fast_settings)

        assert result.passed is True
        assert result.detail["summary"]["tax_id"] == "20876543215"


# =============================================================================
# Bank Stage
# =============================================================================

class TestBankStage:

    def test_unknown_bank_rejected(self, bank_directory, fast_settings):
        result = check_bank(make_applicant(payer_bank_id="nope"), bank_directory, NEVER, fast_settings)

        assert result.passed is False
        assert result.detail == {"bank_id": "nope", "error": "BANK_NOT_FOUND"}

    def test_eligible_bank_passes(self, bank_directory, fast_settings):
        result = check_bank(make_applicant(payer_bank_id="nacion"), bank_directory, NEVER, fast_settings)

        assert result.passed is True
        assert result.detail["bank"]["risk_tier"] == 1

    def test_account_bank_rejects_private_sector(self, bank_directory, fast_settings):
        applicant = make_applicant(
            payer_bank_id="macro",
            employment=EmploymentCategory.PRIVATE,
            net_income=900_000,
            account_number="123",
        )

        result = check_bank(applicant, bank_directory, NEVER, fast_settings)

        assert result.passed is False
        assert "private-sector" in result.message

    def test_restricted_bank_requires_income_above_threshold(self, bank_directory, fast_settings):
        applicant = make_applicant(payer_bank_id="bbva", net_income=650_000)

        result = check_bank(applicant, bank_directory, NEVER, fast_settings)

        assert result.passed is False
        assert result.detail["required_income"] == 650_000

    def test_restricted_bank_income_above_threshold_passes(self, bank_directory, fast_settings):
        applicant = make_applicant(payer_bank_id="bbva", net_income=650_001)

        assert check_bank(applicant, bank_directory, NEVER, fast_settings).passed is True

    def test_high_risk_bank_rejected(self, bank_directory):
        settings = EvaluationSettings(bank_reject_risk_tier=3)
        applicant = make_applicant(payer_bank_id="bbva", net_income=900_000)

        result = check_bank(applicant, bank_directory, NEVER, settings)

        assert result.passed is False
        assert "risk tier 3" in result.message

    def test_missing_account_number_rejected(self, bank_directory, fast_settings):
        applicant = make_applicant(payer_bank_id="macro", net_income=900_000)

        result = check_bank(applicant, bank_directory, NEVER, fast_settings)

        assert result.passed is False
        assert "account number" in result.message

    def test_blocked_account_rejected(self, bank_directory, fast_settings):
        applicant = make_applicant(payer_bank_id="macro", net_income=900_000, account_number="123")

        result = check_bank(applicant, bank_directory, ALWAYS, fast_settings)

        assert result.passed is False
        assert result.detail["account_blocked"] is True

    def test_blocked_draw_only_for_account_banks(self, bank_directory, fast_settings):
        result = check_bank(make_applicant(payer_bank_id="nacion"), bank_directory, ALWAYS, fast_settings)

        assert result.passed is True

    def test_account_bank_with_account_passes(self, bank_directory, fast_settings):
        applicant = make_applicant(payer_bank_id="macro", net_income=900_000, account_number="123")

        assert check_bank(applicant, bank_directory, NEVER, fast_settings).passed is True
