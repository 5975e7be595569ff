"""
Unit tests for the amount calculator.

These tests verify:
1. Income bracket base amounts
2. Each cap rule in isolation
3. The breakdown records every rule, triggered or not
"""

import pytest

from seap_gateway.domain.entities import EmploymentCategory, StageName, StageResult
from seap_gateway.service.evaluation import EvaluationSettings
from seap_gateway.service.evaluation.amount import (
    CAP_RULES,
    base_amount_for_income,
    calculate_amount,
    compute_max_amount,
)

from factories import make_applicant


def bureau_result(
    problematic_pct: float = 0.0,
    total_amount: float = 0.0,
    disqualified: bool = False,
) -> StageResult:
    return StageResult(
        stage=StageName.BUREAU,
        passed=True,
        message="ok",
        detail={
            "problematic_pct": problematic_pct,
            "total_amount": total_amount,
            "disqualified": disqualified,
        },
    )


def bank_result(risk_tier: int = 1) -> StageResult:
    return StageResult(
        stage=StageName.BANK,
        passed=True,
        message="ok",
        detail={"bank": {"id": "test", "risk_tier": risk_tier}},
    )


class TestBaseAmount:
    """Tests for the income bracket lookup."""

    @pytest.mark.parametrize(
        "income,expected",
        [
            (1_500_000, 200_000),
            (1_000_000, 200_000),
            (999_999, 150_000),
            (800_000, 150_000),
            (799_999, 100_000),
            (500_000, 100_000),
            (499_999, 0),
        ],
    )
    def test_brackets(self, fast_settings, income, expected):
        assert base_amount_for_income(income, fast_settings) == expected

    def test_brackets_sorted_regardless_of_configured_order(self):
        settings = EvaluationSettings(income_brackets_json="[[100,1],[300,3],[200,2]]")

        assert base_amount_for_income(250, settings) == 2
        assert base_amount_for_income(1_000, settings) == 3

    def test_invalid_brackets_rejected(self):
        with pytest.raises(ValueError):
            EvaluationSettings(income_brackets_json="[[100]]")


class TestCapRules:
    """Tests for individual cap rules."""

    def test_public_employee_at_tier1_bank(self, fast_settings):
        """900k income, public sector, tier-1 bank, clean bureau: 150,000."""
        applicant = make_applicant(net_income=900_000, employment=EmploymentCategory.PUBLIC)

        amount = compute_max_amount(applicant, bureau_result(), bank_result(1), fast_settings)

        assert amount == 150_000

    def test_top_bracket_public(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000, employment=EmploymentCategory.PUBLIC)

        assert compute_max_amount(applicant, bureau_result(), bank_result(1), fast_settings) == 200_000

    def test_private_sector_cap(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000, employment=EmploymentCategory.PRIVATE)

        assert compute_max_amount(applicant, bureau_result(), bank_result(1), fast_settings) == 150_000

    def test_retiree_cap(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000, employment=EmploymentCategory.RETIREE)

        assert compute_max_amount(applicant, bureau_result(), bank_result(1), fast_settings) == 200_000

    def test_unset_employment_does_not_qualify(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000, employment=EmploymentCategory.UNSET)

        assert compute_max_amount(applicant, bureau_result(), bank_result(1), fast_settings) == 0

    def test_tier3_bank_cap(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000)

        assert compute_max_amount(applicant, bureau_result(), bank_result(3), fast_settings) == 150_000

    def test_problematic_share_above_cap_threshold(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000)

        amount = compute_max_amount(
            applicant, bureau_result(problematic_pct=25.0), bank_result(1), fast_settings
        )

        assert amount == 100_000

    def test_problematic_share_at_cap_threshold_not_capped(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000)

        amount = compute_max_amount(
            applicant, bureau_result(problematic_pct=20.0), bank_result(1), fast_settings
        )

        assert amount == 200_000

    def test_outstanding_amount_cap(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000)

        amount = compute_max_amount(
            applicant, bureau_result(total_amount=100_001), bank_result(1), fast_settings
        )

        assert amount == 100_000

    def test_disqualified_cap(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000)

        amount = compute_max_amount(
            applicant, bureau_result(disqualified=True), bank_result(1), fast_settings
        )

        assert amount == 100_000

    def test_below_every_bracket(self, fast_settings):
        applicant = make_applicant(net_income=400_000)

        assert compute_max_amount(applicant, bureau_result(), bank_result(1), fast_settings) == 0


class TestBreakdown:
    """Tests for the explanation attached to the amount."""

    def test_every_rule_recorded_in_order(self, fast_settings):
        applicant = make_applicant(net_income=900_000)

        breakdown = calculate_amount(applicant, bureau_result(), bank_result(1), fast_settings)

        assert [cap.rule for cap in breakdown.caps] == [rule.name for rule in CAP_RULES]
        assert breakdown.base_amount == 150_000
        assert breakdown.amount == 150_000

    def test_triggered_caps(self, fast_settings):
        applicant = make_applicant(net_income=1_200_000)

        breakdown = calculate_amount(
            applicant,
            bureau_result(problematic_pct=30.0, total_amount=200_000),
            bank_result(3),
            fast_settings,
        )

        triggered = [cap.rule for cap in breakdown.triggered_caps]
        assert triggered == [
            "employment_category",
            "payer_bank_risk_tier",
            "bureau_problematic_share",
            "bureau_outstanding_amount",
        ]
        assert breakdown.amount == 100_000

    def test_amount_never_exceeds_base(self, fast_settings):
        applicant = make_applicant(net_income=600_000)

        breakdown = calculate_amount(applicant, bureau_result(), bank_result(1), fast_settings)

        assert breakdown.amount == breakdown.base_amount == 100_000
