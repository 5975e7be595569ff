"""
Unit tests for the identifier service.

These tests verify:
1. Mod-11 check digit computation
2. Tax identifier validation
3. Person identifier to tax identifier derivation
"""

import pytest

from seap_gateway.domain.exceptions import InvalidIdentifierException, InvalidIdentifierLength
from seap_gateway.service.evaluation.identifiers import (
    compute_check_digit,
    is_valid_tax_id,
    person_id_to_tax_id,
    resolve_tax_id,
)


class TestComputeCheckDigit:
    """Tests for the weighted mod-11 check digit."""

    def test_regular_remainder(self):
        """Weighted sum 148 has remainder 5, so the digit is 6."""
        assert compute_check_digit("2012345678") == 6

    def test_remainder_zero_gives_zero(self):
        """Weighted sum 88 is divisible by 11."""
        assert compute_check_digit("2011223344") == 0

    def test_remainder_one_gives_zero(self):
        """Weighted sum 144 leaves remainder 1."""
        assert compute_check_digit("2012345676") == 0

    def test_digit_is_always_single(self):
        for n in range(1000):
            assert 0 <= compute_check_digit(f"20{n:08d}") <= 9


class TestIsValidTaxId:
    """Tests for tax identifier validation."""

    @pytest.mark.parametrize(
        "value",
        ["20123456786", "20876543215", "20112233440", "20012345675"],
    )
    def test_valid_identifiers(self, value):
        assert is_valid_tax_id(value) is True

    def test_wrong_check_digit(self):
        assert is_valid_tax_id("20123456787") is False

    @pytest.mark.parametrize(
        "value",
        ["", "2012345678", "201234567860", "2012345678a", "20-12345678-6"],
    )
    def test_malformed_identifiers(self, value):
        assert is_valid_tax_id(value) is False

    def test_non_ascii_digits_rejected(self):
        """Arabic-Indic digits pass str.isdigit but are not identifiers."""
        assert is_valid_tax_id("٢٠١٢٣٤٥٦٧٨٦") is False

    def test_remainder_one_base_only_accepts_zero(self):
        assert is_valid_tax_id("20123456760") is True
        for last in "123456789":
            assert is_valid_tax_id("2012345676" + last) is False


class TestPersonIdToTaxId:
    """Tests for tax identifier derivation."""

    def test_eight_digit_id(self):
        assert person_id_to_tax_id("12345678") == "20123456786"

    def test_other_eight_digit_id(self):
        assert person_id_to_tax_id("87654321") == "20876543215"

    def test_remainder_zero_id(self):
        assert person_id_to_tax_id("11223344") == "20112233440"

    def test_seven_digit_id_is_zero_padded(self):
        assert person_id_to_tax_id("1234567") == "20012345675"

    def test_surrounding_whitespace_ignored(self):
        assert person_id_to_tax_id("  12345678 ") == "20123456786"

    def test_derived_ids_are_valid(self):
        for person_id in ["12345678", "87654321", "11223344", "1234567"]:
            assert is_valid_tax_id(person_id_to_tax_id(person_id))

    @pytest.mark.parametrize("value", ["", "123456", "123456789", "1234567a", "12.345.678"])
    def test_invalid_length_or_characters(self, value):
        with pytest.raises(InvalidIdentifierLength):
            person_id_to_tax_id(value)

    def test_remainder_one_id(self):
        assert person_id_to_tax_id("12345676") == "20123456760"
        assert person_id_to_tax_id("10000005") == "20100000050"

    def test_every_id_in_range_derives_a_valid_tax_id(self):
        for n in range(10_000_000, 10_001_000):
            tax_id = person_id_to_tax_id(str(n))

            assert len(tax_id) == 11
            assert is_valid_tax_id(tax_id), tax_id

    def test_seven_digit_range_derives_valid_tax_ids(self):
        for n in range(1_000_000, 1_000_500):
            assert is_valid_tax_id(person_id_to_tax_id(str(n)))

    def test_errors_share_a_base_class(self):
        with pytest.raises(InvalidIdentifierException):
            person_id_to_tax_id("12")


class TestResolveTaxId:
    """Tests for accepting either identifier form."""

    def test_valid_tax_id_passes_through(self):
        assert resolve_tax_id("20876543215") == "20876543215"

    def test_person_id_is_converted(self):
        assert resolve_tax_id("87654321") == "20876543215"

    def test_invalid_eleven_digits_is_rejected(self):
        """A wrong check digit is not silently treated as a person id."""
        with pytest.raises(InvalidIdentifierLength):
            resolve_tax_id("20123456787")
