"""
Identifier Service.

Converts national person identifiers into the bureau's 11-digit tax
identifier format and verifies mod-11 check digits.
"""

from seap_gateway.domain.exceptions import InvalidIdentifierLength

TAX_ID_WEIGHTS = (5, 4, 3, 2, 7, 6, 5, 4, 3, 2)
PERSON_PREFIX = "20"


def compute_check_digit(base: str) -> int:
    """
    Compute the mod-11 check digit for the first 10 digits of a tax id.

    A remainder of 0 or 1 maps to digit 0, so the result is always 0-9.
    """
    total = sum(int(digit) * weight for digit, weight in zip(base, TAX_ID_WEIGHTS))
    remainder = total % 11
    if remainder < 2:
        return 0
    return 11 - remainder


def is_valid_tax_id(value: str) -> bool:
    """True iff `value` is exactly 11 digits with a matching check digit."""
    if not isinstance(value, str) or len(value) != 11 or not value.isdigit():
        return False
    # str.isdigit accepts non-ASCII digits
    if not value.isascii():
        return False
    return compute_check_digit(value[:10]) == int(value[10])


def person_id_to_tax_id(person_id: str) -> str:
    """
    Derive the tax identifier for a person identifier.

    The id is left-padded to 8 digits, prefixed with "20" and suffixed with
    its check digit.

    Raises:
        InvalidIdentifierLength: Unless `person_id` has 7 or 8 digits
    """
    person_id = (person_id or "").strip()
    if not (person_id.isascii() and person_id.isdigit() and 7 <= len(person_id) <= 8):
        raise InvalidIdentifierLength(person_id)

    base = PERSON_PREFIX + person_id.zfill(8)
    return f"{base}{compute_check_digit(base)}"


def resolve_tax_id(national_id: str) -> str:
    """Return `national_id` if it already is a valid tax id, else derive one."""
    national_id = (national_id or "").strip()
    if is_valid_tax_id(national_id):
        return national_id
    return person_id_to_tax_id(national_id)
