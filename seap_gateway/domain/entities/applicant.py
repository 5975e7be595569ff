"""Applicant entity - the immutable input to an evaluation."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EmploymentCategory(str, Enum):
    """Employment category of the applicant."""
    PUBLIC = "public"
    PRIVATE = "private"
    RETIREE = "retiree"
    UNSET = "unset"


@dataclass(frozen=True)
class ApplicantProfile:
    """
    An applicant as captured by the operator.

    Attributes:
        first_name: Applicant's first name
        last_name: Applicant's last name
        national_id: 7-8 digit person identifier or 11-digit tax identifier
        net_income: Net monthly income in currency units (non-negative)
        employment: Employment category
        province: Province of residence
        payer_bank_id: Identifier of the bank that pays the applicant's salary
        account_number: Account number, required only for some banks
    """

    first_name: str
    last_name: str
    national_id: str
    net_income: float
    employment: EmploymentCategory
    province: str
    payer_bank_id: str
    account_number: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_account_number(self) -> bool:
        return bool(self.account_number and self.account_number.strip())

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "national_id": self.national_id,
            "net_income": self.net_income,
            "employment": self.employment.value,
            "province": self.province,
            "payer_bank_id": self.payer_bank_id,
        }
