"""Payer bank reference entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BankProfile:
    """
    A bank supported as salary payer.

    Attributes:
        id: Stable identifier used by the applicant form
        name: Display name
        has_restrictions: Restricted banks require a higher minimum income
        risk_tier: Bank's own risk tier, 1 (best) to 5
        requires_account: Whether an account number must be supplied
    """

    id: str
    name: str
    has_restrictions: bool
    risk_tier: int
    requires_account: bool

    def __post_init__(self) -> None:
        if not 1 <= self.risk_tier <= 5:
            raise ValueError(f"risk_tier must be between 1 and 5, got {self.risk_tier}")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "has_restrictions": self.has_restrictions,
            "risk_tier": self.risk_tier,
            "requires_account": self.requires_account,
        }
