"""Delinquency registry entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DelinquencyRecord:
    """
    A profile known to the internal delinquency registry.

    Attributes:
        national_id: Person identifier as captured by the operator
        has_active_debt: Whether the profile still owes an active credit
        amount: Outstanding amount in currency units
    """

    national_id: str
    has_active_debt: bool
    amount: float = 0
