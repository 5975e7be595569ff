"""Payer bank domain exceptions."""

from .base import DomainException


class BankNotFoundException(DomainException):
    """Raised when a payer bank is not in the reference table."""

    def __init__(self, bank_id: str):
        super().__init__(
            message=f"Bank not supported: {bank_id}",
            code="BANK_NOT_FOUND",
        )
        self.bank_id = bank_id
