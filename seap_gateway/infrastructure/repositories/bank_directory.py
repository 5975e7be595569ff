"""In-memory implementation of BankDirectory."""

from types import MappingProxyType
from typing import Iterable, List, Optional

from seap_gateway.domain.entities import BankProfile
from seap_gateway.domain.interfaces import BankDirectory

from .reference_data import DEFAULT_BANKS


class StaticBankDirectory(BankDirectory):
    """
    Read-only bank table built once at startup.

    The underlying mapping is a MappingProxyType, so concurrent
    evaluations can read it without locking.
    """

    def __init__(self, banks: Iterable[BankProfile] = DEFAULT_BANKS):
        by_id = {}
        for bank in banks:
            if bank.id in by_id:
                raise ValueError(f"Duplicate bank id in reference table: {bank.id}")
            by_id[bank.id] = bank
        self._banks = MappingProxyType(by_id)

    def get(self, bank_id: str) -> Optional[BankProfile]:
        return self._banks.get(bank_id)

    def list(self) -> List[BankProfile]:
        return list(self._banks.values())
