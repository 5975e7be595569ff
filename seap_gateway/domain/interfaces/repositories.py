"""Reference table and history repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from seap_gateway.domain.entities import (
    BankProfile,
    DelinquencyRecord,
    EvaluationRecord,
    EvaluationResult,
    HistoryStats,
)
from seap_gateway.domain.exceptions import BankNotFoundException


class DelinquencyRegistry(ABC):
    """
    Read-only lookup of profiles with outstanding internal credits.

    Implementations must be safe for concurrent reads.
    """

    @abstractmethod
    def find_by_national_id(self, national_id: str) -> Optional[DelinquencyRecord]:
        """
        Look up a profile by national identifier.

        Returns:
            The matching record, or None if the profile is unknown
        """
        ...


class BankDirectory(ABC):
    """Read-only table of supported payer banks."""

    @abstractmethod
    def get(self, bank_id: str) -> Optional[BankProfile]:
        """Return the bank profile for an identifier, or None if unsupported."""
        ...

    @abstractmethod
    def list(self) -> List[BankProfile]:
        """Return every supported bank, in display order."""
        ...

    def require(self, bank_id: str) -> BankProfile:
        """
        Return the bank profile for an identifier.

        Raises:
            BankNotFoundException: If the bank is not supported
        """
        bank = self.get(bank_id)
        if bank is None:
            raise BankNotFoundException(bank_id)
        return bank


class EvaluationHistoryRepository(ABC):
    """
    Abstract store for completed evaluations.

    Implementations may keep records in memory, on disk, etc.
    """

    @abstractmethod
    async def save(self, record: EvaluationRecord) -> EvaluationRecord:
        """Persist a completed evaluation."""
        ...

    @abstractmethod
    async def get_by_id(self, record_id: UUID) -> Optional[EvaluationRecord]:
        """Retrieve a record by ID, or None if not found."""
        ...

    @abstractmethod
    async def list(
        self,
        result: Optional[EvaluationResult] = None,
        operator_id: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[EvaluationRecord]:
        """
        Retrieve records matching every given filter, newest first.

        Args:
            result: Only records with this result
            operator_id: Only records created by this operator
            date_from: Only records created at or after this instant
            date_to: Only records created at or before this instant
            search: Case-insensitive match on applicant name or identifier
            limit: Maximum number of records to return
        """
        ...

    @abstractmethod
    async def stats(self, operator_id: Optional[int] = None) -> HistoryStats:
        """Compute aggregate statistics, optionally for one operator."""
        ...

    @abstractmethod
    async def clear(self) -> int:
        """Delete every record. Returns the number of records removed."""
        ...
