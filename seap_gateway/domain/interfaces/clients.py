"""External client interfaces."""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from seap_gateway.domain.entities import BureauSummary


class CreditBureauClient(ABC):
    """
    Abstract client for the credit-bureau debtor registry.

    Returns a complete summary or raises a classified failure, never a
    partially-populated summary.
    """

    @abstractmethod
    async def query(
        self,
        tax_id: str,
        cancel: Optional[asyncio.Event] = None,
    ) -> BureauSummary:
        """
        Query the registry for a tax identifier.

        Args:
            tax_id: 11-digit tax identifier
            cancel: Optional event; once set, the in-progress attempt is
                aborted and remaining retries are skipped

        Returns:
            The aggregated bureau summary

        Raises:
            BureauMaxRetriesExceededException: If every attempt failed
            BureauCancelledException: If `cancel` was set mid-query
        """
        ...
