"""In-process implementation of EvaluationHistoryRepository."""

import asyncio
from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
from uuid import UUID

from seap_gateway.core.config import settings
from seap_gateway.domain.entities import (
    EvaluationRecord,
    EvaluationResult,
    HistoryStats,
)
from seap_gateway.domain.interfaces import EvaluationHistoryRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryEvaluationHistoryRepository(EvaluationHistoryRepository):
    """
    Keeps the most recent evaluations in memory, newest first.

    Only the last `capacity` records are retained; older ones are dropped.
    """

    def __init__(
        self,
        capacity: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._records: deque[EvaluationRecord] = deque(
            maxlen=capacity or settings.history_capacity
        )
        self._lock = asyncio.Lock()
        self._clock = clock

    async def save(self, record: EvaluationRecord) -> EvaluationRecord:
        """Store a record at the head of the history."""
        async with self._lock:
            self._records.appendleft(record)
        return record

    async def get_by_id(self, record_id: UUID) -> Optional[EvaluationRecord]:
        for record in list(self._records):
            if record.id == record_id:
                return record
        return None

    async def list(
        self,
        result: Optional[EvaluationResult] = None,
        operator_id: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[EvaluationRecord]:
        """Retrieve records matching every given filter, newest first."""
        records = list(self._records)

        if result is not None:
            records = [r for r in records if r.outcome.result == result]

        if operator_id is not None:
            records = [r for r in records if r.operator.id == operator_id]

        if date_from is not None:
            records = [r for r in records if r.created_at >= _aware(date_from)]

        if date_to is not None:
            records = [r for r in records if r.created_at <= _aware(date_to)]

        if search:
            needle = search.strip().lower()
            records = [
                r for r in records
                if needle in r.applicant.first_name.lower()
                or needle in r.applicant.last_name.lower()
                or needle in r.applicant.national_id
            ]

        if limit is not None:
            records = records[:limit]

        return records

    async def stats(self, operator_id: Optional[int] = None) -> HistoryStats:
        """Compute aggregate statistics, optionally for one operator."""
        records = await self.list(operator_id=operator_id)

        total = len(records)
        approved = [r for r in records if r.outcome.result == EvaluationResult.APPROVED]
        rejected = sum(1 for r in records if r.outcome.result == EvaluationResult.REJECTED)
        pending = sum(1 for r in records if r.outcome.result == EvaluationResult.PENDING)

        amounts = [r.max_amount for r in approved if r.max_amount]
        total_amount = sum(amounts)
        average_amount = total_amount / len(amounts) if amounts else 0.0

        now = self._clock()
        week_ago = now - timedelta(days=7)

        return HistoryStats(
            total=total,
            approved=len(approved),
            rejected=rejected,
            pending=pending,
            average_amount=average_amount,
            total_amount=total_amount,
            approval_rate=(len(approved) / total * 100) if total else 0.0,
            today=sum(1 for r in records if r.created_at.date() == now.date()),
            last_7_days=sum(1 for r in records if r.created_at >= week_ago),
        )

    async def clear(self) -> int:
        async with self._lock:
            removed = len(self._records)
            self._records.clear()
        return removed


def _aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored records."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
