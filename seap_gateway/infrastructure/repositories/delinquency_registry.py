"""In-memory implementation of DelinquencyRegistry."""

from types import MappingProxyType
from typing import Iterable, Optional

from seap_gateway.domain.entities import DelinquencyRecord
from seap_gateway.domain.interfaces import DelinquencyRegistry

from .reference_data import DEFAULT_DELINQUENT_PROFILES


class InMemoryDelinquencyRegistry(DelinquencyRegistry):
    """Read-only registry keyed by national identifier."""

    def __init__(self, records: Iterable[DelinquencyRecord] = DEFAULT_DELINQUENT_PROFILES):
        self._records = MappingProxyType({r.national_id: r for r in records})

    def find_by_national_id(self, national_id: str) -> Optional[DelinquencyRecord]:
        return self._records.get((national_id or "").strip())
