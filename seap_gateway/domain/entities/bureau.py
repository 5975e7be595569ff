"""Credit bureau entities: raw debt records and the aggregated summary."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

RISK_TIERS = (1, 2, 3, 4, 5)
PROBLEMATIC_TIERS = (3, 4, 5)


def _coerce_tier(value: Any) -> Any:
    """Accept integral floats such as 3.0 as tiers; booleans are never tiers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class DebtRecord:
    """
    A single debt reported by one entity.

    Attributes:
        entity: Name of the reporting financial entity
        tier: Debtor classification, 1 (normal) to 5 (unrecoverable)
        amount: Outstanding amount in currency units
        updated_at: Date the entity last updated the record, as reported
    """

    entity: str
    tier: int
    amount: float
    updated_at: Optional[str] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "DebtRecord":
        """Build a record from the registry's JSON representation."""
        return cls(
            entity=str(item.get("entidad", "")),
            tier=_coerce_tier(item.get("situacion")),
            amount=item.get("monto") or 0,
            updated_at=item.get("fechaActualizacion"),
        )

    def to_dict(self) -> dict:
        return {
            "entity": self.entity,
            "tier": self.tier,
            "amount": self.amount,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class BureauSummary:
    """
    Aggregated result of one registry query.

    Constructed fresh per query through `from_debts` and never mutated.
    """

    tax_id: str
    tier1: int
    tier2: int
    tier3: int
    tier4: int
    tier5: int
    total_entities: int
    total_amount: float
    debts: Tuple[DebtRecord, ...] = ()
    observations: Tuple[str, ...] = ()
    queried_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
        compare=False,
    )
    simulated: bool = False

    @property
    def disqualified(self) -> bool:
        """True when any entity reports the applicant in tier 5."""
        return self.tier5 > 0

    @property
    def problematic_count(self) -> int:
        return self.tier3 + self.tier4 + self.tier5

    @property
    def problematic_pct(self) -> float:
        """Share of reporting entities in tiers 3-5, as a percentage."""
        if self.total_entities == 0:
            return 0.0
        return 100 * self.problematic_count / self.total_entities

    @classmethod
    def from_debts(
        cls,
        tax_id: str,
        debts: Iterable[DebtRecord],
        observations: Iterable[str] = (),
        simulated: bool = False,
    ) -> "BureauSummary":
        """
        Reduce raw debt records into a summary.

        Records with an unknown or out-of-range tier are skipped: they are
        not counted in any total and do not abort processing.
        """
        counts = {tier: 0 for tier in RISK_TIERS}
        kept: List[DebtRecord] = []
        total_amount = 0.0

        for debt in debts:
            if isinstance(debt.tier, bool) or not isinstance(debt.tier, int) or debt.tier not in counts:
                logger.warning(
                    "bureau_debt_skipped",
                    tax_id=tax_id,
                    entity=debt.entity,
                    tier=debt.tier,
                )
                continue
            counts[debt.tier] += 1
            total_amount += debt.amount or 0
            kept.append(debt)

        return cls(
            tax_id=tax_id,
            tier1=counts[1],
            tier2=counts[2],
            tier3=counts[3],
            tier4=counts[4],
            tier5=counts[5],
            total_entities=len(kept),
            total_amount=total_amount,
            debts=tuple(kept),
            observations=tuple(observations),
            simulated=simulated,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "tax_id": self.tax_id,
            "tier1": self.tier1,
            "tier2": self.tier2,
            "tier3": self.tier3,
            "tier4": self.tier4,
            "tier5": self.tier5,
            "total_entities": self.total_entities,
            "total_amount": self.total_amount,
            "disqualified": self.disqualified,
            "problematic_pct": round(self.problematic_pct, 1),
            "observations": list(self.observations),
            "simulated": self.simulated,
            "queried_at": self.queried_at.isoformat(),
        }
