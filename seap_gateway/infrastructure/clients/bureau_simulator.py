"""Deterministic simulated credit bureau responses.

Used when no bureau token is configured. The random source is seeded
from the tax identifier, so the same identifier always produces the same
summary, within a process and across processes.
"""

import random
from typing import List

from seap_gateway.domain.entities import BureauSummary, DebtRecord

FAVORABLE_SHARE = 0.7
PROBLEMATIC_ENTITY_SHARE = 0.6
TIER5_PROBABILITY = 0.1

SIMULATION_OBSERVATION = "Simulated response: credit bureau token not configured"


def simulate_debts(tax_id: str) -> List[DebtRecord]:
    """
    Generate the debt records for a tax identifier.

    About 70% of identifiers get a favorable profile: two entities in
    tiers 1 and 2 with a modest amount. The rest get 2-5 entities, with
    about 60% of them in tiers 3/4 and a small chance that one of those
    is in tier 5.
    """
    rng = random.Random(tax_id)

    if rng.random() < FAVORABLE_SHARE:
        return [
            DebtRecord(entity="Banco Nación", tier=1, amount=0),
            DebtRecord(
                entity="Banco Galicia",
                tier=2,
                amount=rng.randrange(5_000, 30_001, 1_000),
            ),
        ]

    total_entities = rng.randint(2, 5)
    problematic = max(1, int(total_entities * PROBLEMATIC_ENTITY_SHARE))
    has_tier5 = rng.random() < TIER5_PROBABILITY

    debts = []
    for i in range(total_entities):
        if i == 0 and has_tier5:
            tier = 5
        elif i < problematic:
            tier = rng.choice((3, 4))
        else:
            tier = 1
        debts.append(
            DebtRecord(
                entity=f"Entity {i + 1}",
                tier=tier,
                amount=rng.randrange(0, 100_000),
            )
        )
    return debts


def simulate_bureau_response(tax_id: str) -> BureauSummary:
    """Build a simulated summary through the same reduction as live data."""
    return BureauSummary.from_debts(
        tax_id=tax_id,
        debts=simulate_debts(tax_id),
        observations=(SIMULATION_OBSERVATION,),
        simulated=True,
    )
