"""Mutation plans produced by the validation phase.

A MutationPlan is the complete, fully determined effect of one accepted
operation. Building it may fail; applying it may not. The orchestrator only
applies plans whose ledger effects have passed BalanceLedger.ensure_can_apply.
"""

from __future__ import annotations

from dataclasses import dataclass

from subdex.assets import Asset
from subdex.events import DexEvent
from subdex.ledger import BalanceChange
from subdex.pools.types import Pool


@dataclass(frozen=True)
class MutationPlan:
    """Ledger and pool writes for one operation, plus its event.

    Attributes:
        low: Canonical low asset of the pool written
        high: Canonical high asset of the pool written
        pool: Snapshot to store under (low, high)
        debits: Ledger debits, applied first
        credits: Ledger credits, applied after debits
        event: Event recorded once the writes are done
    """

    low: Asset
    high: Asset
    pool: Pool
    debits: tuple[BalanceChange, ...]
    credits: tuple[BalanceChange, ...]
    event: DexEvent


__all__ = ["MutationPlan"]
