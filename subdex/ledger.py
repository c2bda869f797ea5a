"""Balance ledger for bridged assets, delegating native balances.

Implements the rows (account, bridged asset id) -> amount. Native currency
holdings are never duplicated here: every native query or mutation goes to
the Currency contract.

Two kinds of methods live here:
- ensure_* checks are read-only and raise domain errors
- credit/debit mutations are unchecked and must only run on amounts a
  check has already accepted
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import structlog

from subdex.assets import Asset, BridgedAsset, NativeCurrency
from subdex.currency import Currency
from subdex.errors import InsufficientKsmBalance, InsufficientOtherAssetBalance, OverflowOccured
from subdex.safe_int import BALANCE_MAX

logger = structlog.get_logger()


class BalanceChange(NamedTuple):
    """One debit or credit of asset for account."""

    account: str
    asset: Asset
    amount: int


class BalanceLedger:
    """Holdings of every account in every asset.

    Bridged rows are created on first credit and kept at zero afterwards
    rather than removed.
    """

    def __init__(self, currency: Currency, rows: dict[tuple[str, int], int] | None = None) -> None:
        self.currency = currency
        self._rows: dict[tuple[str, int], int] = {}
        for (account, asset_id), amount in (rows or {}).items():
            self.endow(account, asset_id, amount)

    # --- Queries ---

    def asset_balance(self, account: str, asset_id: int) -> int:
        """Bridged balance for (account, asset_id). Returns 0 if no row."""
        return self._rows.get((account, asset_id), 0)

    def has_row(self, account: str, asset_id: int) -> bool:
        return (account, asset_id) in self._rows

    def balance_of(self, account: str, asset: Asset) -> int:
        """Free balance of account in any asset."""
        match asset:
            case NativeCurrency():
                return self.currency.free_balance(account)
            case BridgedAsset(id=asset_id):
                return self.asset_balance(account, asset_id)
        raise TypeError(f"Not an asset: {asset!r}")

    def rows(self) -> dict[tuple[str, int], int]:
        """All bridged rows, including zero rows."""
        return dict(self._rows)

    def total_of(self, asset_id: int) -> int:
        """Sum of every account's balance of a bridged asset."""
        return sum(amount for (_, a), amount in self._rows.items() if a == asset_id)

    # --- Read-only checks ---

    def ensure_sufficient_balance(self, account: str, asset: Asset, amount: int) -> None:
        """Check account can give up amount of asset.

        Raises:
            InsufficientKsmBalance: Native balance too low or withdrawal refused
            InsufficientOtherAssetBalance: Bridged balance too low
        """
        match asset:
            case NativeCurrency():
                new_balance = self.currency.free_balance(account) - amount
                if new_balance < 0:
                    raise InsufficientKsmBalance(
                        f"{account} holds {self.currency.free_balance(account)} native, needs {amount}"
                    )
                self.currency.ensure_can_withdraw(account, amount, new_balance)
            case BridgedAsset(id=asset_id):
                held = self.asset_balance(account, asset_id)
                if held < amount:
                    raise InsufficientOtherAssetBalance(
                        f"{account} holds {held} of {asset}, needs {amount}"
                    )

    def ensure_can_hold(self, account: str, asset: Asset, amount: int) -> None:
        """Check crediting amount keeps the resulting balance representable.

        Raises:
            OverflowOccured: If balance + amount exceeds BALANCE_MAX
        """
        if self.balance_of(account, asset) + amount > BALANCE_MAX:
            raise OverflowOccured(f"{account} cannot hold {amount} more of {asset}")

    def ensure_can_apply(
        self,
        debits: Iterable[BalanceChange],
        credits: Iterable[BalanceChange],
    ) -> None:
        """Validate a batch of debits and credits on their net result.

        Debits and credits touching the same (account, asset) are aggregated
        first, so each resulting balance is checked once: total debits must be
        covered by the current balance, and the final balance must fit the
        balance type.

        Raises:
            InsufficientKsmBalance: Native debits not covered
            InsufficientOtherAssetBalance: Bridged debits not covered
            OverflowOccured: Resulting balance exceeds BALANCE_MAX
        """
        debit_totals: dict[tuple[str, Asset], int] = {}
        credit_totals: dict[tuple[str, Asset], int] = {}
        for change in debits:
            key = (change.account, change.asset)
            debit_totals[key] = debit_totals.get(key, 0) + change.amount
        for change in credits:
            key = (change.account, change.asset)
            credit_totals[key] = credit_totals.get(key, 0) + change.amount

        for (account, asset), total in debit_totals.items():
            self.ensure_sufficient_balance(account, asset, total)

        for (account, asset), total in credit_totals.items():
            resulting = self.balance_of(account, asset) - debit_totals.get((account, asset), 0) + total
            if resulting > BALANCE_MAX:
                raise OverflowOccured(f"{account} cannot hold {resulting} of {asset}")

    # --- Mutations (pre-validated) ---

    def credit_native_or_bridged(self, account: str, asset: Asset, amount: int) -> None:
        """Mint amount of asset to account. Never fails; validate first."""
        match asset:
            case NativeCurrency():
                self.currency.deposit_creating(account, amount)
            case BridgedAsset(id=asset_id):
                key = (account, asset_id)
                self._rows[key] = self._rows.get(key, 0) + amount
        logger.debug("ledger_credit", account=account, asset=str(asset), amount=amount)

    def debit_native_or_bridged(self, account: str, asset: Asset, amount: int) -> None:
        """Burn amount of asset from account. Caller must have validated sufficiency."""
        match asset:
            case NativeCurrency():
                self.currency.slash(account, amount)
            case BridgedAsset(id=asset_id):
                key = (account, asset_id)
                self._rows[key] = self._rows.get(key, 0) - amount
        logger.debug("ledger_debit", account=account, asset=str(asset), amount=amount)

    def endow(self, account: str, asset_id: int, amount: int) -> None:
        """Set a bridged row directly (genesis only).

        Raises:
            ValueError: If amount is outside the balance type
        """
        if not 0 <= amount <= BALANCE_MAX:
            raise ValueError(f"Balance out of range: {amount}")
        self._rows[(account, asset_id)] = amount

    def verify_non_negative(self) -> bool:
        """True if every bridged row is non-negative."""
        return all(amount >= 0 for amount in self._rows.values())

    def __repr__(self) -> str:
        return f"BalanceLedger({len(self._rows)} rows)"


__all__ = ["BalanceChange", "BalanceLedger"]
