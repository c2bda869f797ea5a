"""Native currency contract.

The engine never stores native balances itself. It delegates to a Currency
implementation supplied by the host, which must honor this contract:
- free_balance: spendable balance of an account
- ensure_can_withdraw: raise if the withdrawal leaving new_balance is not allowed
- deposit_creating: mint amount into an account, creating it if needed
- slash: burn amount from an account (caller has validated sufficiency)

InMemoryCurrency is a reference implementation used by genesis, the HTTP app
and tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from subdex.errors import InsufficientKsmBalance

logger = structlog.get_logger()


@runtime_checkable
class Currency(Protocol):
    """Abstract native currency used by the balance ledger."""

    def free_balance(self, account: str) -> int:
        """Return the free (spendable) balance of account."""
        ...

    def ensure_can_withdraw(self, account: str, amount: int, new_balance: int) -> None:
        """Raise if withdrawing amount, leaving new_balance, is not permitted.

        Raises:
            InsufficientKsmBalance: If the withdrawal is not permitted
        """
        ...

    def deposit_creating(self, account: str, amount: int) -> None:
        """Mint amount into account."""
        ...

    def slash(self, account: str, amount: int) -> None:
        """Burn amount from account."""
        ...


class InMemoryCurrency:
    """Dict-backed Currency with optional per-account locks.

    A lock reserves part of the free balance: withdrawals that would leave
    less than the locked amount are refused.
    """

    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self._balances: dict[str, int] = dict(balances or {})
        self._locks: dict[str, int] = {}

    def free_balance(self, account: str) -> int:
        return self._balances.get(account, 0)

    def ensure_can_withdraw(self, account: str, amount: int, new_balance: int) -> None:
        locked = self._locks.get(account, 0)
        if new_balance < locked:
            raise InsufficientKsmBalance(
                f"Withdrawal of {amount} would leave {new_balance} below lock {locked}"
            )

    def deposit_creating(self, account: str, amount: int) -> None:
        self._balances[account] = self._balances.get(account, 0) + amount

    def slash(self, account: str, amount: int) -> None:
        # Slashing saturates at zero, as a currency slash does.
        self._balances[account] = max(0, self._balances.get(account, 0) - amount)

    def lock(self, account: str, amount: int) -> None:
        """Lock amount of account's balance against withdrawal."""
        if amount < 0:
            raise ValueError(f"Lock amount must be non-negative: {amount}")
        if amount == 0:
            self._locks.pop(account, None)
        else:
            self._locks[account] = amount
        logger.debug("native_lock_set", account=account, amount=amount)

    def balances(self) -> dict[str, int]:
        """Copy of every account's free balance."""
        return dict(self._balances)

    def total_issuance(self) -> int:
        """Sum of all native balances."""
        return sum(self._balances.values())

    def __repr__(self) -> str:
        return f"InMemoryCurrency({len(self._balances)} accounts)"


__all__ = ["Currency", "InMemoryCurrency"]
