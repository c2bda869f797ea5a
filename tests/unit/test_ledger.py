"""Tests for the balance ledger and the native currency contract."""

import pytest

from subdex.assets import NATIVE
from subdex.currency import Currency, InMemoryCurrency
from subdex.errors import InsufficientKsmBalance, InsufficientOtherAssetBalance, OverflowOccured
from subdex.ledger import BalanceChange, BalanceLedger
from subdex.safe_int import BALANCE_MAX
from tests.helpers import ALICE, ASSET_1, ASSET_2, BOB


@pytest.fixture
def currency() -> InMemoryCurrency:
    return InMemoryCurrency({ALICE: 1000})


@pytest.fixture
def ledger(currency: InMemoryCurrency) -> BalanceLedger:
    return BalanceLedger(currency, rows={(ALICE, 1): 500})


class TestInMemoryCurrency:
    """Tests for the reference native currency."""

    def test_satisfies_protocol(self, currency):
        assert isinstance(currency, Currency)

    def test_deposit_and_slash(self, currency):
        currency.deposit_creating(BOB, 50)
        assert currency.free_balance(BOB) == 50
        currency.slash(BOB, 20)
        assert currency.free_balance(BOB) == 30

    def test_slash_saturates(self, currency):
        currency.slash(ALICE, 5000)
        assert currency.free_balance(ALICE) == 0

    def test_lock_refuses_withdrawal_below_lock(self, currency):
        """A withdrawal leaving less than the locked amount is refused."""
        currency.lock(ALICE, 800)
        currency.ensure_can_withdraw(ALICE, 200, 800)
        with pytest.raises(InsufficientKsmBalance):
            currency.ensure_can_withdraw(ALICE, 201, 799)

    def test_total_issuance(self, currency):
        currency.deposit_creating(BOB, 10)
        assert currency.total_issuance() == 1010


class TestLedgerQueries:
    """Tests for balance lookups."""

    def test_balance_of_native_delegates(self, ledger):
        assert ledger.balance_of(ALICE, NATIVE) == 1000

    def test_balance_of_bridged(self, ledger):
        assert ledger.balance_of(ALICE, ASSET_1) == 500

    def test_missing_row_is_zero(self, ledger):
        assert ledger.balance_of(BOB, ASSET_1) == 0
        assert ledger.balance_of(ALICE, ASSET_2) == 0
        assert not ledger.has_row(BOB, 1)

    def test_endow_rejects_out_of_range(self, ledger):
        with pytest.raises(ValueError):
            ledger.endow(BOB, 1, BALANCE_MAX + 1)
        with pytest.raises(ValueError):
            ledger.endow(BOB, 1, -1)


class TestLedgerChecks:
    """Tests for read-only sufficiency and capacity checks."""

    def test_sufficient_native(self, ledger):
        ledger.ensure_sufficient_balance(ALICE, NATIVE, 1000)
        with pytest.raises(InsufficientKsmBalance):
            ledger.ensure_sufficient_balance(ALICE, NATIVE, 1001)

    def test_sufficient_bridged(self, ledger):
        ledger.ensure_sufficient_balance(ALICE, ASSET_1, 500)
        with pytest.raises(InsufficientOtherAssetBalance):
            ledger.ensure_sufficient_balance(ALICE, ASSET_1, 501)

    def test_sufficient_native_respects_lock(self, ledger, currency):
        currency.lock(ALICE, 900)
        with pytest.raises(InsufficientKsmBalance):
            ledger.ensure_sufficient_balance(ALICE, NATIVE, 200)

    def test_can_hold(self, ledger):
        ledger.ensure_can_hold(ALICE, ASSET_1, BALANCE_MAX - 500)
        with pytest.raises(OverflowOccured):
            ledger.ensure_can_hold(ALICE, ASSET_1, BALANCE_MAX - 499)

    def test_checks_do_not_mutate(self, ledger):
        with pytest.raises(InsufficientOtherAssetBalance):
            ledger.ensure_sufficient_balance(BOB, ASSET_1, 1)
        assert not ledger.has_row(BOB, 1)


class TestEnsureCanApply:
    """Batch validation on net results."""

    def test_aggregates_debits_per_account_asset(self, ledger):
        """Two debits that each fit but together do not are rejected."""
        debits = [BalanceChange(ALICE, ASSET_1, 300), BalanceChange(ALICE, ASSET_1, 300)]
        with pytest.raises(InsufficientOtherAssetBalance):
            ledger.ensure_can_apply(debits, [])

    def test_credit_checked_against_net_balance(self, ledger):
        """A debit of the same key makes room for a large credit."""
        ledger.endow(BOB, 1, BALANCE_MAX)
        debits = [BalanceChange(BOB, ASSET_1, 10)]
        credits = [BalanceChange(BOB, ASSET_1, 10)]
        ledger.ensure_can_apply(debits, credits)
        with pytest.raises(OverflowOccured):
            ledger.ensure_can_apply(debits, [BalanceChange(BOB, ASSET_1, 11)])


class TestLedgerMutations:
    """Tests for credit and debit."""

    def test_credit_creates_row(self, ledger):
        ledger.credit_native_or_bridged(BOB, ASSET_2, 25)
        assert ledger.balance_of(BOB, ASSET_2) == 25
        assert ledger.has_row(BOB, 2)

    def test_debit_keeps_zero_row(self, ledger):
        """Rows persist at zero once created."""
        ledger.debit_native_or_bridged(ALICE, ASSET_1, 500)
        assert ledger.has_row(ALICE, 1)
        assert ledger.balance_of(ALICE, ASSET_1) == 0

    def test_native_mutations_delegate(self, ledger, currency):
        ledger.credit_native_or_bridged(BOB, NATIVE, 7)
        ledger.debit_native_or_bridged(ALICE, NATIVE, 100)
        assert currency.free_balance(BOB) == 7
        assert currency.free_balance(ALICE) == 900
        assert ledger.rows() == {(ALICE, 1): 500}

    def test_total_of(self, ledger):
        ledger.credit_native_or_bridged(BOB, ASSET_1, 20)
        assert ledger.total_of(1) == 520
        assert ledger.verify_non_negative()
