"""
Bank account demo: preconditions, conservation postconditions, body-level
errors and an error-tolerant batch operation.
"""

from __future__ import annotations

from typing import Iterable

from dbcore import (
    ContractMode,
    OldState,
    contract_method,
    ensure,
    ensure_ctx,
    ensuref,
    require,
    require_ctx,
    requiref,
    run_strict,
)
from dbcore.validators import Positive

DAILY_LIMIT = 50_000
DEPOSIT_LIMIT = 1_000_000


class DailyLimitExceeded(Exception):
    """Ordinary business error: the amount is above the per-operation limit."""

    def __init__(self, amount: int, limit: int = DAILY_LIMIT) -> None:
        self.amount = amount
        self.limit = limit
        super().__init__(f"Amount {amount} exceeds the daily limit of {limit}")


class BankAccount:
    def __init__(self, account_number: int) -> None:
        require(account_number, Positive(), "Account number must be positive")
        self.account_number = account_number
        self.balance = 0
        self.is_active = True
        self.transaction_count = 0

    def __repr__(self) -> str:
        return (
            f"BankAccount(account_number={self.account_number}, "
            f"balance={self.balance}, is_active={self.is_active})"
        )

    def invariant(self) -> None:
        require(self.account_number > 0, "Account number must be positive")
        require(self.balance >= 0, "Balance must not be negative")
        require_ctx(
            self.is_active or self.balance == 0,
            "self.is_active or self.balance == 0",
        )

    @contract_method(
        snapshot=lambda self, amount: OldState(
            balance=self.balance, tx_count=self.transaction_count
        )
    )
    def deposit(self, old: OldState, amount: int) -> None:
        require(self.is_active, "Account must be active for deposits")
        require(amount, Positive(), "Deposit amount must be positive")
        require_ctx(amount <= DEPOSIT_LIMIT, "amount <= DEPOSIT_LIMIT")

        self.balance += amount
        self.transaction_count += 1

        ensure(self.balance == old.balance + amount, "Balance calculation error")
        ensure_ctx(
            self.transaction_count == old.tx_count + 1,
            "self.transaction_count == old.tx_count + 1",
        )

    def withdraw(self, amount: int) -> None:
        old = OldState(balance=self.balance, tx_count=self.transaction_count)

        def body(ctx: OldState, account: BankAccount) -> None:
            require(account.is_active, "Cannot withdraw from inactive account")
            require(amount, Positive(), "Withdrawal amount must be positive")
            requiref(
                amount <= account.balance,
                "Insufficient funds: requested {}, available {}",
                amount,
                account.balance,
            )
            if amount > DAILY_LIMIT:
                raise DailyLimitExceeded(amount)

            account.balance -= amount
            account.transaction_count += 1

            ensuref(
                account.balance == ctx.balance - amount,
                "Withdrawal calculation error: expected {}, got {}",
                ctx.balance - amount,
                account.balance,
            )

        run_strict(self, old, body)

    def transfer(self, to: BankAccount, amount: int) -> None:
        old = OldState(from_balance=self.balance, to_balance=to.balance)

        def body(ctx: OldState, sender: BankAccount) -> None:
            require(sender.is_active, "Sender account must be active")
            require(to.is_active, "Recipient account must be active")
            require(sender is not to, "Cannot transfer to the same account")
            require(amount, Positive(), "Transfer amount must be positive")
            requiref(
                sender.balance >= amount,
                "Insufficient funds for transfer: need {}, have {}",
                amount,
                sender.balance,
            )
            if amount > DAILY_LIMIT:
                raise DailyLimitExceeded(amount)

            sender.balance -= amount
            sender.transaction_count += 1
            to.balance += amount
            to.transaction_count += 1

            ensuref(
                sender.balance + to.balance == ctx.from_balance + ctx.to_balance,
                "Balance conservation failed: before={}, after={}",
                ctx.from_balance + ctx.to_balance,
                sender.balance + to.balance,
            )
            ensure(to.balance >= 0, "Recipient balance must not be negative")

        run_strict(self, old, body)

    @contract_method()
    def close(self, old: None) -> None:
        require_ctx(self.balance == 0, "self.balance == 0")
        self.is_active = False
        ensure_ctx(not self.is_active, "not self.is_active")

    @contract_method(
        snapshot=lambda self, amounts: OldState(balance=self.balance),
        mode=ContractMode.ERROR_TOLERANT,
    )
    def deposit_batch(self, old: OldState, amounts: Iterable[int]) -> int:
        """Deposit each amount in turn, stopping at the first one over the limit.

        Deposits applied before the failing one are kept; the exception
        propagates to the caller, who reconciles the partial batch.
        """
        require(self.is_active, "Account must be active for deposits")
        applied = 0
        for amount in amounts:
            require(amount, Positive(), "Deposit amount must be positive")
            if amount > DAILY_LIMIT:
                raise DailyLimitExceeded(amount)
            self.balance += amount
            self.transaction_count += 1
            applied += amount

        ensure(self.balance == old.balance + applied, "Batch total mismatch")
        return applied
