"""Scripted demo runs used by ``dbcore demo``."""

from __future__ import annotations

from typing import Callable, Dict, List

from dbcore import CHECKED
from dbcore.demo.bank import BankAccount, DailyLimitExceeded
from dbcore.demo.queue import BoundedQueue


def run_queue_demo() -> List[str]:
    lines = [f"Bounded queue (contracts active: {CHECKED})"]
    q = BoundedQueue(3)
    q.enqueue(10)
    q.enqueue(20)
    lines.append(f"Dequeued: {q.dequeue()}")
    lines.append(f"Dequeued: {q.dequeue()}")
    lines.append(f"Remaining: {len(q)}")
    return lines


def run_bank_demo() -> List[str]:
    lines = [f"Banking system (contracts active: {CHECKED})"]
    account1 = BankAccount(12345)
    account2 = BankAccount(67890)

    account1.deposit(1000)
    account2.deposit(500)
    lines.append(f"Account 1 balance: {account1.balance}")
    lines.append(f"Account 2 balance: {account2.balance}")

    account1.transfer(account2, 250)
    lines.append(
        f"After transfer - Account 1: {account1.balance}, "
        f"Account 2: {account2.balance}"
    )

    account1.withdraw(100)
    lines.append(f"After withdrawal - Account 1: {account1.balance}")

    try:
        account2.deposit_batch([100, 200, 75_000, 300])
    except DailyLimitExceeded as exc:
        lines.append(f"Batch stopped: {exc}")
    lines.append(f"After partial batch - Account 2: {account2.balance}")
    return lines


DEMOS: Dict[str, Callable[[], List[str]]] = {
    "queue": run_queue_demo,
    "bank": run_bank_demo,
}
