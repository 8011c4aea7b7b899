"""
dbcore demo subjects.

Small data structures written against the public dbcore API, used by
``dbcore demo`` and as worked examples of each contract style.

Usage:
    # Run every scenario
    dbcore demo

    # Run one
    dbcore demo bank
"""

__all__ = [
    "BoundedQueue",
    "BankAccount",
    "DailyLimitExceeded",
    "DEMOS",
]


def __getattr__(name: str):
    if name == "BoundedQueue":
        from dbcore.demo.queue import BoundedQueue
        return BoundedQueue
    if name in ("BankAccount", "DailyLimitExceeded"):
        from dbcore.demo import bank
        return getattr(bank, name)
    if name == "DEMOS":
        from dbcore.demo.scenarios import DEMOS
        return DEMOS
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
