"""
Contract executor: invariant bracketing around a method body.

The checked runners call the subject's invariant on entry, run the body
with the old-state snapshot, then check the invariant again on exit
according to the :class:`~dbcore.types.ContractMode`:

- **strict** checks the exit invariant whether the body returned or raised
  an ordinary exception, then returns or re-raises.
- **error_tolerant** checks the exit invariant only when the body returned;
  a body exception propagates unchanged and partial mutation is kept.

A contract violation raised inside the body is an abort in both modes: it
propagates immediately and the exit invariant is not checked. The same holds
for exceptions outside the ``Exception`` hierarchy (``KeyboardInterrupt``,
``SystemExit``, ``GeneratorExit``).

The unchecked runner calls the body directly. Which runner ``dbcore``
exposes is decided once, at import time, by ``dbcore.profile``.

Usage::

    def withdraw(self, amount):
        old = OldState(balance=self.balance)

        def body(old, account):
            requiref(amount <= account.balance,
                     "Insufficient funds: requested {}, available {}",
                     amount, account.balance)
            account.balance -= amount
            ensure(account.balance == old.balance - amount, "Withdrawal error")

        return run_strict(self, old, body)
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional, TypeVar

from dbcore.errors import ContractViolationError
from dbcore.invariant import check_invariant
from dbcore.types import Checkpoint, ContractMode

S = TypeVar("S")
O = TypeVar("O")
R = TypeVar("R")

Body = Callable[[O, S], R]
Runner = Callable[..., Any]


def _coerce_mode(mode: ContractMode | str) -> ContractMode:
    return ContractMode(mode) if isinstance(mode, str) else mode


# ---------------------------------------------------------------------------
# Checked runners
# ---------------------------------------------------------------------------


def run_strict(subject: S, old_state: O, body: Body[O, S, R]) -> R:
    """Run ``body(old_state, subject)`` with strict invariant bracketing.

    Only ``Exception`` subclasses other than contract violations trigger the
    exit check on the failure path.
    """
    check_invariant(subject, Checkpoint.ENTRY)
    try:
        result = body(old_state, subject)
    except ContractViolationError:
        raise
    except Exception:
        check_invariant(subject, Checkpoint.EXIT)
        raise
    check_invariant(subject, Checkpoint.EXIT)
    return result


def run_error_tolerant(subject: S, old_state: O, body: Body[O, S, R]) -> R:
    """Run ``body(old_state, subject)``; skip the exit invariant on failure."""
    check_invariant(subject, Checkpoint.ENTRY)
    result = body(old_state, subject)
    check_invariant(subject, Checkpoint.EXIT)
    return result


def run_contract(
    subject: S,
    old_state: O,
    body: Body[O, S, R],
    mode: ContractMode | str = ContractMode.STRICT,
) -> R:
    """Dispatch to :func:`run_strict` or :func:`run_error_tolerant`."""
    if _coerce_mode(mode) is ContractMode.STRICT:
        return run_strict(subject, old_state, body)
    return run_error_tolerant(subject, old_state, body)


# ---------------------------------------------------------------------------
# Unchecked runners
# ---------------------------------------------------------------------------


def run_unchecked(subject: S, old_state: O, body: Body[O, S, R]) -> R:
    return body(old_state, subject)


def run_contract_unchecked(
    subject: S,
    old_state: O,
    body: Body[O, S, R],
    mode: ContractMode | str = ContractMode.STRICT,
) -> R:
    return body(old_state, subject)


# ---------------------------------------------------------------------------
# Method decorator
# ---------------------------------------------------------------------------


def make_contract_method(runner: Runner) -> Callable[..., Callable]:
    """Build a ``contract_method`` decorator factory bound to ``runner``.

    ``runner`` has the :func:`run_contract` signature.
    """

    def contract_method(
        snapshot: Optional[Callable[..., Any]] = None,
        mode: ContractMode | str = ContractMode.STRICT,
    ) -> Callable[[Callable[..., R]], Callable[..., R]]:
        """Route a method through the contract executor.

        The decorated function receives the old-state snapshot as its second
        argument; callers do not pass it::

            class Counter:
                def invariant(self):
                    require(self.count <= self.capacity, "over capacity")

                @contract_method(snapshot=lambda self: OldState(count=self.count))
                def append(self, old):
                    require(self.count < self.capacity, "counter is full")
                    self.count += 1
                    ensure(self.count == old.count + 1, "count must grow by one")

            Counter().append()

        Args:
            snapshot: Called with the method's arguments (including ``self``)
                to build the old state. Defaults to passing ``None``.
            mode: Enforcement mode for every call.
        """
        resolved = _coerce_mode(mode)

        def decorator(func: Callable[..., R]) -> Callable[..., R]:
            @functools.wraps(func)
            def wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
                old = snapshot(self, *args, **kwargs) if snapshot is not None else None
                return runner(
                    self,
                    old,
                    lambda old_state, subject: func(subject, old_state, *args, **kwargs),
                    resolved,
                )

            return wrapper

        return decorator

    return contract_method
