"""
dbcore - Design-by-Contract checks for Python.

Preconditions, postconditions and object invariants, enforced at runtime
around a method body, with an "old state" snapshot for postconditions that
compare against the state before the call. The whole apparatus collapses to
direct calls when the process runs with the unchecked profile
(``DBCORE_PROFILE=unchecked`` or ``python -O``).

Example usage:
    from dbcore import OldState, ensure, require, requiref, run_strict

    class Account:
        def __init__(self, balance):
            self.balance = balance

        def invariant(self):
            require(self.balance >= 0, "Balance must not go negative")

        def withdraw(self, amount):
            old = OldState(balance=self.balance)

            def body(old, account):
                requiref(amount <= account.balance,
                         "Insufficient funds: requested {}, available {}",
                         amount, account.balance)
                account.balance -= amount
                ensure(account.balance == old.balance - amount,
                       "Withdrawal calculation error")

            return run_strict(self, old, body)
"""

from dbcore.config import get_config
from dbcore.errors import (
    ContractViolationError,
    InvariantError,
    PostconditionError,
    PreconditionError,
)
from dbcore.invariant import HasInvariant
from dbcore.profile import ACTIVE, ACTIVE_PROFILE, ContractSet, contracts_for
from dbcore.state import OldState
from dbcore.types import BuildProfile, Checkpoint, ContractKind, ContractMode
from dbcore.validators import Validator, as_predicate

__version__ = "0.1.0"

CHECKED: bool = ACTIVE.checked

require = ACTIVE.require
ensure = ACTIVE.ensure
requiref = ACTIVE.requiref
ensuref = ACTIVE.ensuref
require_ctx = ACTIVE.require_ctx
ensure_ctx = ACTIVE.ensure_ctx
run_strict = ACTIVE.run_strict
run_error_tolerant = ACTIVE.run_error_tolerant
run_contract = ACTIVE.run_contract
contract_method = ACTIVE.contract_method

__all__ = [
    # Assertion primitives
    "require",
    "ensure",
    "requiref",
    "ensuref",
    "require_ctx",
    "ensure_ctx",
    # Executor
    "run_strict",
    "run_error_tolerant",
    "run_contract",
    "contract_method",
    "OldState",
    # Build-mode gate
    "ACTIVE_PROFILE",
    "CHECKED",
    "ContractSet",
    "contracts_for",
    # Types
    "BuildProfile",
    "Checkpoint",
    "ContractKind",
    "ContractMode",
    # Errors
    "ContractViolationError",
    "PreconditionError",
    "PostconditionError",
    "InvariantError",
    # Capabilities
    "HasInvariant",
    "Validator",
    "as_predicate",
    "get_config",
    "__version__",
]
