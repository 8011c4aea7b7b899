"""
Core enums shared by the dbcore modules.

Usage::

    from dbcore.types import BuildProfile, ContractMode

    if profile is BuildProfile.CHECKED:
        ...
"""

from __future__ import annotations

from enum import Enum


class ContractMode(str, Enum):
    """How the exit invariant is gated relative to a failing body.

    STRICT
        The exit invariant runs whether the body returned or raised an
        ordinary exception.

    ERROR_TOLERANT
        The exit invariant runs only when the body returned. A body
        exception propagates as-is and any partial mutation is kept.
    """

    STRICT = "strict"
    ERROR_TOLERANT = "error_tolerant"


class BuildProfile(str, Enum):
    """Process-wide checking profile, fixed once at import time."""

    CHECKED = "checked"
    UNCHECKED = "unchecked"


class ContractKind(str, Enum):
    """Which part of a contract was violated."""

    PRECONDITION = "precondition"
    POSTCONDITION = "postcondition"
    INVARIANT = "invariant"


class Checkpoint(str, Enum):
    """Where an invariant is checked during a contract invocation."""

    ENTRY = "entry"
    EXIT = "exit"

