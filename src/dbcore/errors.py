"""
Contract violation errors.

Violations subclass ``AssertionError``: they signal a defect in the calling
code or in the subject's state, not a recoverable runtime condition, and are
never converted into return values by dbcore. Ordinary exceptions raised by a
contracted body travel on a separate channel and are left untouched.
"""

from __future__ import annotations

from typing import Optional

from dbcore.types import Checkpoint, ContractKind


class ContractViolationError(AssertionError):
    """Base class for every failed precondition, postcondition or invariant."""

    kind: ContractKind = ContractKind.PRECONDITION

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PreconditionError(ContractViolationError):
    """Raised when a ``require*`` check fails."""

    kind = ContractKind.PRECONDITION


class PostconditionError(ContractViolationError):
    """Raised when an ``ensure*`` check fails."""

    kind = ContractKind.POSTCONDITION


class InvariantError(ContractViolationError):
    """Raised when a subject's invariant fails at a contract checkpoint."""

    kind = ContractKind.INVARIANT

    def __init__(
        self,
        subject_type: str,
        checkpoint: Checkpoint,
        message: str,
        cause: Optional[ContractViolationError] = None,
    ) -> None:
        self.subject_type = subject_type
        self.checkpoint = checkpoint
        self.detail = message
        self.cause = cause
        super().__init__(
            f"Invariant of {subject_type} violated on {checkpoint.value}: {message}"
        )

    def __reduce__(self):
        return (
            type(self),
            (self.subject_type, self.checkpoint, self.detail, self.cause),
        )
