"""
Structural invariant capability.

A subject opts in by defining ``invariant(self)``, usually as a series of
``require``/``ensure`` calls. No base class or registration is needed: the
executor looks the method up on the subject's type and treats a missing one
as a trivially true invariant.

Example::

    class BoundedQueue:
        def invariant(self) -> None:
            require(self.count <= self.capacity, "Queue count exceeds capacity")
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from dbcore.assertions import report_violation
from dbcore.errors import ContractViolationError, InvariantError
from dbcore.types import Checkpoint

logger = logging.getLogger(__name__)


@runtime_checkable
class HasInvariant(Protocol):
    """Subjects exposing an invariant check."""

    def invariant(self) -> Any:
        ...


# Per-type lookup results; entries go away with the class.
_invariant_cache: weakref.WeakKeyDictionary[type, Optional[Callable[[Any], Any]]] = (
    weakref.WeakKeyDictionary()
)


def find_invariant(cls: type) -> Optional[Callable[[Any], Any]]:
    """Return the ``invariant`` function of ``cls``, or None.

    Resolved once per type.
    """
    try:
        return _invariant_cache[cls]
    except KeyError:
        pass

    candidate = getattr(cls, "invariant", None)
    found = candidate if callable(candidate) else None
    _invariant_cache[cls] = found
    return found


def check_invariant(subject: Any, checkpoint: Checkpoint) -> None:
    """Run the subject's invariant, if it has one.

    A violation raised inside the invariant is re-raised as
    :class:`InvariantError` naming the subject type and checkpoint. An
    invariant that returns ``False`` explicitly also fails. Any other
    exception propagates unchanged.
    """
    cls = type(subject)
    invariant = find_invariant(cls)
    if invariant is None:
        return

    subject_type = cls.__qualname__
    logger.debug("Checking invariant of %s on %s", subject_type, checkpoint.value)
    try:
        outcome = invariant(subject)
    except InvariantError:
        raise
    except ContractViolationError as exc:
        error = InvariantError(subject_type, checkpoint, exc.message, cause=exc)
        report_violation(error)
        raise error from exc

    if outcome is False:
        error = InvariantError(subject_type, checkpoint, "invariant returned False")
        report_violation(error)
        raise error
