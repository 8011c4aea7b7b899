"""
Checking implementations of the assertion primitives.

These are the bodies bound to ``dbcore.require`` and friends when the
process runs with the ``checked`` profile. Under ``unchecked`` the same names
point at a no-op instead (see ``dbcore.profile``), so nothing in this module
runs at all.

Three call shapes, each with a postcondition twin:

- ``require(condition, message)``
- ``require(value, validator, message)``
- ``requiref(condition, template, *args, **kwargs)`` (formatted on failure only)
- ``require_ctx(condition, expr_text)``

A failed check raises :class:`~dbcore.errors.PreconditionError` or
:class:`~dbcore.errors.PostconditionError` immediately.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, NoReturn, TypeVar, overload

from dbcore.errors import (
    ContractViolationError,
    PostconditionError,
    PreconditionError,
)
from dbcore.otel import emit_violation
from dbcore.validators import Validator, as_predicate

logger = logging.getLogger(__name__)

V = TypeVar("V")

_UNSET: Any = object()


def report_violation(error: ContractViolationError) -> None:
    """Log and emit a span event for a violation about to be raised."""
    logger.warning("Contract %s violated: %s", error.kind.value, error.message)
    emit_violation(error)


def _fail(error_cls: type[ContractViolationError], message: str) -> NoReturn:
    error = error_cls(message)
    report_violation(error)
    raise error


def _check(
    error_cls: type[ContractViolationError],
    name: str,
    condition_or_value: Any,
    message_or_validator: Any,
    message: Any,
) -> None:
    if message is _UNSET:
        if not isinstance(message_or_validator, str):
            raise TypeError(
                f"{name}(condition, message) expects a str message, got "
                f"{type(message_or_validator).__name__}; the validator form "
                f"is {name}(value, validator, message)"
            )
        if not condition_or_value:
            _fail(error_cls, message_or_validator)
        return

    if not isinstance(message, str):
        raise TypeError(
            f"{name}(value, validator, message) expects a str message, got "
            f"{type(message).__name__}"
        )
    predicate = as_predicate(message_or_validator)
    if not predicate(condition_or_value):
        _fail(error_cls, message)


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


@overload
def require(condition: bool, message: str, /) -> None: ...


@overload
def require(
    value: V, validator: Validator[V] | Callable[[V], bool], message: str, /
) -> None: ...


def require(
    condition_or_value: Any, message_or_validator: Any, message: Any = _UNSET, /
) -> None:
    """Assert a precondition.

    With two arguments the first is the condition and the second the
    message. With three, the validator is applied to the value. A validator
    that raises propagates its exception unchanged.

    Raises:
        PreconditionError: if the condition or validator is falsy.
        TypeError: if the message is not a string or the validator has an
            unsupported shape.
    """
    _check(
        PreconditionError, "require", condition_or_value, message_or_validator, message
    )


def requiref(condition: Any, template: str, /, *args: Any, **kwargs: Any) -> None:
    """Assert a precondition with a ``str.format`` message.

    The template is only formatted when the condition is false.

    Example::

        requiref(amount <= balance,
                 "Insufficient funds: requested {}, available {}",
                 amount, balance)
    """
    if not condition:
        _fail(PreconditionError, template.format(*args, **kwargs))


def require_ctx(condition: Any, expr_text: str, /) -> None:
    """Assert a precondition, reporting the given expression text."""
    if not condition:
        _fail(PreconditionError, f"Precondition failed: {expr_text}")


# ---------------------------------------------------------------------------
# Postconditions
# ---------------------------------------------------------------------------


@overload
def ensure(condition: bool, message: str, /) -> None: ...


@overload
def ensure(
    value: V, validator: Validator[V] | Callable[[V], bool], message: str, /
) -> None: ...


def ensure(
    condition_or_value: Any, message_or_validator: Any, message: Any = _UNSET, /
) -> None:
    """Assert a postcondition. Same call shapes as :func:`require`.

    Raises:
        PostconditionError: if the condition or validator is falsy.
    """
    _check(
        PostconditionError, "ensure", condition_or_value, message_or_validator, message
    )


def ensuref(condition: Any, template: str, /, *args: Any, **kwargs: Any) -> None:
    """Postcondition twin of :func:`requiref`."""
    if not condition:
        _fail(PostconditionError, template.format(*args, **kwargs))


def ensure_ctx(condition: Any, expr_text: str, /) -> None:
    """Postcondition twin of :func:`require_ctx`."""
    if not condition:
        _fail(PostconditionError, f"Postcondition failed: {expr_text}")
