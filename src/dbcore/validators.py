"""
Reusable validators for the value form of ``require`` / ``ensure``.

A validator is either a plain callable ``value -> bool`` or an object that
exposes a ``run(value) -> bool`` method. Both shapes collapse into a single
predicate through :func:`as_predicate`, so the assertion primitives never
have to care which one they were given.

Usage::

    from dbcore import require
    from dbcore.validators import InRange

    require(port, InRange(1, 65535), "port out of range")
    require(name, str.isidentifier, "name must be an identifier")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeVar, Union, runtime_checkable

T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class Validator(Protocol[T_contra]):
    """Capability object exposing ``run(value) -> bool``."""

    def run(self, value: T_contra) -> bool:
        ...


ValidatorLike = Union[Validator[Any], Callable[[Any], bool]]


def as_predicate(validator: ValidatorLike) -> Callable[[Any], bool]:
    """Return the predicate behind a validator.

    A callable ``run`` attribute wins over calling the object itself. A
    validator *class* (rather than an instance) is rejected, since calling it
    would just build a truthy instance.

    Raises:
        TypeError: if ``validator`` is neither callable nor has ``run``,
            or is a class defining ``run``.
    """
    if isinstance(validator, type):
        if callable(getattr(validator, "run", None)):
            raise TypeError(
                f"Validator {validator.__name__} is a class; pass an instance"
            )
        return validator
    run = getattr(validator, "run", None)
    if callable(run):
        return run
    if callable(validator):
        return validator
    raise TypeError(
        "Validator must be callable or expose a 'run' method, "
        f"got {type(validator).__name__}"
    )


# ---------------------------------------------------------------------------
# Stock validators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Positive:
    """Accepts numbers strictly greater than zero."""

    def run(self, value: Any) -> bool:
        return value > 0


@dataclass(frozen=True)
class InRange:
    """Accepts values with ``min <= value <= max``."""

    min: Any
    max: Any

    def run(self, value: Any) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class LongerThan:
    """Accepts sized values whose length exceeds ``min_len``."""

    min_len: int

    def run(self, value: Any) -> bool:
        return len(value) > self.min_len
