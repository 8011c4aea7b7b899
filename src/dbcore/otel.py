"""
OTel span event emission for contract violations.

Every violation raised by dbcore is also recorded on the current span, so a
failing precondition shows up next to the request or task that triggered it.
Nothing is emitted when the current span is not recording or when
``DBCORE_EMIT_SPAN_EVENTS`` is false.

Usage::

    from dbcore.otel import emit_violation

    emit_violation(error)
"""

from __future__ import annotations

from opentelemetry import trace as otel_trace

from dbcore.config import get_config
from dbcore.errors import ContractViolationError, InvariantError
from dbcore.types import BuildProfile

VIOLATION_EVENT = "dbc.contract.violation"


def add_span_event(
    name: str, attributes: dict[str, str | int | float | bool]
) -> None:
    """Add an event to the current OTel span if it is recording.

    Args:
        name: Event name (e.g. ``"dbc.contract.violation"``).
        attributes: Flat dict of span event attributes.
    """
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_violation(error: ContractViolationError) -> None:
    """Emit a span event describing a contract violation.

    Event name: ``dbc.contract.violation``
    """
    if not get_config().emit_span_events:
        return

    attrs: dict[str, str | int | float | bool] = {
        "dbc.kind": error.kind.value,
        "dbc.message": error.message,
        # Violations can only be raised by the checked implementations.
        "dbc.profile": BuildProfile.CHECKED.value,
    }
    if isinstance(error, InvariantError):
        attrs["dbc.subject_type"] = error.subject_type
        attrs["dbc.checkpoint"] = error.checkpoint.value

    add_span_event(VIOLATION_EVENT, attrs)
