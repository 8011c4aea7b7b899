"""
Old-state snapshots for postcondition comparisons.

Callers capture the fields their postconditions need *before* the body
mutates the subject and hand the snapshot to the executor, which passes it
into the body untouched.

Usage::

    old = OldState(balance=account.balance, amount=amount)
    old.balance          # 100
    old.balance = 0      # raises pydantic.ValidationError (frozen)
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class OldState(BaseModel):
    """Immutable aggregate of arbitrary named fields.

    Values are stored as given: a snapshot of a mutable object still refers
    to that object, so copy lists or dicts yourself when the postcondition
    compares against their previous contents.

    Field names that collide with a model attribute (``copy``, ``json``,
    ``model_dump``, ``as_dict``, ...) would be unreadable through attribute
    access and are rejected.
    """

    model_config = ConfigDict(extra="allow", frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def reject_shadowed_names(cls, data: Any) -> Any:
        if isinstance(data, dict):
            shadowed = sorted(k for k in data if hasattr(cls, k))
            if shadowed:
                raise ValueError(
                    f"OldState field names shadow model attributes: {', '.join(shadowed)}"
                )
        return data

    def as_dict(self) -> dict[str, Any]:
        """Return the captured fields as a plain dict."""
        return dict(self.model_extra or {})

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"OldState({fields})"
