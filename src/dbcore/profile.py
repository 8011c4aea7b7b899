"""
Build-mode gate.

The checking profile is resolved once, when ``dbcore`` is imported, and the
public names (``require``, ``run_strict``, ...) are bound to the matching
implementations right there. There is no per-call test of the profile:

- **checked**: the names point at ``dbcore.assertions`` and the checked
  runners in ``dbcore.executor``.
- **unchecked**: every assertion primitive is the same no-op and every runner
  calls the body directly. Conditions passed to a primitive are still
  evaluated by Python at the call site; wrap an expensive one in
  ``if dbcore.CHECKED:`` (or ``if __debug__:``, which ``python -O`` strips at
  compile time) when that matters.

Profile sources, via ``DBCORE_PROFILE``:

- ``auto`` (default): checked, unless the interpreter runs with ``-O``.
- ``checked`` / ``debug`` / ``safe`` / ``small``
- ``unchecked`` / ``fast`` / ``release``

Usage::

    from dbcore.profile import contracts_for
    from dbcore.types import BuildProfile

    fast = contracts_for(BuildProfile.UNCHECKED)
    fast.require(False, "never raised")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from dbcore import assertions, executor
from dbcore.config import DbcConfig, get_config
from dbcore.types import BuildProfile

logger = logging.getLogger(__name__)


def resolve_profile(config: Optional[DbcConfig] = None) -> BuildProfile:
    """Map the configured profile onto a :class:`BuildProfile`."""
    config = config or get_config()
    if config.profile == "auto":
        return BuildProfile.CHECKED if __debug__ else BuildProfile.UNCHECKED
    return BuildProfile(config.profile)


def _skip(*_args: Any, **_kwargs: Any) -> None:
    """Stand-in for every assertion primitive under the unchecked profile."""


@dataclass(frozen=True)
class ContractSet:
    """Every contract primitive and runner for one profile."""

    profile: BuildProfile
    require: Callable[..., None]
    ensure: Callable[..., None]
    requiref: Callable[..., None]
    ensuref: Callable[..., None]
    require_ctx: Callable[..., None]
    ensure_ctx: Callable[..., None]
    run_strict: Callable[..., Any]
    run_error_tolerant: Callable[..., Any]
    run_contract: Callable[..., Any]
    contract_method: Callable[..., Callable]

    @property
    def checked(self) -> bool:
        return self.profile is BuildProfile.CHECKED


_CHECKED = ContractSet(
    profile=BuildProfile.CHECKED,
    require=assertions.require,
    ensure=assertions.ensure,
    requiref=assertions.requiref,
    ensuref=assertions.ensuref,
    require_ctx=assertions.require_ctx,
    ensure_ctx=assertions.ensure_ctx,
    run_strict=executor.run_strict,
    run_error_tolerant=executor.run_error_tolerant,
    run_contract=executor.run_contract,
    contract_method=executor.make_contract_method(executor.run_contract),
)

_UNCHECKED = ContractSet(
    profile=BuildProfile.UNCHECKED,
    require=_skip,
    ensure=_skip,
    requiref=_skip,
    ensuref=_skip,
    require_ctx=_skip,
    ensure_ctx=_skip,
    run_strict=executor.run_unchecked,
    run_error_tolerant=executor.run_unchecked,
    run_contract=executor.run_contract_unchecked,
    contract_method=executor.make_contract_method(executor.run_contract_unchecked),
)


def contracts_for(profile: BuildProfile | str) -> ContractSet:
    """Return the primitives bound to ``profile``."""
    if BuildProfile(profile) is BuildProfile.CHECKED:
        return _CHECKED
    return _UNCHECKED


ACTIVE_PROFILE: BuildProfile = resolve_profile()
ACTIVE: ContractSet = contracts_for(ACTIVE_PROFILE)

logger.debug("dbcore profile resolved to %s", ACTIVE_PROFILE.value)
