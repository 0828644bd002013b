"""Deterministic reconciliation policy.

This module contains no state.  The store decides *whether* a pending
value is still live; the functions here decide what that means for an
incoming value.
"""

from __future__ import annotations

from typing import Any


def is_expired(now: float, set_at: float, cooldown: float) -> bool:
    return now - set_at >= cooldown


def values_match(pending: Any, incoming: Any) -> bool:
    """Strict equality: same type and equal value.

    No coercion is performed, so ``"10"`` and ``10`` differ, as do
    ``1`` and ``True``.
    """
    return type(pending) is type(incoming) and pending == incoming


def resolve_incoming(pending: Any, incoming: Any) -> Any:
    """Pick the value to commit when a live pending value exists."""
    # Converged values keep the incoming object; the guard stays in place.
    if values_match(pending, incoming):
        return incoming
    return pending
