"""typedcatch dispatch engine: capture a raise, match it, handle or re-raise.

Entry point::

    from typedcatch.dispatch import dispatch

    result = dispatch(lambda: risky(), table)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from typedcatch.model.table import DispatchTable

from ._capture import (
    CaptureResult,
    Captured,
    Completed,
    Panic,
    capture,
    panic_any,
    payload_of,
)
from ._config import DispatcherConfig
from ._dispatcher import ArmMatch, Dispatcher, DispatchState
from ._matcher import DispatchError, PatternMatcher, match_pattern

T = TypeVar("T")


def dispatch(
    protected: Callable[[], T],
    table: DispatchTable,
    *,
    config: DispatcherConfig | None = None,
) -> T:
    """Run *protected* under *table*.

    Parameters
    ----------
    protected
        Zero-argument callable.  Its return value is returned unchanged
        when it does not raise.
    table
        Ordered arms tried against the captured payload.
    config
        Optional ``DispatcherConfig``.

    Returns
    -------
    object
        The protected value or the first matching handler's value.  When
        no arm matches, the original exception propagates instead.

    Notes
    -----
    Only resumable unwinds can be dispatched.  Exceptions listed in
    ``config.passthrough`` (by default ``KeyboardInterrupt``, ``SystemExit``
    and ``GeneratorExit``) are never captured.
    """
    return Dispatcher(config).dispatch(protected, table)


__all__ = [
    "ArmMatch",
    "CaptureResult",
    "Captured",
    "Completed",
    "DispatchError",
    "DispatchState",
    "Dispatcher",
    "DispatcherConfig",
    "Panic",
    "PatternMatcher",
    "capture",
    "dispatch",
    "match_pattern",
    "panic_any",
    "payload_of",
]
