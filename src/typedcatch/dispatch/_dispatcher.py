"""Dispatcher: capture, walk the table, run the first matching handler.

Per invocation the dispatcher moves through ``DispatchState``::

    RUNNING -> COMPLETED
    RUNNING -> CAPTURED -> MATCHING(0) -> ... -> MATCHED | EXHAUSTED

``COMPLETED`` and ``MATCHED`` return a value; ``EXHAUSTED`` re-raises the
captured exception object unchanged.  Transitions are logged at DEBUG on
the ``typedcatch.dispatch`` logger.

The handler runs outside the capture boundary, so anything it raises
propagates past the dispatcher untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from typedcatch.export.source import to_arm_source
from typedcatch.model.table import DispatchArm, DispatchTable

from ._capture import Captured, Completed, capture
from ._config import DispatcherConfig
from ._matcher import PatternMatcher

logger = logging.getLogger("typedcatch.dispatch")
logger.addHandler(logging.NullHandler())

T = TypeVar("T")


class DispatchState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CAPTURED = "captured"
    MATCHING = "matching"
    MATCHED = "matched"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ArmMatch:
    """The winning arm of a table walk and the bindings it produced."""

    index: int
    arm: DispatchArm
    bindings: dict[str, object]


class Dispatcher:
    """Runs protected callables against dispatch tables.

    Parameters
    ----------
    config : DispatcherConfig, optional
        Passthrough exception types and type-exactness.  Defaults apply
        when omitted.
    """

    def __init__(self, config: DispatcherConfig | None = None) -> None:
        self.config = config or DispatcherConfig()
        self.matcher = PatternMatcher()

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def dispatch(self, protected: Callable[[], T], table: DispatchTable) -> T:
        """Run *protected*; on a raise, hand the payload to *table*.

        Returns the protected value, or the winning handler's value.  When
        no arm matches, the original exception propagates.
        """
        logger.debug("%s", DispatchState.RUNNING.value)
        result = capture(protected, self.config.passthrough)
        if isinstance(result, Completed):
            logger.debug("%s: no arms evaluated", DispatchState.COMPLETED.value)
            return result.value
        return self.dispatch_captured(result, table)

    def dispatch_captured(self, captured: Captured, table: DispatchTable) -> T:
        """Dispatch an already-captured payload (real or synthetic)."""
        payload = captured.payload
        logger.debug(
            "%s: payload of type %s", DispatchState.CAPTURED.value,
            type(payload).__name__,
        )

        found = self.select(payload, table)
        if found is None:
            logger.debug(
                "%s: %d arm(s) tried, re-raising %s",
                DispatchState.EXHAUSTED.value, len(table.arms),
                type(captured.error).__name__,
            )
            captured.reraise()

        logger.debug(
            "%s: arm %d with bindings %s",
            DispatchState.MATCHED.value, found.index, sorted(found.bindings),
        )
        return found.arm.handler(**found.bindings)

    def select(self, payload: object, table: DispatchTable) -> ArmMatch | None:
        """Find the first arm whose type and pattern both match *payload*.

        Arms after the winner are never evaluated.
        """
        exact = self.config.exact_types
        for index, arm in enumerate(table.arms):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "%s(%d): %s", DispatchState.MATCHING.value, index,
                    to_arm_source(arm),
                )
            if not arm.tag.matches(payload, exact=exact):
                logger.debug("arm %d: type mismatch", index)
                continue
            bindings = self.matcher.match(arm.pattern, payload)
            if bindings is None:
                logger.debug("arm %d: pattern mismatch", index)
                continue
            return ArmMatch(index=index, arm=arm, bindings=bindings)
        return None
