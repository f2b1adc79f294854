"""Dispatcher configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ._capture import DEFAULT_PASSTHROUGH


class DispatcherConfig(BaseModel):
    """Settings for a ``Dispatcher``.

    passthrough
        Exception types treated as non-resumable unwinds.  They escape the
        protected callable uncaptured and no arm ever sees them.
    exact_types
        When True (default) an arm's type must be the payload's exact type.
        When False, subclasses match too, so ``OSError`` catches
        ``FileNotFoundError``.
    """

    model_config = ConfigDict(frozen=True)

    passthrough: tuple[type[BaseException], ...] = DEFAULT_PASSTHROUGH
    exact_types: bool = True
