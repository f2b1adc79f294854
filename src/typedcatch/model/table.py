"""Dispatch arms and the ordered table that holds them."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from .patterns import Pattern, binding_names
from .types import TypeTag


class DispatchArm(BaseModel):
    """One ``type, pattern => handler`` clause.

    The handler is called with the pattern's bindings as keyword arguments.
    A handler whose signature cannot accept those keywords is rejected here,
    not at dispatch time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag: TypeTag
    pattern: Pattern
    handler: Callable[..., Any]

    @model_validator(mode="after")
    def _handler_accepts_bindings(self):
        try:
            signature = inspect.signature(self.handler)
        except (TypeError, ValueError):
            # Some builtins expose no signature; nothing to check.
            return self
        names = binding_names(self.pattern)
        try:
            signature.bind(**dict.fromkeys(names))
        except TypeError as exc:
            handler_name = getattr(self.handler, "__qualname__", repr(self.handler))
            raise ValueError(
                f"handler {handler_name} cannot accept bindings {names}: {exc}"
            ) from None
        return self

    @property
    def bindings(self) -> list[str]:
        """Names the handler receives, in pattern order."""
        return binding_names(self.pattern)


class DispatchTable(BaseModel):
    """Ordered, immutable sequence of arms.  Earlier arms win."""

    model_config = ConfigDict(frozen=True)

    arms: tuple[DispatchArm, ...] = ()

    @classmethod
    def of(cls, *arms: DispatchArm) -> DispatchTable:
        return cls(arms=arms)
