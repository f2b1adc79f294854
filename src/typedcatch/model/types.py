"""Runtime type identity for dispatch arms.

A ``TypeTag`` stands for one static type named by a catch arm.  Checking a
payload against it never converts or reinterprets the payload: the check is
``type(value) is target`` (or ``isinstance`` when exactness is relaxed).

Homogeneous sequence types are supported the only way Python can express
them at runtime: ``list[str]`` and ``tuple[int, ...]`` record an *element*
type, and every item of the payload must carry it.  An empty sequence
therefore satisfies any element type.
"""

from __future__ import annotations

import typing
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


_SEQUENCE_TARGETS = (list, tuple)


class TypeTag(BaseModel):
    """Identity token for one static type referenced by a dispatch table.

    Two tags compare equal iff they denote the same type.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: type
    element: type | None = None

    @model_validator(mode="after")
    def _element_needs_sequence(self):
        if self.element is not None and self.target not in _SEQUENCE_TARGETS:
            raise ValueError(
                f"element type only applies to list or tuple, "
                f"not {self.target.__name__}"
            )
        return self

    @classmethod
    def of(cls, annotation: Any) -> TypeTag:
        """Build a tag from a class, ``list[X]``, ``tuple[X, ...]`` or a tag."""
        if isinstance(annotation, TypeTag):
            return annotation

        origin = typing.get_origin(annotation)
        if origin is None:
            if not isinstance(annotation, type):
                raise TypeError(
                    f"TypeTag.of() expects a class or a list/tuple alias, "
                    f"got {annotation!r}"
                )
            return cls(target=annotation)

        args = typing.get_args(annotation)
        if origin is list and len(args) == 1:
            element = args[0]
        elif origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            element = args[0]
        else:
            raise TypeError(f"Unsupported type annotation: {annotation!r}")

        if not isinstance(element, type):
            raise TypeError(
                f"Sequence element type must be a class, got {element!r}"
            )
        return cls(target=origin, element=element)

    @property
    def name(self) -> str:
        if self.element is None:
            return self.target.__name__
        if self.target is tuple:
            return f"tuple[{self.element.__name__}, ...]"
        return f"{self.target.__name__}[{self.element.__name__}]"

    def matches(self, value: object, *, exact: bool = True) -> bool:
        """Answer whether *value*'s runtime type is the tagged type."""
        if exact:
            if type(value) is not self.target:
                return False
        elif not isinstance(value, self.target):
            return False

        if self.element is None:
            return True
        if exact:
            return all(type(item) is self.element for item in value)
        return all(isinstance(item, self.element) for item in value)
