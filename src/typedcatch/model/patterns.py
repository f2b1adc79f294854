"""Structural patterns matched against a captured payload.

A closed set of variants forming one discriminated union (``Pattern``).
Patterns are pure data: matching lives in ``typedcatch.dispatch._matcher``
and rendering in ``typedcatch.export``.

Binding names must be unique within a pattern.  Violations are rejected when
the pattern is built, so a ``DispatchTable`` can never hold an ambiguous arm.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _check_unique(names: list[str], context: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"duplicate binding name '{name}' in {context}")
        seen.add(name)


# ---------------------------------------------------------------------------
# Leaf patterns
# ---------------------------------------------------------------------------

class WildcardPattern(BaseModel):
    """Matches any value.  Binds it when *name* is given (``x``), else ``_``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["wildcard"] = "wildcard"
    name: str | None = None


class LiteralPattern(BaseModel):
    """Matches a value equal to *value*."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    value: Any


class SingletonPattern(BaseModel):
    """``None``, ``True`` or ``False``: matches by identity, not equality.

    ``[True]`` therefore does not match ``[1]``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["singleton"] = "singleton"
    value: bool | None = Field(default=None, strict=True)


class RangePattern(BaseModel):
    """Inclusive range, like ``1..=5``.  Either bound may be left open."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["range"] = "range"
    lower: Any = None
    upper: Any = None

    @model_validator(mode="after")
    def _bounds_check(self):
        if self.lower is None and self.upper is None:
            raise ValueError("range pattern needs at least one bound")
        if self.lower is not None and self.upper is not None:
            try:
                inverted = self.lower > self.upper
            except TypeError:
                raise ValueError(
                    f"range bounds {self.lower!r} and {self.upper!r} "
                    f"are not comparable"
                ) from None
            if inverted:
                raise ValueError(
                    f"lower ({self.lower!r}) must be <= upper ({self.upper!r})"
                )
        return self


# ---------------------------------------------------------------------------
# Composite patterns
# ---------------------------------------------------------------------------

class CapturePattern(BaseModel):
    """``name @ pattern``: binds the whole value when *pattern* matches."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["capture"] = "capture"
    name: str
    pattern: Pattern

    @model_validator(mode="after")
    def _unique_bindings(self):
        _check_unique(binding_names(self), "capture pattern")
        return self


class AlternativePattern(BaseModel):
    """``p1 | p2 | ...``: the first option that matches wins.

    Every option must bind the same set of names, so the handler sees the
    same bindings whichever option matched.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["alternative"] = "alternative"
    options: tuple[Pattern, ...] = Field(min_length=2)

    @model_validator(mode="after")
    def _same_bindings(self):
        expected = set(binding_names(self.options[0]))
        for option in self.options[1:]:
            names = set(binding_names(option))
            if names != expected:
                raise ValueError(
                    f"alternative options bind different names: "
                    f"{sorted(expected)} vs {sorted(names)}"
                )
        return self


class RestCapture(BaseModel):
    """The ``*rest`` marker of a sequence pattern (``*_`` when unnamed)."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None


class SequencePattern(BaseModel):
    """Positional pattern over a list/tuple.

    Without *rest* the sequence length must equal ``len(prefix)``.  With
    *rest*, *prefix* matches the leading items, *suffix* the trailing items,
    and the rest capture takes whatever lies between (possibly nothing).
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["sequence"] = "sequence"
    prefix: tuple[Pattern, ...] = ()
    rest: RestCapture | None = None
    suffix: tuple[Pattern, ...] = ()

    @model_validator(mode="after")
    def _shape_check(self):
        if self.suffix and self.rest is None:
            raise ValueError("suffix elements require a rest capture")
        _check_unique(binding_names(self), "sequence pattern")
        return self

    @property
    def fixed_count(self) -> int:
        """Number of positions matched one-to-one."""
        return len(self.prefix) + len(self.suffix)


class AttributePattern(BaseModel):
    """Struct-style pattern: ``Point(x=0, y=y)``.

    Matches an instance of *cls* (any object when *cls* is None) whose named
    attributes all exist and match their sub-patterns.
    *attributes* holds ``(name, pattern)`` pairs in source order; a mapping
    is accepted on construction.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["attributes"] = "attributes"
    cls: type | None = None
    attributes: tuple[tuple[str, Pattern], ...] = ()

    @field_validator("attributes", mode="before")
    @classmethod
    def _pairs_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @model_validator(mode="after")
    def _unique_bindings(self):
        seen: set[str] = set()
        for name, _ in self.attributes:
            if name in seen:
                raise ValueError(f"attribute '{name}' repeated in attribute pattern")
            seen.add(name)
        _check_unique(binding_names(self), "attribute pattern")
        return self


Pattern = Annotated[
    Union[
        WildcardPattern,
        LiteralPattern,
        SingletonPattern,
        RangePattern,
        CapturePattern,
        AlternativePattern,
        SequencePattern,
        AttributePattern,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Binding names
# ---------------------------------------------------------------------------

def binding_names(pattern: Any) -> list[str]:
    """Names bound by *pattern*, in source order.

    For an alternative, the names of its first option (all options bind the
    same set).
    """
    if isinstance(pattern, WildcardPattern):
        return [pattern.name] if pattern.name is not None else []
    if isinstance(pattern, (LiteralPattern, SingletonPattern, RangePattern)):
        return []
    if isinstance(pattern, CapturePattern):
        return [*binding_names(pattern.pattern), pattern.name]
    if isinstance(pattern, AlternativePattern):
        return binding_names(pattern.options[0])
    if isinstance(pattern, SequencePattern):
        names: list[str] = []
        for element in pattern.prefix:
            names.extend(binding_names(element))
        if pattern.rest is not None and pattern.rest.name is not None:
            names.append(pattern.rest.name)
        for element in pattern.suffix:
            names.extend(binding_names(element))
        return names
    if isinstance(pattern, AttributePattern):
        names = []
        for _, sub in pattern.attributes:
            names.extend(binding_names(sub))
        return names
    raise TypeError(f"Not a pattern: {type(pattern).__name__}")


# ---------------------------------------------------------------------------
# Rebuild models with recursive Pattern references
# ---------------------------------------------------------------------------

CapturePattern.model_rebuild()
AlternativePattern.model_rebuild()
SequencePattern.model_rebuild()
AttributePattern.model_rebuild()
