"""Authoring helpers: pattern builders, arms, ``try_catch`` and ``CatchBlock``.

These are the Python counterpart of a ``try { ... } catch { type, pattern =>
handler }`` block.  Everything here only builds models; matching happens in
``typedcatch.dispatch``.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from typedcatch.dispatch import Dispatcher, DispatcherConfig
from typedcatch.model.patterns import (
    AlternativePattern,
    AttributePattern,
    CapturePattern,
    LiteralPattern,
    Pattern,
    RangePattern,
    RestCapture,
    SequencePattern,
    SingletonPattern,
    WildcardPattern,
)
from typedcatch.model.table import DispatchArm, DispatchTable
from typedcatch.model.types import TypeTag

from ._compiler import compile_pattern

T = TypeVar("T")

_PATTERN_TYPES = (
    WildcardPattern,
    LiteralPattern,
    SingletonPattern,
    RangePattern,
    CapturePattern,
    AlternativePattern,
    SequencePattern,
    AttributePattern,
)


# ---------------------------------------------------------------------------
# Pattern builders
# ---------------------------------------------------------------------------

def wildcard(name: str | None = None) -> WildcardPattern:
    """``_``, or ``name`` when a name is given."""
    return WildcardPattern(name=name)


def bind(name: str) -> WildcardPattern:
    """Bind the value to *name*."""
    return WildcardPattern(name=name)


def lit(value: object) -> LiteralPattern:
    return LiteralPattern(value=value)


def between(lower: object = None, upper: object = None) -> RangePattern:
    """Inclusive range; pass only one bound for an open range."""
    return RangePattern(lower=lower, upper=upper)


def named(name: str, pattern: object) -> CapturePattern:
    """``name @ pattern``."""
    return CapturePattern(name=name, pattern=_element(pattern))


def alt(*options: object) -> AlternativePattern:
    """``p1 | p2 | ...``.  Plain values become literals (or singletons)."""
    return AlternativePattern(options=[_element(o) for o in options])


def rest(name: str | None = None) -> RestCapture:
    """Rest marker for ``seq``: ``*name``, or ``*_`` when unnamed."""
    return RestCapture(name=name)


def seq(*elements: object) -> SequencePattern:
    """Sequence pattern; at most one ``rest()`` marker, anywhere.

    Plain values become literals::

        seq("this", bind("h"), rest("t"))    # ["this", h, *t]
    """
    prefix: list[Pattern] = []
    suffix: list[Pattern] = []
    marker: RestCapture | None = None
    for element in elements:
        if isinstance(element, RestCapture):
            if marker is not None:
                raise ValueError("at most one rest capture per sequence pattern")
            marker = element
        elif marker is None:
            prefix.append(_element(element))
        else:
            suffix.append(_element(element))
    return SequencePattern(prefix=prefix, rest=marker, suffix=suffix)


def attrs(cls: type | None = None, **attributes: object) -> AttributePattern:
    """Struct-style pattern: ``attrs(Point, x=0, y=bind("y"))``."""
    return AttributePattern(
        cls=cls,
        attributes=[(name, _element(p)) for name, p in attributes.items()],
    )


def _element(value: object) -> Pattern:
    """A pattern model as-is; ``None``/``True``/``False`` as singletons; else a literal."""
    if isinstance(value, _PATTERN_TYPES):
        return value
    if isinstance(value, RestCapture):
        raise ValueError("rest() is only valid directly inside seq()")
    if value is None or isinstance(value, bool):
        return SingletonPattern(value=value)
    return LiteralPattern(value=value)


def as_pattern(pattern: object, namespace: Mapping[str, Any] | None = None) -> Pattern:
    """A pattern model as-is; a string is compiled as ``match`` source."""
    if isinstance(pattern, _PATTERN_TYPES):
        return pattern
    if isinstance(pattern, str):
        return compile_pattern(pattern, namespace)
    raise TypeError(
        f"Expected a pattern model or pattern source, got {type(pattern).__name__}"
    )


# ---------------------------------------------------------------------------
# Arms and blocks
# ---------------------------------------------------------------------------

def arm(
    type_: Any,
    pattern: object,
    handler: Callable[..., Any],
    *,
    namespace: Mapping[str, Any] | None = None,
) -> DispatchArm:
    """Build one ``type, pattern => handler`` arm.

    *type_* is a class, ``list[X]``, ``tuple[X, ...]`` or a ``TypeTag``;
    *pattern* is a pattern model or ``match`` source such as ``'[1, x, *_]'``.
    """
    return DispatchArm(
        tag=TypeTag.of(type_),
        pattern=as_pattern(pattern, namespace),
        handler=handler,
    )


def try_catch(
    protected: Callable[[], T],
    *arms: DispatchArm,
    config: DispatcherConfig | None = None,
) -> T:
    """Run *protected*; dispatch anything it raises to *arms* in order.

    Example::

        result = try_catch(
            lambda: modulo(5, 0),
            arm(str, "message", lambda message: 0),
        )
    """
    return Dispatcher(config).dispatch(protected, DispatchTable(arms=arms))


class CatchBlock:
    """Collects arms by decoration, in declaration order.

    Example::

        errors = CatchBlock()

        @errors.on(int, "code")
        def _(code):
            return code + 12

        @errors.on(list[str], '["this", h, *t]')
        def _(h, t):
            return f"{h}_{t[1]}"

        result = errors.run(lambda: panic_any(62))

    Parameters
    ----------
    config : DispatcherConfig, optional
        Used for every ``run``.
    namespace : Mapping, optional
        Default lookup namespace for pattern source.
    """

    def __init__(
        self,
        *,
        config: DispatcherConfig | None = None,
        namespace: Mapping[str, Any] | None = None,
    ) -> None:
        self._arms: list[DispatchArm] = []
        self._dispatcher = Dispatcher(config)
        self._namespace = dict(namespace or {})

    def on(
        self,
        type_: Any,
        pattern: object = "_",
        *,
        namespace: Mapping[str, Any] | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register the decorated function as the handler of a new arm."""
        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            lookup = namespace if namespace is not None else self._namespace
            self._arms.append(arm(type_, pattern, handler, namespace=lookup))
            return handler
        return decorator

    @property
    def table(self) -> DispatchTable:
        """Snapshot of the arms registered so far."""
        return DispatchTable(arms=tuple(self._arms))

    def run(self, protected: Callable[[], T]) -> T:
        return self._dispatcher.dispatch(protected, self.table)

    def protect(self, func: Callable[..., T]) -> Callable[..., T]:
        """Wrap *func* so every call runs under this block."""
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return self.run(lambda: func(*args, **kwargs))
        return wrapper
