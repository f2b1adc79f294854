"""Pattern source printer.

Walks pattern models and emits Python ``match`` pattern syntax, the same
syntax ``typedcatch.framework.compile_pattern`` reads.  Range patterns have
no ``match`` spelling and print as ``lower..=upper`` (display only).
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from typedcatch.model.patterns import (
    AlternativePattern,
    AttributePattern,
    CapturePattern,
    LiteralPattern,
    Pattern,
    RangePattern,
    SequencePattern,
    SingletonPattern,
    WildcardPattern,
)
from typedcatch.model.table import DispatchArm, DispatchTable


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def to_pattern_source(pattern: Pattern) -> str:
    """Render a single pattern as ``match`` syntax."""
    return PatternWriter().write(pattern)


def to_arm_source(arm: DispatchArm) -> str:
    """Render one arm as ``type, pattern => handler``."""
    return PatternWriter().write_arm(arm)


def to_table_source(target: Union[DispatchTable, DispatchArm]) -> str:
    """Render a table as one ``type, pattern => handler`` line per arm."""
    w = PatternWriter()
    if isinstance(target, DispatchArm):
        return w.write_arm(target) + "\n"
    if isinstance(target, DispatchTable):
        return "".join(w.write_arm(a) + ",\n" for a in target.arms)
    raise TypeError(
        f"to_table_source() expects DispatchTable or DispatchArm, "
        f"got {type(target).__name__}"
    )


def _literal_source(value: object) -> str:
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    return repr(value)


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


# ---------------------------------------------------------------------------
# PatternWriter
# ---------------------------------------------------------------------------

class PatternWriter:
    """Renders pattern models to source text."""

    def write(self, pattern: Pattern) -> str:
        handler = self._WRITE_DISPATCH.get(pattern.kind)
        if handler is None:
            raise TypeError(f"Unsupported pattern kind: {pattern.kind}")
        return handler(self, pattern)

    def write_arm(self, arm: DispatchArm) -> str:
        return f"{arm.tag.name}, {self.write(arm.pattern)} => {_handler_name(arm.handler)}"

    def _write_grouped(self, pattern: Pattern) -> str:
        # `|` and `as` bind loosely; parenthesize them inside each other
        text = self.write(pattern)
        if isinstance(pattern, (AlternativePattern, CapturePattern)):
            return f"({text})"
        return text

    def _write_wildcard(self, pattern: WildcardPattern) -> str:
        return pattern.name if pattern.name is not None else "_"

    def _write_literal(self, pattern: LiteralPattern) -> str:
        return _literal_source(pattern.value)

    def _write_singleton(self, pattern: SingletonPattern) -> str:
        return repr(pattern.value)

    def _write_range(self, pattern: RangePattern) -> str:
        lower = "" if pattern.lower is None else _literal_source(pattern.lower)
        upper = "" if pattern.upper is None else "=" + _literal_source(pattern.upper)
        return f"{lower}..{upper}"

    def _write_capture(self, pattern: CapturePattern) -> str:
        return f"{self._write_grouped(pattern.pattern)} as {pattern.name}"

    def _write_alternative(self, pattern: AlternativePattern) -> str:
        return " | ".join(self._write_grouped(o) for o in pattern.options)

    def _write_sequence(self, pattern: SequencePattern) -> str:
        parts = [self.write(p) for p in pattern.prefix]
        if pattern.rest is not None:
            parts.append(f"*{pattern.rest.name or '_'}")
            parts.extend(self.write(p) for p in pattern.suffix)
        return "[" + ", ".join(parts) + "]"

    def _write_attributes(self, pattern: AttributePattern) -> str:
        cls_name = pattern.cls.__name__ if pattern.cls is not None else "object"
        fields = ", ".join(
            f"{name}={self.write(sub)}" for name, sub in pattern.attributes
        )
        return f"{cls_name}({fields})"

    _WRITE_DISPATCH = {
        "wildcard": _write_wildcard,
        "literal": _write_literal,
        "singleton": _write_singleton,
        "range": _write_range,
        "capture": _write_capture,
        "alternative": _write_alternative,
        "sequence": _write_sequence,
        "attributes": _write_attributes,
    }
