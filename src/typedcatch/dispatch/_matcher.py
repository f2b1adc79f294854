"""Pattern matcher: decides match/no-match and collects bindings.

``PatternMatcher`` walks a pattern tree against a value.  It is stateless,
so one instance serves every arm of every table.  A failed match never
raises; it returns ``None`` and the caller moves on to the next arm.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

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


class DispatchError(Exception):
    """Internal dispatch invariant violated (e.g. an unknown pattern kind)."""


_MISSING = object()

# Sequences that never match a sequence pattern
_ATOMIC_SEQUENCES = (str, bytes, bytearray)


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, _ATOMIC_SEQUENCES)


class PatternMatcher:
    """Tree-walking matcher over ``Pattern`` models."""

    def match(self, pattern: Pattern, value: object) -> dict[str, object] | None:
        """Match *value* against *pattern*.

        Returns the bindings (possibly empty) on a match, ``None`` otherwise.
        """
        bindings: dict[str, object] = {}
        if self._match(pattern, value, bindings):
            return bindings
        return None

    def _match(self, pattern: Pattern, value: object, bindings: dict[str, object]) -> bool:
        handler = self._MATCH_DISPATCH.get(pattern.kind)
        if handler is None:
            raise DispatchError(f"Unsupported pattern kind: {pattern.kind}")
        return handler(self, pattern, value, bindings)

    # -----------------------------------------------------------------------
    # Variants
    # -----------------------------------------------------------------------

    def _match_wildcard(self, pattern: WildcardPattern, value: object, bindings: dict) -> bool:
        if pattern.name is not None:
            bindings[pattern.name] = value
        return True

    def _match_literal(self, pattern: LiteralPattern, value: object, bindings: dict) -> bool:
        return bool(value == pattern.value)

    def _match_singleton(self, pattern: SingletonPattern, value: object, bindings: dict) -> bool:
        return value is pattern.value

    def _match_range(self, pattern: RangePattern, value: object, bindings: dict) -> bool:
        try:
            if pattern.lower is not None and not pattern.lower <= value:
                return False
            if pattern.upper is not None and not value <= pattern.upper:
                return False
        except TypeError:
            # Not comparable with the bounds
            return False
        return True

    def _match_capture(self, pattern: CapturePattern, value: object, bindings: dict) -> bool:
        if not self._match(pattern.pattern, value, bindings):
            return False
        bindings[pattern.name] = value
        return True

    def _match_alternative(self, pattern: AlternativePattern, value: object, bindings: dict) -> bool:
        for option in pattern.options:
            trial: dict[str, object] = {}
            if self._match(option, value, trial):
                bindings.update(trial)
                return True
        return False

    def _match_sequence(self, pattern: SequencePattern, value: object, bindings: dict) -> bool:
        if not _is_sequence(value):
            return False
        items = value if isinstance(value, (list, tuple)) else list(value)

        size = len(items)
        head = len(pattern.prefix)
        if pattern.rest is None:
            if size != head:
                return False
        elif size < pattern.fixed_count:
            return False

        for element, item in zip(pattern.prefix, items):
            if not self._match(element, item, bindings):
                return False
        if pattern.rest is None:
            return True

        stop = size - len(pattern.suffix)
        trailing: dict[str, object] = {}
        for element, item in zip(pattern.suffix, items[stop:]):
            if not self._match(element, item, trailing):
                return False

        if pattern.rest.name is not None:
            bindings[pattern.rest.name] = items[head:stop]
        bindings.update(trailing)
        return True

    def _match_attributes(self, pattern: AttributePattern, value: object, bindings: dict) -> bool:
        if pattern.cls is not None and not isinstance(value, pattern.cls):
            return False
        for attr_name, sub in pattern.attributes:
            attr = getattr(value, attr_name, _MISSING)
            if attr is _MISSING:
                return False
            if not self._match(sub, attr, bindings):
                return False
        return True

    _MATCH_DISPATCH: dict[str, Callable[[PatternMatcher, Pattern, object, dict], bool]] = {
        "wildcard": _match_wildcard,
        "literal": _match_literal,
        "singleton": _match_singleton,
        "range": _match_range,
        "capture": _match_capture,
        "alternative": _match_alternative,
        "sequence": _match_sequence,
        "attributes": _match_attributes,
    }


_DEFAULT_MATCHER = PatternMatcher()


def match_pattern(pattern: Pattern, value: object) -> dict[str, object] | None:
    """Module-level shortcut for ``PatternMatcher().match``."""
    return _DEFAULT_MATCHER.match(pattern, value)
