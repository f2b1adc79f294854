"""Pattern compiler: transforms Python ``match`` pattern source into models.

Patterns are written exactly as they would appear after ``case``::

    compile_pattern('["this", h, *t]')
    compile_pattern("0 | 1 | 2")
    compile_pattern("Point(x=0, y=y)", {"Point": Point})

The source is parsed (via ``ast.parse``), never executed.  Names used as
values (``Color.RED``) and class names resolve through the caller's
namespace, then builtins.

Key concepts:

- **CompileContext**: the source text, the lookup namespace and the line
  offset of the source inside the parsed wrapper.
- **PatternCompiler**: dispatch-table compiler mapping ``ast.pattern``
  node types to handler methods.
"""

from __future__ import annotations

import ast
import builtins
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from typedcatch.model.patterns import (
    AlternativePattern,
    AttributePattern,
    CapturePattern,
    LiteralPattern,
    Pattern,
    RestCapture,
    SequencePattern,
    SingletonPattern,
    WildcardPattern,
)


# ---------------------------------------------------------------------------
# CompileError
# ---------------------------------------------------------------------------

class CompileError(Exception):
    """Error compiling pattern source, with the offending location."""

    def __init__(
        self,
        message: str,
        node: ast.AST | None = None,
        ctx: CompileContext | None = None,
        *,
        line: int | None = None,
        column: int | None = None,
    ):
        self.source_line = line
        self.source_column = column
        if node is not None and ctx is not None:
            lineno = getattr(node, "lineno", None)
            if lineno is not None:
                self.source_line = lineno - ctx.source_line_offset
                self.source_column = getattr(node, "col_offset", 0) + 1
        loc = ""
        if self.source_line is not None:
            loc = f" (line {self.source_line}, column {self.source_column})"
        super().__init__(f"{message}{loc}")


# ---------------------------------------------------------------------------
# CompileContext
# ---------------------------------------------------------------------------

# The source is spliced between the parentheses of a single case clause,
# so it may span lines.  It starts on line 3 of the wrapper.
_WRAPPER = "match _:\n    case (\n{source}\n    ):\n        pass\n"

# "... opening parenthesis '[' on line 3" names a wrapper line
_WRAPPER_LINE_REF = re.compile(r" on line \d+")


@dataclass
class CompileContext:
    """State carried through compilation of one pattern."""

    source: str
    namespace: Mapping[str, Any] = field(default_factory=dict)
    source_line_offset: int = 2

    def resolve(self, dotted: list[str], node: ast.AST) -> Any:
        """Look up ``a.b.c`` in the namespace, then in builtins."""
        head, *attrs = dotted
        if head in self.namespace:
            obj = self.namespace[head]
        elif hasattr(builtins, head):
            obj = getattr(builtins, head)
        else:
            raise CompileError(f"Cannot resolve name '{head}'", node, self)
        for attr in attrs:
            try:
                obj = getattr(obj, attr)
            except AttributeError:
                raise CompileError(
                    f"Cannot resolve '{'.'.join(dotted)}'", node, self,
                ) from None
        return obj


def _dotted_name(node: ast.expr) -> list[str] | None:
    """``a.b.c`` as ``["a", "b", "c"]``; None for anything else."""
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    parts.append(node.id)
    return parts[::-1]


# ---------------------------------------------------------------------------
# PatternCompiler
# ---------------------------------------------------------------------------

class PatternCompiler:
    """Compiles ``ast.pattern`` nodes into pattern models."""

    def __init__(self, ctx: CompileContext) -> None:
        self.ctx = ctx

    # -----------------------------------------------------------------------
    # Public entry points
    # -----------------------------------------------------------------------

    def compile_source(self) -> Pattern:
        """Parse ``ctx.source`` and compile its single pattern."""
        if not self.ctx.source.strip():
            raise CompileError("Empty pattern source")
        try:
            tree = ast.parse(_WRAPPER.format(source=self.ctx.source))
        except SyntaxError as exc:
            raise self._syntax_error(exc) from None

        match_stmt = tree.body[0] if len(tree.body) == 1 else None
        if not isinstance(match_stmt, ast.Match) or len(match_stmt.cases) != 1:
            raise CompileError("Pattern source must contain exactly one pattern")
        case = match_stmt.cases[0]
        if case.guard is not None:
            raise CompileError("Guards are not supported in catch patterns", case.guard, self.ctx)
        return self.compile_pattern(case.pattern)

    def compile_pattern(self, node: ast.pattern) -> Pattern:
        handler = self._PATTERN_HANDLERS.get(type(node))
        if handler is None:
            raise CompileError(
                f"Unsupported pattern syntax: {type(node).__name__}",
                node, self.ctx,
            )
        return handler(self, node)

    def _syntax_error(self, exc: SyntaxError) -> CompileError:
        """Re-locate a wrapper ``SyntaxError`` inside the user's source.

        Errors the parser only notices on the wrapper's closing lines are
        reported at the end of the last source line.
        """
        message = _WRAPPER_LINE_REF.sub("", exc.msg)
        if exc.lineno is None:
            return CompileError(f"Invalid pattern syntax: {message}")
        lines = self.ctx.source.splitlines() or [""]
        line = exc.lineno - self.ctx.source_line_offset
        column = exc.offset or 1
        if line > len(lines):
            line, column = len(lines), len(lines[-1]) + 1
        elif line < 1:
            line, column = 1, 1
        return CompileError(f"Invalid pattern syntax: {message}", line=line, column=column)

    def _build(self, model: type[BaseModel], node: ast.AST, **fields: Any) -> Any:
        """Construct a pattern model, reporting validation errors at *node*."""
        try:
            return model(**fields)
        except ValidationError as exc:
            messages = "; ".join(e["msg"] for e in exc.errors())
            raise CompileError(messages, node, self.ctx) from None

    # -----------------------------------------------------------------------
    # Handlers
    # -----------------------------------------------------------------------

    def _compile_value(self, node: ast.MatchValue) -> Pattern:
        dotted = _dotted_name(node.value)
        if dotted is not None:
            return self._build(LiteralPattern, node, value=self.ctx.resolve(dotted, node))
        try:
            value = ast.literal_eval(node.value)
        except ValueError:
            raise CompileError("Unsupported value pattern", node, self.ctx) from None
        return self._build(LiteralPattern, node, value=value)

    def _compile_singleton(self, node: ast.MatchSingleton) -> Pattern:
        return self._build(SingletonPattern, node, value=node.value)

    def _compile_as(self, node: ast.MatchAs) -> Pattern:
        if node.pattern is None:
            return self._build(WildcardPattern, node, name=node.name)
        inner = self.compile_pattern(node.pattern)
        return self._build(CapturePattern, node, name=node.name, pattern=inner)

    def _compile_or(self, node: ast.MatchOr) -> Pattern:
        options = [self.compile_pattern(p) for p in node.patterns]
        return self._build(AlternativePattern, node, options=options)

    def _compile_sequence(self, node: ast.MatchSequence) -> Pattern:
        prefix: list[Pattern] = []
        suffix: list[Pattern] = []
        rest: RestCapture | None = None
        for element in node.patterns:
            if isinstance(element, ast.MatchStar):
                if rest is not None:
                    raise CompileError(
                        "Multiple starred names in sequence pattern", element, self.ctx,
                    )
                rest = RestCapture(name=element.name)
            elif rest is None:
                prefix.append(self.compile_pattern(element))
            else:
                suffix.append(self.compile_pattern(element))
        return self._build(SequencePattern, node, prefix=prefix, rest=rest, suffix=suffix)

    def _compile_class(self, node: ast.MatchClass) -> Pattern:
        if node.patterns:
            raise CompileError(
                "Positional class patterns are not supported; "
                "use keyword patterns (Point(x=..., y=...))",
                node, self.ctx,
            )
        dotted = _dotted_name(node.cls)
        if dotted is None:
            raise CompileError("Class pattern needs a dotted name", node, self.ctx)
        cls = self.ctx.resolve(dotted, node)
        if not isinstance(cls, type):
            raise CompileError(f"'{'.'.join(dotted)}' is not a class", node, self.ctx)
        attributes = [
            (name, self.compile_pattern(p))
            for name, p in zip(node.kwd_attrs, node.kwd_patterns)
        ]
        return self._build(
            AttributePattern, node,
            cls=None if cls is object else cls,
            attributes=attributes,
        )

    def _compile_mapping(self, node: ast.MatchMapping) -> Pattern:
        raise CompileError(
            "Mapping patterns are not supported in catch patterns", node, self.ctx,
        )

    _PATTERN_HANDLERS: dict[type[ast.pattern], Callable[[PatternCompiler, ast.pattern], Pattern]] = {
        ast.MatchValue: _compile_value,
        ast.MatchSingleton: _compile_singleton,
        ast.MatchAs: _compile_as,
        ast.MatchOr: _compile_or,
        ast.MatchSequence: _compile_sequence,
        ast.MatchClass: _compile_class,
        ast.MatchMapping: _compile_mapping,
    }


def compile_pattern(source: str, namespace: Mapping[str, Any] | None = None) -> Pattern:
    """Compile ``match`` pattern source into a pattern model.

    Raises ``CompileError`` for syntax errors, unsupported constructs,
    unresolvable names and authoring errors such as a name bound twice.
    """
    ctx = CompileContext(source=source, namespace=namespace or {})
    return PatternCompiler(ctx).compile_source()
