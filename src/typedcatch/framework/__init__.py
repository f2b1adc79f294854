"""typedcatch authoring API.

Users import everything from this single flat namespace::

    from typedcatch.framework import try_catch, arm, panic_any, CatchBlock
"""

from typedcatch.dispatch import Panic, panic_any

from ._builders import (
    CatchBlock,
    alt,
    arm,
    as_pattern,
    attrs,
    between,
    bind,
    lit,
    named,
    rest,
    seq,
    try_catch,
    wildcard,
)

from ._compiler import (
    CompileError,
    compile_pattern,
)

__all__ = [
    # Raising
    "Panic",
    "panic_any",
    # Blocks
    "CatchBlock",
    "arm",
    "try_catch",
    # Pattern builders
    "alt",
    "as_pattern",
    "attrs",
    "between",
    "bind",
    "lit",
    "named",
    "rest",
    "seq",
    "wildcard",
    # Pattern source
    "CompileError",
    "compile_pattern",
]
