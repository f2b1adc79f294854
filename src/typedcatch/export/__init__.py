"""typedcatch export: source text from dispatch models.

Public API::

    from typedcatch.export import to_pattern_source, to_table_source
    text = to_table_source(table)
"""

from .source import to_arm_source, to_pattern_source, to_table_source

__all__ = ["to_arm_source", "to_pattern_source", "to_table_source"]
