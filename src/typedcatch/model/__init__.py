"""Data model for typed catch dispatch: tags, patterns, arms, tables."""

from .patterns import (
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
    binding_names,
)
from .table import DispatchArm, DispatchTable
from .types import TypeTag

__all__ = [
    "AlternativePattern",
    "AttributePattern",
    "CapturePattern",
    "DispatchArm",
    "DispatchTable",
    "LiteralPattern",
    "Pattern",
    "RangePattern",
    "RestCapture",
    "SequencePattern",
    "SingletonPattern",
    "TypeTag",
    "WildcardPattern",
    "binding_names",
]
