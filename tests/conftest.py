"""Shared test helpers for the typedcatch test suite."""

from dataclasses import dataclass

from typedcatch.dispatch import panic_any
from typedcatch.model import DispatchTable


def raising(payload):
    """A zero-argument callable that raises *payload* via ``panic_any``."""
    def protected():
        panic_any(payload)
    return protected


def make_table(*arms):
    """Build a DispatchTable from arms in declaration order."""
    return DispatchTable(arms=arms)


def must_not_run(**bindings):
    """Handler for arms that a test expects never to be invoked."""
    raise AssertionError(f"handler should not run (bindings={bindings})")


@dataclass
class Point:
    x: int
    y: int
